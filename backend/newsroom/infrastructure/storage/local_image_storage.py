"""Local filesystem storage for featured images.

Storage layout:
    <upload_dir>/articles/<YYYY>/<MM>/<random hex>.<ext>

The returned public path mirrors it under ``url_prefix``
(``/uploads/articles/2024/05/3f9c….jpg``).
"""

import io
import logging
import secrets
from pathlib import Path

from PIL import Image

from newsroom.application.interfaces import ImageStorage, ImageUpload
from newsroom.domain.clock import Clock, utc_now

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class LocalImageStorage(ImageStorage):
    """Infrastructure adapter: validates, downsizes and stores images on disk.

    The MIME type is taken from the decoded image, never from the client's
    ``Content-Type`` header.
    """

    def __init__(
        self,
        upload_dir: str,
        *,
        url_prefix: str = "/uploads",
        max_bytes: int = 5 * 1024 * 1024,
        allowed_types: list[str] | tuple[str, ...] = tuple(_EXTENSIONS),
        max_width: int = 1600,
        max_height: int = 900,
        clock: Clock = utc_now,
    ):
        self._upload_dir = Path(upload_dir)
        self._url_prefix = url_prefix.rstrip("/")
        self._max_bytes = max_bytes
        self._allowed_types = {t for t in allowed_types if t in _EXTENSIONS}
        self._max_size = (max_width, max_height)
        self._clock = clock

    async def store_image(self, upload: ImageUpload) -> str | None:
        if not upload.content:
            return None
        if len(upload.content) > self._max_bytes:
            logger.warning(
                "Rejected image '%s': %d bytes exceeds %d", upload.filename, len(upload.content), self._max_bytes
            )
            return None

        try:
            with Image.open(io.BytesIO(upload.content)) as image:
                image_format = image.format
                mime_type = Image.MIME.get(image_format or "")
                if mime_type not in self._allowed_types:
                    logger.warning("Rejected image '%s': type %s not allowed", upload.filename, mime_type)
                    return None

                now = self._clock()
                relative_dir = Path("articles") / f"{now:%Y}" / f"{now:%m}"
                target_dir = self._upload_dir / relative_dir
                target_dir.mkdir(parents=True, exist_ok=True)

                filename = f"{secrets.token_hex(16)}.{_EXTENSIONS[mime_type]}"
                dest_path = target_dir / filename

                if image.width > self._max_size[0] or image.height > self._max_size[1]:
                    original = image.size
                    image.thumbnail(self._max_size, Image.Resampling.LANCZOS)
                    save_options = {"quality": 85} if image_format in ("JPEG", "WEBP") else {}
                    image.save(dest_path, format=image_format, **save_options)
                    logger.info("Resized image %s → %s: %s", original, image.size, dest_path)
                else:
                    dest_path.write_bytes(upload.content)
                    logger.info("Stored image: %s (%d bytes)", dest_path, len(upload.content))
        except (OSError, Image.DecompressionBombError) as exc:
            logger.warning("Could not process image '%s': %s", upload.filename, exc)
            return None

        return f"{self._url_prefix}/{relative_dir.as_posix()}/{filename}"

    async def discard(self, public_path: str) -> bool:
        prefix = f"{self._url_prefix}/"
        if not public_path.startswith(prefix):
            return False
        root = self._upload_dir.resolve()
        target = (root / public_path.removeprefix(prefix)).resolve()
        if not target.is_relative_to(root) or not target.is_file():
            logger.warning("Not discarding '%s': outside upload dir or missing", public_path)
            return False
        target.unlink()
        logger.info("Discarded image: %s", target)
        return True
