"""Abstract interface (port) for featured-image uploads."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ImageUpload:
    """Raw uploaded file as received from the HTTP layer."""

    content: bytes
    filename: str
    content_type: str | None = None


class ImageStorage(ABC):
    """Port for image storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def store_image(self, upload: ImageUpload) -> str | None:
        """Validate, store and (if oversized) downscale an uploaded image.

        Returns:
            The public path of the stored image, or None when the upload is
            rejected (size, MIME type) or cannot be processed.
        """
        ...

    @abstractmethod
    async def discard(self, public_path: str) -> bool:
        """Remove an image previously returned by ``store_image``.

        Returns True if a file was removed. Paths outside the storage are ignored.
        """
        ...
