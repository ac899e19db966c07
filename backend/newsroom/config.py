import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Newsroom CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    app_name: str = "Dunrovin Group"
    app_url: str = "https://dunrovingroup.com"
    app_tagline: str = "Clarity. Depth. Authority."
    database_url: str = "sqlite:///./newsroom.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Sessions / admin
    secret_key: str = "change-me-in-production"
    session_cookie_name: str = "dg_sess"
    session_max_age: int = 7200
    admin_path: str = "admin"

    # Pagination
    articles_per_page: int = 10
    admin_per_page: int = 20

    # Media
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_mb: int = 5
    allowed_image_types: list[str] = ["image/jpeg", "image/png", "image/webp"]
    image_max_width: int = 1600
    image_max_height: int = 900

    # Login rate limiting
    max_login_attempts: int = 5
    lockout_minutes: int = 15

    # SEO
    seo_separator: str = " | "
    default_meta_desc: str = (
        "Dunrovin Group: authoritative long-form journalism, analysis, and editorial reporting."
    )

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_content: str = "INFO"          # article lifecycle services
    log_level_auth: str = "INFO"             # login / lockout events

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    def model_post_init(self, __context: object) -> None:
        """Normalise the public base URL so paths can be appended safely."""
        object.__setattr__(self, "app_url", self.app_url.rstrip("/"))
        if self.is_production and self.secret_key == "change-me-in-production":
            _config_logger.warning("SECRET_KEY is using the development default in production")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
