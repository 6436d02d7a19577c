"""Centralized application settings using pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
# Look for .env in the backend directory or project root
env_path = Path(__file__).parent.parent.parent / ".env"
if not env_path.exists():
    env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


class Settings(BaseSettings):
    """Environment-aware configuration (storage backend, limits, UI timings)."""

    # Application settings
    app_name: str = "Product Manager"
    log_level: str = "INFO"

    # Blob store settings
    storage_backend: Literal["file", "redis", "memory"] = Field(
        default="file",
        description="Where the product list snapshot is kept",
    )
    storage_dir: str = Field(
        default="storage/data",
        description="Directory for file-backed snapshots (absolute or relative path)",
    )
    storage_key: str = Field(
        default="products",
        description="Blob store key holding the serialized product list",
    )
    max_blob_bytes: int = Field(
        default=5 * 1024 * 1024,
        gt=0,
        description="Largest snapshot the store accepts on write",
    )

    # Redis settings
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    redis_key_prefix: str = "product-manager:"

    # Notification settings
    notification_ttl_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Seconds before a notification dismisses itself",
    )

    # CORS settings - stored as string, converted to list via property
    cors_origins_raw: str | None = Field(
        default=None,
        validation_alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if self.cors_origins_raw is None or not self.cors_origins_raw.strip():
            return list(DEFAULT_CORS_ORIGINS)
        origins = [
            origin.strip().rstrip("/")
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
        return origins if origins else list(DEFAULT_CORS_ORIGINS)

    @field_validator("storage_dir", mode="after")
    @classmethod
    def resolve_storage_dir(cls, v: str) -> str:
        """Resolve storage_dir to an absolute path relative to the backend directory."""
        path = Path(v)
        if not path.is_absolute():
            backend_dir = Path(__file__).parent.parent.parent
            path = (backend_dir / v).resolve()
        else:
            path = path.resolve()
        return str(path)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str:
        """Accept lowercase level names from the environment."""
        if not v:
            return "INFO"
        return str(v).strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Provide singleton-like access for dependency injection."""
    return Settings()
