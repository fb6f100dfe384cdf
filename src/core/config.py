"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Builder settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Canvas
    grid_size: int = Field(default=20, ge=5, le=100, description="Snap grid step (px)")
    snap_enabled: bool = Field(default=True, description="Snap positions to the grid")
    duplicate_offset: int = Field(default=20, description="Offset applied to duplicated roots")

    # History
    max_history: int | None = Field(
        default=None, gt=0, description="Max undo depth (None = unbounded)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Caching
    enable_cache: bool = Field(default=True, description="Enable export result caching")
    cache_size: int = Field(default=64, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=600, gt=0, description="Cache TTL (seconds)")

    # Export
    export_workers: int = Field(default=1, ge=1, le=32, description="Export thread pool size")
    default_target: str = Field(default="react", description="Default export target")
    project_name: str = Field(default="page-builder-export", description="Exported package name")

    # Validation
    max_document_size: int = Field(default=2 * 1024 * 1024, gt=0, description="Max document JSON size")
    max_tree_depth: int = Field(default=32, gt=0, description="Max element nesting depth")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
