"""Configuration settings for motoflash.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the MOTOFLASH_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOTOFLASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # External tool
    tool: str = Field(
        default="mfastboot",
        min_length=1,
        description="Flashing executable invoked for each step",
    )

    # Flashing document
    flashing_filename: str = Field(
        default="servicefile.xml",
        min_length=1,
        description="Flashing document name, relative to the firmware directory",
    )

    # Verification
    digest_algorithm: Literal["md5", "sha1", "sha256"] = Field(
        default="md5",
        description="Digest algorithm for image integrity checks",
    )
    read_block_size: int = Field(
        default=8192,
        ge=512,
        le=16 * 1024 * 1024,
        description="Read buffer size in bytes used while hashing images",
    )
    skip_integrity_check: bool = Field(
        default=False,
        description="Skip digest verification of image files",
    )

    # Operational modes
    dry_run: bool = Field(
        default=False,
        description="Log flashing commands without running them",
    )
    verbose_logging: bool = Field(
        default=False,
        description="Dump the parsed flashing document before running",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
