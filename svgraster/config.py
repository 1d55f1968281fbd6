from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from svgraster.core.constants import (
    DEFAULT_BROWSER,
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_PROBE_HEIGHT,
    DEFAULT_SOURCE_EXTENSION,
    MIN_CONCURRENCY_LIMIT,
    SUPPORTED_BROWSERS,
)


class Settings(BaseSettings):
    # Batch Processing
    concurrency_limit: int = Field(
        default=DEFAULT_CONCURRENCY_LIMIT,
        description="Maximum number of renderer pages open at once",
    )
    probe_height: float = Field(
        default=DEFAULT_PROBE_HEIGHT,
        description="Height in px used to discover each image's native geometry",
    )

    # File Processing
    source_extension: str = Field(
        default=DEFAULT_SOURCE_EXTENSION,
        description="Extension of source files picked up from a directory",
    )
    output_extension: str = Field(
        default=DEFAULT_OUTPUT_EXTENSION,
        description="Extension of generated raster files",
    )

    # Renderer
    browser_type: str = Field(
        default=DEFAULT_BROWSER, description="Playwright browser to launch"
    )
    headless: bool = Field(default=True, description="Launch the browser headless")
    navigation_timeout_ms: Optional[float] = Field(
        default=DEFAULT_NAVIGATION_TIMEOUT_MS,
        description="Default timeout for page operations in milliseconds",
    )
    omit_background: bool = Field(
        default=True, description="Render with a transparent background"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit logs as JSON")
    log_page_console: bool = Field(
        default=False, description="Forward page console messages to the log"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SVGRASTER_",
        extra="ignore",
    )

    @field_validator("concurrency_limit")
    @classmethod
    def validate_concurrency_limit(cls, v):
        if v < MIN_CONCURRENCY_LIMIT:
            raise ValueError(
                f"concurrency_limit must be at least {MIN_CONCURRENCY_LIMIT}"
            )
        return v

    @field_validator("probe_height")
    @classmethod
    def validate_probe_height(cls, v):
        if v <= 0:
            raise ValueError("probe_height must be positive")
        return v

    @field_validator("source_extension", "output_extension")
    @classmethod
    def normalize_extension(cls, v):
        """Accept extensions with or without the leading dot."""
        v = v.strip()
        if not v:
            raise ValueError("extension must not be empty")
        return v if v.startswith(".") else f".{v}"

    @field_validator("browser_type")
    @classmethod
    def validate_browser_type(cls, v):
        v = v.lower()
        if v not in SUPPORTED_BROWSERS:
            raise ValueError(f"browser_type must be one of {list(SUPPORTED_BROWSERS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


settings = Settings()
