"""
Binding configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import os
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BindingConfig(BaseSettings):
    """
    Configuration management for request parameter binding.
    """

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default=os.path.join(os.path.dirname(__file__), "core", "webbind_log.yaml"),
        description="Logging definition file path (bundled with the package by default)",
    )

    # Resolution behavior
    USE_DEFAULT_RESOLUTION: bool = Field(
        default=True, description="Bind unannotated simple-typed parameters by name"
    )
    TRIM_EMPTY_STRINGS: bool = Field(
        default=False, description="Trim string values and convert empty ones to None"
    )

    # Multipart handling
    MULTIPART_ENABLED: bool = Field(
        default=True, description="Parse multipart uploads into uploaded files"
    )
    MAX_FORM_FILES: int = Field(default=1000, description="Max files per multipart request")
    MAX_FORM_FIELDS: int = Field(default=1000, description="Max fields per form request")

    # FastAPI settings
    root_path: str = Field(default="", description="API root path (for proxy)")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = BindingConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
