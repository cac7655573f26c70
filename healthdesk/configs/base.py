"""
Server-level configuration.

Holds the settings the HTTP process itself needs (log level, bind address,
CORS) and the shared ``.env`` loading that Settings inherits.

Dependencies: pydantic_settings
System role: Root of the Settings aggregate
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process settings read from the environment or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    host: str = Field(default="0.0.0.0", description="uvicorn bind host")
    port: int = Field(default=8000, ge=1, le=65535, description="uvicorn bind port")
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
