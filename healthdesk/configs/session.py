"""
Session lifecycle configuration.

Dependencies: pydantic, pydantic_settings
System role: Start-up clearing policy for the document session
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSettings(BaseSettings):
    """Document session settings."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    clear_on_start: bool = Field(
        default=True,
        description="Clear the vector index when a session is initialized",
    )
    clear_method: Literal["all", "none"] = Field(
        default="all",
        description="Clearing strategy applied on initialization",
    )
