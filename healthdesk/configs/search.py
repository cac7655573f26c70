"""
Web search configuration.

Dependencies: pydantic, pydantic_settings
System role: Google Programmable Search settings for medical cost lookups
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    """Google Programmable Search settings."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SEARCH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Google API key")
    engine_id: str = Field(default="", description="Programmable search engine ID (cx)")
    num_results: int = Field(default=5, description="Results requested per query", ge=1, le=10)
