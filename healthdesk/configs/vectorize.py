"""
Vectorize.io configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Managed retrieval pipeline and file-upload connector settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorizeSettings(BaseSettings):
    """Vectorize.io pipeline settings."""

    model_config = SettingsConfigDict(
        env_prefix="VECTORIZE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://api.vectorize.io/v1",
        description="Vectorize.io REST API base URL",
    )
    organization_id: str = Field(default="", description="Vectorize.io organization ID")
    pipeline_id: str = Field(default="", description="Retrieval pipeline ID")
    access_token: str = Field(default="", description="Pipeline access token")
    upload_connector_id: str = Field(
        default="medical_insurance_booklet",
        description="File-upload connector receiving user documents",
    )
    num_results: int = Field(default=5, description="Documents requested per retrieval", ge=1)
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds", gt=0)

    @property
    def is_configured(self) -> bool:
        """Return True when organization, pipeline and token are all set."""
        return bool(self.organization_id and self.pipeline_id and self.access_token)
