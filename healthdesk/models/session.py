"""
Session request/response models.

JSON field names are camelCase to match the frontend contract.

Dependencies: pydantic
System role: Session API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field

from healthdesk.models.common import CamelModel


class SessionConfig(CamelModel):
    """
    Session clearing policy.

    Only "all" and "none" are implemented; any other clear method is
    rejected when the config is validated.
    """

    clear_on_start: bool = Field(default=True, description="Clear documents on initialization")
    clear_method: Literal["all", "none"] = Field(default="all", description="Clearing strategy")


class SessionInfo(CamelModel):
    """Current session state."""

    session_id: str = Field(description="session_{epoch_ms}_{suffix}")
    document_count: int = Field(description="Live vector count from the index")
    config: SessionConfig
    uptime_ms: int = Field(description="Milliseconds since the session was created")


class SessionActionRequest(BaseModel):
    """POST /api/session body."""

    action: str = Field(description="initialize, clear or info")
    config: SessionConfig | None = None
