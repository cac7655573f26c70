"""
Shared response envelopes.

Every JSON body the frontend reads carries a top-level ``success`` flag,
followed by either ``data``, ``message`` or ``error``. Field names are
camelCase on the wire.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(BaseModel, Generic[T]):
    """``{"success": true, "data": ...}``"""

    success: bool = True
    data: T


class MessageResponse(BaseModel):
    """Acknowledgement for mutations that return no payload."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """``{"success": false, "error": ...}``"""

    success: bool = False
    error: str = Field(description="Human-readable failure reason")
