"""
Document upload response models.

Dependencies: pydantic
System role: Upload API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Successful upload summary."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    chunks: int = Field(description="Chunks stored")
    characters: int = Field(description="Characters of extracted text")
    processing_time: int = Field(alias="processingTime", description="Elapsed seconds")


class UploadErrorResponse(BaseModel):
    """Failed upload body."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    processing_time: int | None = Field(default=None, alias="processingTime")
