"""Pydantic schemas for the image upload endpoint."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Where an accepted image was stored."""

    key: str = Field(..., description="Object key, namespaced by branch")
    url: str = Field(..., description="URL to use as an event imageUrl")
    content_type: str = Field(..., description="Accepted MIME type")
    size: int = Field(..., ge=0, description="Stored size in bytes")
