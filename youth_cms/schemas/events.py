"""Request/response schemas for event endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from youth_cms.schemas.common import RequiredText, ShortText


class EventInput(BaseModel):
    """
    Event fields supplied by an admin.

    imageUrl is an absolute http(s) URL or a site-relative path such as the
    one returned by the upload endpoint.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: ShortText
    image_url: RequiredText = Field(..., alias="imageUrl")
    announcement: RequiredText
    event_date: datetime = Field(..., alias="eventDate")
    location: ShortText

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        lowered = v.lower()
        if lowered.startswith(("http://", "https://")):
            return v
        if v.startswith("/") and not v.startswith("//"):
            return v
        raise ValueError("imageUrl must be an http(s) URL or a path starting with '/'")


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    branch_id: int
    title: str
    image_url: str
    announcement: str
    event_date: datetime
    location: str
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    branch_name: str | None = None
    branch_governorate: str | None = None


class EventResponse(BaseModel):
    item: EventRead


class EventListResponse(BaseModel):
    items: list[EventRead]
