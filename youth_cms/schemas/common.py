"""Shared field types and small response envelopes."""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ShortText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]

ALLOWED_LINK_SCHEMES = ("http://", "https://")


def clean_optional_link(value: str | None) -> str | None:
    """Trim an optional link; blank becomes None, anything else must be http(s)."""
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    if not s.lower().startswith(ALLOWED_LINK_SCHEMES):
        raise ValueError("Links must use http or https (e.g. https://t.me/branch)")
    return s


class OkResponse(BaseModel):
    ok: bool = True


class CreatedResponse(BaseModel):
    """Acknowledgement for a created row."""

    ok: bool = True
    id: int = Field(..., description="Primary key of the new row")
