"""Request/response schemas for branch endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from youth_cms.schemas.common import RequiredText, ShortText, clean_optional_link


class BranchContactUpdate(BaseModel):
    """Contact details an admin may edit on its own branch."""

    address: RequiredText
    phone: ShortText
    whatsapp: ShortText
    facebook: str | None = None
    telegram: str | None = None
    instagram: str | None = None

    @field_validator("facebook", "telegram", "instagram")
    @classmethod
    def validate_links(cls, v: str | None) -> str | None:
        return clean_optional_link(v)


class BranchInput(BranchContactUpdate):
    """Full branch record as created or replaced by a superadmin."""

    name: ShortText
    governorate: ShortText


class BranchRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    governorate: str
    address: str
    phone: str
    whatsapp: str
    facebook: str | None = None
    telegram: str | None = None
    instagram: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BranchWithCounts(BranchRead):
    """Branch row plus how many admins and events still reference it."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    admins_count: int = Field(0, alias="adminsCount")
    events_count: int = Field(0, alias="eventsCount")


class BranchResponse(BaseModel):
    item: BranchRead


class BranchListResponse(BaseModel):
    items: list[BranchRead]


class BranchWithCountsListResponse(BaseModel):
    items: list[BranchWithCounts]


class BranchRelations(BaseModel):
    """Dependents that block deletion of a branch."""

    model_config = ConfigDict(populate_by_name=True)

    admins_count: int = Field(..., alias="adminsCount")
    events_count: int = Field(..., alias="eventsCount")


class BranchRelationsResponse(BaseModel):
    item: BranchRelations
