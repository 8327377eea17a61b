"""Request/response schemas for superadmin account management."""

from pydantic import BaseModel, ConfigDict, Field

from youth_cms.models.user import UserRole
from youth_cms.schemas.common import ShortText


class AdminCreate(BaseModel):
    """New branch admin account."""

    model_config = ConfigDict(populate_by_name=True)

    username: ShortText
    display_name: ShortText = Field(..., alias="displayName")
    password: str = Field(..., min_length=8, max_length=128)
    branch_id: int = Field(..., alias="branchId", gt=0)


class AdminBranchUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    branch_id: int = Field(..., alias="branchId", gt=0)


class AdminRead(BaseModel):
    """Account row for the superadmin list (no password hash)."""

    id: int
    username: str
    display_name: str
    role: UserRole
    branch_id: int | None = None
    branch_name: str | None = None


class AdminListResponse(BaseModel):
    items: list[AdminRead]
