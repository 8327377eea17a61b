"""Pydantic request/response schemas."""

from youth_cms.schemas.admins import (
    AdminBranchUpdate,
    AdminCreate,
    AdminListResponse,
    AdminRead,
)
from youth_cms.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MeResponse,
    SessionClaims,
    SessionPrincipal,
)
from youth_cms.schemas.branches import (
    BranchContactUpdate,
    BranchInput,
    BranchListResponse,
    BranchRead,
    BranchRelations,
    BranchRelationsResponse,
    BranchResponse,
    BranchWithCounts,
    BranchWithCountsListResponse,
)
from youth_cms.schemas.common import CreatedResponse, OkResponse
from youth_cms.schemas.content import SiteContentRead, SiteContentResponse
from youth_cms.schemas.events import EventInput, EventListResponse, EventRead, EventResponse
from youth_cms.schemas.health import HealthResponse
from youth_cms.schemas.upload import UploadResponse

__all__ = [
    "AdminBranchUpdate",
    "AdminCreate",
    "AdminListResponse",
    "AdminRead",
    "BranchContactUpdate",
    "BranchInput",
    "BranchListResponse",
    "BranchRead",
    "BranchRelations",
    "BranchRelationsResponse",
    "BranchResponse",
    "BranchWithCounts",
    "BranchWithCountsListResponse",
    "CreatedResponse",
    "EventInput",
    "EventListResponse",
    "EventRead",
    "EventResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MeResponse",
    "OkResponse",
    "SessionClaims",
    "SessionPrincipal",
    "SiteContentRead",
    "SiteContentResponse",
    "UploadResponse",
]
