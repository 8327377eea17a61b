"""Request/response schemas for auth endpoints and the session claims record."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from youth_cms.models.user import UserRole


class SessionPrincipal(BaseModel):
    """
    Who the caller is: the claims carried by a session token, minus expiry.

    Closed record: unknown fields are rejected and branchId must be present
    (null for superadmins).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    sub: StrictInt = Field(..., gt=0, description="Account id")
    username: StrictStr = Field(..., min_length=1, max_length=255)
    role: UserRole
    branch_id: StrictInt | None = Field(..., alias="branchId")

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN


class SessionClaims(SessionPrincipal):
    """Decoded token body; exp is Unix epoch seconds."""

    exp: StrictInt

    def principal(self) -> SessionPrincipal:
        return SessionPrincipal(
            sub=self.sub,
            username=self.username,
            role=self.role,
            branch_id=self.branch_id,
        )


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginUser(BaseModel):
    """Account summary returned alongside a fresh token."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    display_name: str = Field(..., serialization_alias="displayName")
    role: UserRole
    branch_id: int | None = Field(..., serialization_alias="branchId")


class LoginResponse(BaseModel):
    """Session token returned after successful login."""

    token: str = Field(..., description="Bearer token for the Authorization header")
    user: LoginUser


class MeResponse(BaseModel):
    """Authenticated caller as seen by the token."""

    user: SessionPrincipal
