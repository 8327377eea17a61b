"""Auth dependencies (bearer token -> claims, role gate) and shared route helpers."""

from collections.abc import Callable
from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from youth_cms.core.config import Settings, get_settings
from youth_cms.core.security import verify_token
from youth_cms.models.user import UserRole
from youth_cms.schemas.auth import SessionClaims
from youth_cms.services.access import AccessRuleError, BranchInUseError
from youth_cms.services.storage import LocalObjectStorage, ObjectStorage

security = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionClaims:
    """
    Dependency: require a valid Bearer token and return its claims.

    Raises 401 if the header is missing or malformed, and the same generic
    401 for forged, tampered and expired tokens alike.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_BEARER_CHALLENGE,
        )
    claims = verify_token(credentials.credentials, settings.JWT_SECRET.get_secret_value())
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_BEARER_CHALLENGE,
        )
    return claims


def require_roles(*roles: UserRole) -> Callable[..., SessionClaims]:
    """Build a dependency that allows only callers whose role is in roles (403 otherwise)."""
    allowed = frozenset(roles)

    def dependency(
        claims: Annotated[SessionClaims, Depends(get_current_claims)],
    ) -> SessionClaims:
        if claims.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return claims

    return dependency


require_dashboard_user = require_roles(UserRole.ADMIN, UserRole.SUPERADMIN)
require_superadmin = require_roles(UserRole.SUPERADMIN)


def get_object_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ObjectStorage:
    return LocalObjectStorage(settings.MEDIA_ROOT, settings.MEDIA_URL_PREFIX)


def raise_access_error(e: AccessRuleError) -> NoReturn:
    """Translate a data access rule failure into the matching HTTP error."""
    if isinstance(e, BranchInUseError):
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "message": e.message,
                "adminsCount": e.admins_count,
                "eventsCount": e.events_count,
            },
        ) from e
    raise HTTPException(status_code=e.status_code, detail=e.message) from e
