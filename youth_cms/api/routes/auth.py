"""Login and token introspection."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from youth_cms.api.deps import get_current_claims
from youth_cms.core.config import Settings, get_settings
from youth_cms.core.database import get_db
from youth_cms.core.security import issue_token
from youth_cms.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MeResponse,
    SessionClaims,
    SessionPrincipal,
)
from youth_cms.services.accounts import authenticate

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate(db, body.username, body.password)
    if user is None:
        logger.info("Failed login for username=%s", body.username.strip())
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    principal = SessionPrincipal(
        sub=user.id,
        username=user.username,
        role=user.role,
        branch_id=user.branch_id,
    )
    token = issue_token(
        principal,
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_TTL_SECONDS,
    )
    return LoginResponse(
        token=token,
        user=LoginUser(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            role=user.role,
            branch_id=user.branch_id,
        ),
    )


@router.get("/me", response_model=MeResponse)
def me(claims: Annotated[SessionClaims, Depends(get_current_claims)]) -> MeResponse:
    """Return the caller as recorded in its token (no database lookup)."""
    return MeResponse(user=claims.principal())
