"""Password hashing and session token issuing/verification for authentication."""

import base64
import hashlib
import hmac
import re
from datetime import UTC, datetime

import bcrypt
import jwt

from youth_cms.core.config import DEFAULT_JWT_TTL_SECONDS
from youth_cms.schemas.auth import SessionClaims, SessionPrincipal

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

JWT_ALGORITHM = "HS256"

# Accounts imported from the first deployment store sha256(prefix + password) as hex.
LEGACY_DIGEST_PREFIX = "youth-affairs::"
_LEGACY_DIGEST_RE = re.compile(r"[0-9a-f]{64}")

_jws = jwt.PyJWS(algorithms=[JWT_ALGORITHM])


def _bcrypt_input(plain_password: str) -> bytes:
    # Pre-hash so passwords longer than bcrypt's 72-byte limit stay significant.
    digest = hashlib.sha256(plain_password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def _is_legacy_digest(hashed: str) -> bool:
    return _LEGACY_DIGEST_RE.fullmatch(hashed) is not None


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_bcrypt_input(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (bcrypt or legacy digest)."""
    if _is_legacy_digest(hashed):
        computed = hashlib.sha256(
            f"{LEGACY_DIGEST_PREFIX}{plain_password}".encode("utf-8")
        ).hexdigest()
        return hmac.compare_digest(computed, hashed)
    try:
        return bcrypt.checkpw(_bcrypt_input(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def needs_rehash(hashed: str) -> bool:
    """True when the stored hash uses the legacy digest and should be upgraded."""
    return _is_legacy_digest(hashed)


def _now_seconds() -> int:
    return int(datetime.now(UTC).timestamp())


def issue_token(
    principal: SessionPrincipal,
    secret: str,
    ttl_seconds: int = DEFAULT_JWT_TTL_SECONDS,
    *,
    now: int | None = None,
) -> str:
    """
    Sign a session token for principal that expires ttl_seconds from now.

    Wire format: base64url(header).base64url(body).base64url(HMAC-SHA256),
    header {"alg":"HS256","typ":"JWT"}, body {sub, username, role, branchId, exp}.
    """
    issued_at = _now_seconds() if now is None else now
    claims = SessionClaims(
        sub=principal.sub,
        username=principal.username,
        role=principal.role,
        branch_id=principal.branch_id,
        exp=issued_at + ttl_seconds,
    )
    body = claims.model_dump_json(by_alias=True).encode("utf-8")
    return _jws.encode(body, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str, *, now: int | None = None) -> SessionClaims | None:
    """
    Return the claims of a valid, unexpired token signed with secret, else None.

    Never raises: malformed input, a bad signature, an unexpected body and an
    expired token all yield None.
    """
    if not isinstance(token, str):
        return None
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return None
    try:
        body = _jws.decode(token, secret, algorithms=[JWT_ALGORITHM])
        claims = SessionClaims.model_validate_json(body)
    except (jwt.PyJWTError, ValueError, TypeError):
        return None
    current = _now_seconds() if now is None else now
    if claims.exp < current:
        return None
    return claims
