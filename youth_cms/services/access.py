"""
Branch-scoped data access rules.

A superadmin may act on any branch: an explicit branch id narrows the
operation, no id means unscoped. An admin may only act on the branch
embedded in its token; any requested branch id is ignored.
"""

import logging

from sqlalchemy import Select, delete, func, select
from sqlalchemy.orm import Session

from youth_cms.models import Branch, Event, User, UserRole
from youth_cms.schemas.auth import SessionPrincipal

logger = logging.getLogger(__name__)


class AccessRuleError(Exception):
    """Base for data access failures; status_code is the HTTP equivalent."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BranchScopeError(AccessRuleError):
    """Raised when an operation needs a branch and the caller cannot supply one."""

    status_code = 400


class BranchNotFoundError(AccessRuleError):
    status_code = 404

    def __init__(self, branch_id: int) -> None:
        self.branch_id = branch_id
        super().__init__("Branch not found")


class BranchInUseError(AccessRuleError):
    """Raised when a branch still has admins or events and cannot be deleted."""

    status_code = 409

    def __init__(self, admins_count: int, events_count: int) -> None:
        self.admins_count = admins_count
        self.events_count = events_count
        super().__init__("Branch still has linked admins or events")


def branch_scope(principal: SessionPrincipal, requested_branch_id: int | None) -> int | None:
    """
    Return the branch the caller may act on, or None for unscoped (superadmin only).

    Raises BranchScopeError for an admin without an assigned branch.
    """
    if principal.is_superadmin:
        return requested_branch_id
    if principal.branch_id is None:
        raise BranchScopeError("Admin has no assigned branch")
    return principal.branch_id


def require_branch_scope(principal: SessionPrincipal, requested_branch_id: int | None) -> int:
    """Like branch_scope, but the operation targets exactly one branch."""
    scope = branch_scope(principal, requested_branch_id)
    if scope is None:
        raise BranchScopeError("Branch is required")
    return scope


def scope_events(stmt: Select, scope: int | None) -> Select:
    """Restrict an events query to scope; None leaves it unrestricted."""
    if scope is None:
        return stmt
    return stmt.where(Event.branch_id == scope)


def ensure_branch_exists(db: Session, branch_id: int) -> Branch:
    branch = db.get(Branch, branch_id)
    if branch is None:
        raise BranchNotFoundError(branch_id)
    return branch


def count_branch_relations(db: Session, branch_id: int) -> tuple[int, int]:
    """Return (admins_count, events_count) for branch_id."""
    admins_count = db.scalar(
        select(func.count(User.id)).where(
            User.branch_id == branch_id,
            User.role == UserRole.ADMIN.value,
        )
    )
    events_count = db.scalar(
        select(func.count(Event.id)).where(Event.branch_id == branch_id)
    )
    return (admins_count or 0, events_count or 0)


def delete_branch(db: Session, branch_id: int) -> None:
    """
    Delete a branch only if no admin account and no event references it.

    The dependency check and the delete are one statement, so a concurrent
    insert cannot slip in between them. Raises BranchNotFoundError or
    BranchInUseError when nothing was deleted.
    """
    has_admins = (
        select(User.id)
        .where(User.branch_id == branch_id, User.role == UserRole.ADMIN.value)
        .exists()
    )
    has_events = select(Event.id).where(Event.branch_id == branch_id).exists()
    result = db.execute(
        delete(Branch)
        .where(Branch.id == branch_id, ~has_admins, ~has_events)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount:
        logger.info("Deleted branch id=%s", branch_id)
        return

    ensure_branch_exists(db, branch_id)
    admins_count, events_count = count_branch_relations(db, branch_id)
    logger.info(
        "Refused to delete branch id=%s: admins=%s events=%s",
        branch_id,
        admins_count,
        events_count,
    )
    raise BranchInUseError(admins_count, events_count)
