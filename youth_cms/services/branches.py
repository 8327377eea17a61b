"""Branch queries and updates."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from youth_cms.models import Branch, Event, User, UserRole
from youth_cms.schemas.branches import BranchContactUpdate, BranchInput, BranchWithCounts

logger = logging.getLogger(__name__)


def list_branches(db: Session) -> list[Branch]:
    return list(db.scalars(select(Branch).order_by(Branch.governorate.asc(), Branch.id.asc())))


def list_branches_with_counts(db: Session) -> list[BranchWithCounts]:
    """Every branch with its admin and event counts, for the superadmin dashboard."""
    admins = (
        select(User.branch_id, func.count(User.id).label("n"))
        .where(User.role == UserRole.ADMIN.value)
        .group_by(User.branch_id)
        .subquery()
    )
    events = (
        select(Event.branch_id, func.count(Event.id).label("n"))
        .group_by(Event.branch_id)
        .subquery()
    )
    stmt = (
        select(
            Branch,
            func.coalesce(admins.c.n, 0),
            func.coalesce(events.c.n, 0),
        )
        .outerjoin(admins, admins.c.branch_id == Branch.id)
        .outerjoin(events, events.c.branch_id == Branch.id)
        .order_by(Branch.governorate.asc(), Branch.id.asc())
    )
    items = []
    for branch, admins_count, events_count in db.execute(stmt).all():
        item = BranchWithCounts.model_validate(branch)
        items.append(
            item.model_copy(update={"admins_count": admins_count, "events_count": events_count})
        )
    return items


def create_branch(db: Session, data: BranchInput) -> Branch:
    branch = Branch(**data.model_dump())
    db.add(branch)
    db.commit()
    db.refresh(branch)
    logger.info("Created branch id=%s name=%s", branch.id, branch.name)
    return branch


def update_branch(db: Session, branch_id: int, data: BranchInput) -> int:
    """Replace every editable field of a branch; returns rows affected."""
    result = db.execute(
        update(Branch)
        .where(Branch.id == branch_id)
        .values(**data.model_dump())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount


def update_branch_contact(db: Session, branch_id: int, data: BranchContactUpdate) -> int:
    """Update the contact fields an admin is allowed to edit; returns rows affected."""
    result = db.execute(
        update(Branch)
        .where(Branch.id == branch_id)
        .values(**data.model_dump())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount
