"""Event queries and branch-scoped event mutations."""

import logging

from sqlalchemy import delete, extract, select, update
from sqlalchemy.orm import Session

from youth_cms.models import Branch, Event
from youth_cms.schemas.events import EventInput, EventRead
from youth_cms.services.access import ensure_branch_exists, scope_events

logger = logging.getLogger(__name__)


def _events_with_branch():
    return (
        select(
            Event,
            Branch.name.label("branch_name"),
            Branch.governorate.label("branch_governorate"),
        )
        .join(Branch, Branch.id == Event.branch_id)
        .order_by(Event.event_date.desc(), Event.id.desc())
    )


def _to_read(row) -> EventRead:
    event, branch_name, branch_governorate = row
    item = EventRead.model_validate(event)
    return item.model_copy(
        update={"branch_name": branch_name, "branch_governorate": branch_governorate}
    )


def list_public_events(
    db: Session,
    branch_id: int | None = None,
    year: int | None = None,
    month: int | None = None,
) -> list[EventRead]:
    """All events, newest first, optionally filtered by branch, year and month."""
    stmt = _events_with_branch()
    if branch_id is not None:
        stmt = stmt.where(Event.branch_id == branch_id)
    if year is not None:
        stmt = stmt.where(extract("year", Event.event_date) == year)
    if month is not None:
        stmt = stmt.where(extract("month", Event.event_date) == month)
    return [_to_read(row) for row in db.execute(stmt).all()]


def get_public_event(db: Session, event_id: int) -> EventRead | None:
    row = db.execute(_events_with_branch().where(Event.id == event_id)).first()
    return _to_read(row) if row is not None else None


def list_events(db: Session, scope: int | None) -> list[EventRead]:
    """Events visible to a dashboard caller; scope None means every branch."""
    stmt = scope_events(_events_with_branch(), scope)
    return [_to_read(row) for row in db.execute(stmt).all()]


def create_event(db: Session, branch_id: int, data: EventInput, created_by: int) -> Event:
    """Insert an event for branch_id, recording the publishing account."""
    ensure_branch_exists(db, branch_id)
    event = Event(
        branch_id=branch_id,
        title=data.title,
        image_url=data.image_url,
        announcement=data.announcement,
        event_date=data.event_date,
        location=data.location,
        created_by=created_by,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(
        "Created event id=%s branch_id=%s created_by=%s",
        event.id,
        branch_id,
        created_by,
    )
    return event


def update_event(db: Session, event_id: int, scope: int | None, data: EventInput) -> int:
    """
    Overwrite an event's fields; returns the number of rows affected.

    With a scope the row must also belong to that branch, so a guessed id
    from another branch matches nothing.
    """
    stmt = (
        update(Event)
        .where(Event.id == event_id)
        .values(
            title=data.title,
            image_url=data.image_url,
            announcement=data.announcement,
            event_date=data.event_date,
            location=data.location,
        )
        .execution_options(synchronize_session=False)
    )
    if scope is not None:
        stmt = stmt.where(Event.branch_id == scope)
    result = db.execute(stmt)
    db.commit()
    return result.rowcount


def delete_event(db: Session, event_id: int, scope: int | None) -> int:
    """Delete an event (within scope when given); returns rows affected."""
    stmt = delete(Event).where(Event.id == event_id).execution_options(
        synchronize_session=False
    )
    if scope is not None:
        stmt = stmt.where(Event.branch_id == scope)
    result = db.execute(stmt)
    db.commit()
    if result.rowcount:
        logger.info("Deleted event id=%s scope=%s", event_id, scope)
    return result.rowcount
