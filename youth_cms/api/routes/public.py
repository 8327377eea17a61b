"""Read-only endpoints for the public website (no authentication)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from youth_cms.core.database import get_db
from youth_cms.models import SiteContent
from youth_cms.models.site_content import SITE_CONTENT_ID
from youth_cms.schemas.branches import BranchListResponse, BranchRead
from youth_cms.schemas.content import SiteContentRead, SiteContentResponse
from youth_cms.schemas.events import EventListResponse, EventResponse
from youth_cms.services.branches import list_branches
from youth_cms.services.events import get_public_event, list_public_events

router = APIRouter()


@router.get("/branches", response_model=BranchListResponse)
def get_branches(db: Annotated[Session, Depends(get_db)]) -> BranchListResponse:
    """All branches ordered by governorate."""
    return BranchListResponse(
        items=[BranchRead.model_validate(b) for b in list_branches(db)]
    )


@router.get("/events", response_model=EventListResponse)
def get_events(
    db: Annotated[Session, Depends(get_db)],
    branch_id: Annotated[int | None, Query(alias="branchId", gt=0)] = None,
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
) -> EventListResponse:
    """Events newest first, filtered by branch, year and month when given."""
    return EventListResponse(
        items=list_public_events(db, branch_id=branch_id, year=year, month=month)
    )


@router.get("/events/{event_id}", response_model=EventResponse)
def get_event(
    event_id: Annotated[int, Path(gt=0)],
    db: Annotated[Session, Depends(get_db)],
) -> EventResponse:
    item = get_public_event(db, event_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventResponse(item=item)


@router.get("/content", response_model=SiteContentResponse)
def get_content(db: Annotated[Session, Depends(get_db)]) -> SiteContentResponse:
    """Organization copy shown on the landing page."""
    content = db.get(SiteContent, SITE_CONTENT_ID)
    if content is None:
        raise HTTPException(status_code=404, detail="Site content not found")
    return SiteContentResponse(item=SiteContentRead.model_validate(content))
