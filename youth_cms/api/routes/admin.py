"""
Branch dashboard endpoints for admins and superadmins.

Admins always act on the branch in their token. Superadmins pass the
target branch as ?branchId=, and may omit it when listing or editing
events to work across every branch.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from youth_cms.api.deps import raise_access_error, require_dashboard_user
from youth_cms.core.database import get_db
from youth_cms.models import Branch
from youth_cms.schemas.auth import MeResponse, SessionClaims
from youth_cms.schemas.branches import BranchContactUpdate, BranchRead, BranchResponse
from youth_cms.schemas.common import CreatedResponse, OkResponse
from youth_cms.schemas.events import EventInput, EventListResponse
from youth_cms.services import events as event_service
from youth_cms.services.access import AccessRuleError, branch_scope, require_branch_scope
from youth_cms.services.branches import update_branch_contact

router = APIRouter(dependencies=[Depends(require_dashboard_user)])

Caller = Annotated[SessionClaims, Depends(require_dashboard_user)]
RequestedBranch = Annotated[int | None, Query(alias="branchId", gt=0)]


@router.get("/me", response_model=MeResponse)
def get_me(claims: Caller) -> MeResponse:
    return MeResponse(user=claims.principal())


@router.get("/branch", response_model=BranchResponse)
def get_branch(
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> BranchResponse:
    """The caller's branch (or ?branchId= for superadmins)."""
    try:
        scope = require_branch_scope(claims, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    branch = db.get(Branch, scope)
    if branch is None:
        raise HTTPException(status_code=404, detail="Branch not found")
    return BranchResponse(item=BranchRead.model_validate(branch))


@router.put("/branch", response_model=OkResponse)
def put_branch(
    body: BranchContactUpdate,
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> OkResponse:
    """Update address, phone numbers and social links of the branch in scope."""
    try:
        scope = require_branch_scope(claims, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    update_branch_contact(db, scope, body)
    return OkResponse()


@router.get("/events", response_model=EventListResponse)
def get_events(
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> EventListResponse:
    try:
        scope = branch_scope(claims, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    return EventListResponse(items=event_service.list_events(db, scope))


@router.post("/events", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def post_event(
    body: EventInput,
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> CreatedResponse:
    """Publish an event for the branch in scope; created_by is the caller."""
    try:
        scope = require_branch_scope(claims, branch_id)
        event = event_service.create_event(db, scope, body, created_by=claims.sub)
    except AccessRuleError as e:
        raise_access_error(e)
    return CreatedResponse(id=event.id)


@router.put("/events/{event_id}", response_model=OkResponse)
def put_event(
    event_id: Annotated[int, Path(gt=0)],
    body: EventInput,
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> OkResponse:
    """
    Replace an event's fields. For admins the event must belong to their
    branch; otherwise nothing changes.
    """
    try:
        scope = branch_scope(claims, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    event_service.update_event(db, event_id, scope, body)
    return OkResponse()


@router.delete("/events/{event_id}", response_model=OkResponse)
def delete_event(
    event_id: Annotated[int, Path(gt=0)],
    claims: Caller,
    db: Annotated[Session, Depends(get_db)],
    branch_id: RequestedBranch = None,
) -> OkResponse:
    try:
        scope = branch_scope(claims, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    event_service.delete_event(db, event_id, scope)
    return OkResponse()
