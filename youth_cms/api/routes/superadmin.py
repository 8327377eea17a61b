"""Superadmin endpoints: manage branches and branch admin accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from youth_cms.api.deps import raise_access_error, require_superadmin
from youth_cms.core.database import get_db
from youth_cms.schemas.admins import AdminBranchUpdate, AdminCreate, AdminListResponse
from youth_cms.schemas.branches import (
    BranchInput,
    BranchRelations,
    BranchRelationsResponse,
    BranchWithCountsListResponse,
)
from youth_cms.schemas.common import CreatedResponse, OkResponse
from youth_cms.services import accounts, branches
from youth_cms.services.access import (
    AccessRuleError,
    count_branch_relations,
    delete_branch,
    ensure_branch_exists,
)

router = APIRouter(dependencies=[Depends(require_superadmin)])

BranchId = Annotated[int, Path(gt=0)]
UserId = Annotated[int, Path(gt=0)]


@router.get("/branches", response_model=BranchWithCountsListResponse)
def get_branches(db: Annotated[Session, Depends(get_db)]) -> BranchWithCountsListResponse:
    """All branches with how many admins and events reference each."""
    return BranchWithCountsListResponse(items=branches.list_branches_with_counts(db))


@router.post("/branches", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def post_branch(
    body: BranchInput,
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    branch = branches.create_branch(db, body)
    return CreatedResponse(id=branch.id)


@router.put("/branches/{branch_id}", response_model=OkResponse)
def put_branch(
    branch_id: BranchId,
    body: BranchInput,
    db: Annotated[Session, Depends(get_db)],
) -> OkResponse:
    branches.update_branch(db, branch_id, body)
    return OkResponse()


@router.get("/branches/{branch_id}/relations", response_model=BranchRelationsResponse)
def get_branch_relations(
    branch_id: BranchId,
    db: Annotated[Session, Depends(get_db)],
) -> BranchRelationsResponse:
    """Counts shown before deleting a branch; deletion needs both at zero."""
    try:
        ensure_branch_exists(db, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    admins_count, events_count = count_branch_relations(db, branch_id)
    return BranchRelationsResponse(
        item=BranchRelations(admins_count=admins_count, events_count=events_count)
    )


@router.delete("/branches/{branch_id}", response_model=OkResponse)
def remove_branch(
    branch_id: BranchId,
    db: Annotated[Session, Depends(get_db)],
) -> OkResponse:
    """
    Delete a branch that has no admins and no events.
    Returns 409 with adminsCount and eventsCount otherwise.
    """
    try:
        delete_branch(db, branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    return OkResponse()


@router.get("/admins", response_model=AdminListResponse)
def get_admins(db: Annotated[Session, Depends(get_db)]) -> AdminListResponse:
    """All accounts (superadmins first) with their branch name."""
    return AdminListResponse(items=accounts.list_accounts(db))


@router.post("/admins", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def post_admin(
    body: AdminCreate,
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    """Create a branch admin. 409 if the username is taken, 404 for an unknown branch."""
    try:
        user = accounts.create_admin(db, body)
    except accounts.UsernameTakenError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except AccessRuleError as e:
        raise_access_error(e)
    return CreatedResponse(id=user.id)


@router.put("/admins/{user_id}/branch", response_model=OkResponse)
def put_admin_branch(
    user_id: UserId,
    body: AdminBranchUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> OkResponse:
    try:
        accounts.set_admin_branch(db, user_id, body.branch_id)
    except AccessRuleError as e:
        raise_access_error(e)
    return OkResponse()


@router.delete("/admins/{user_id}", response_model=OkResponse)
def delete_admin(
    user_id: UserId,
    db: Annotated[Session, Depends(get_db)],
) -> OkResponse:
    """Delete an admin account; superadmin accounts cannot be deleted here."""
    accounts.delete_admin(db, user_id)
    return OkResponse()
