"""Upload endpoint: accept an event image and store it under the caller's branch."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from youth_cms.api.deps import get_object_storage, raise_access_error, require_dashboard_user
from youth_cms.core.database import get_db
from youth_cms.schemas.auth import SessionClaims
from youth_cms.schemas.upload import UploadResponse
from youth_cms.services.access import AccessRuleError, ensure_branch_exists, require_branch_scope
from youth_cms.services.storage import (
    MAX_IMAGE_BYTES,
    ObjectStorage,
    StorageError,
    UploadRejectedError,
    store_branch_image,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    claims: Annotated[SessionClaims, Depends(require_dashboard_user)],
    storage: Annotated[ObjectStorage, Depends(get_object_storage)],
    db: Annotated[Session, Depends(get_db)],
    file: Annotated[UploadFile, File(description="JPEG, PNG or WebP image, at most 5 MB")],
    branch_id: Annotated[int | None, Query(alias="branchId", gt=0)] = None,
) -> UploadResponse:
    """
    Store an image for use as an event imageUrl.

    Send `multipart/form-data` with a field named `file`. The object key is
    namespaced by branch (branches/<id>/...), so branches never overwrite
    each other's images. The branch must exist, and type and size are checked
    before anything is written.
    """
    try:
        scope = require_branch_scope(claims, branch_id)
        ensure_branch_exists(db, scope)
    except AccessRuleError as e:
        raise_access_error(e)

    # One byte past the limit is enough to know the file is too large.
    data = await file.read(MAX_IMAGE_BYTES + 1)
    try:
        stored = store_branch_image(storage, scope, file.content_type, data)
    except UploadRejectedError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except StorageError as e:
        logger.error("Image upload failed for branch_id=%s: %s", scope, e.message)
        raise HTTPException(status_code=502, detail="Could not store the image") from e
    return UploadResponse(
        key=stored.key,
        url=stored.url,
        content_type=stored.content_type,
        size=stored.size,
    )
