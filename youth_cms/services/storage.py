"""Image upload into branch-namespaced object storage."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MB
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class UploadRejectedError(Exception):
    """Raised when an upload fails the type or size checks; nothing was written."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class StorageError(Exception):
    """Raised when the storage backend could not persist an object."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


@dataclass(frozen=True)
class StoredObject:
    key: str
    url: str
    content_type: str
    size: int


class ObjectStorage:
    """Interface for object stores: put bytes under a key, get back a public URL."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError


class LocalObjectStorage(ObjectStorage):
    """Stores objects as files under root; urls are url_prefix + '/' + key."""

    def __init__(self, root: str | Path, url_prefix: str) -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise StorageError(f"Key escapes storage root: {key}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Could not write object {key}", cause=e) from e
        return f"{self.url_prefix}/{key}"


def _sniff_image_type(data: bytes) -> str | None:
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def validate_image(content_type: str | None, data: bytes) -> str:
    """
    Return the normalized MIME type of an acceptable image.

    Raises UploadRejectedError for a type outside the allow-list, content
    that does not match the declared type, an empty file or one over
    MAX_IMAGE_BYTES.
    """
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared not in ALLOWED_IMAGE_TYPES:
        raise UploadRejectedError(
            "Only JPEG, PNG and WebP images are allowed.", status_code=415
        )
    if not data:
        raise UploadRejectedError("Uploaded file is empty.")
    if len(data) > MAX_IMAGE_BYTES:
        raise UploadRejectedError(
            f"File size must not exceed {MAX_IMAGE_BYTES // (1024 * 1024)} MB.",
            status_code=413,
        )
    if _sniff_image_type(data) != declared:
        raise UploadRejectedError(
            "File content does not match its declared type.", status_code=415
        )
    return declared


def branch_object_key(branch_id: int, content_type: str) -> str:
    """Fresh key inside the branch's namespace, e.g. branches/7/<uuid>.png."""
    return f"branches/{branch_id}/{uuid.uuid4().hex}.{ALLOWED_IMAGE_TYPES[content_type]}"


def store_branch_image(
    storage: ObjectStorage,
    branch_id: int,
    content_type: str | None,
    data: bytes,
) -> StoredObject:
    """Validate an image and write it under the branch's key namespace."""
    mime = validate_image(content_type, data)
    key = branch_object_key(branch_id, mime)
    url = storage.put(key, data, mime)
    logger.info("Stored image key=%s size=%s", key, len(data))
    return StoredObject(key=key, url=url, content_type=mime, size=len(data))
