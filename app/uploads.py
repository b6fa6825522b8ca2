# =============================================================================
# app/uploads.py - Report Media Upload Pipeline
# =============================================================================
# FastAPI dependency that runs before the report controller:
#
#   1. Parse the multipart form (files spool to temp storage, not memory)
#   2. Reject unexpected file fields and repeated files
#   3. Check each file's declared type and size against its field's rule
#   4. Stream accepted files to object storage
#   5. Hand the text fields and stored media to the controller
#
# Every file is checked before any storage write, so a rejected request
# leaves nothing behind in the bucket.
# =============================================================================

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field

from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.config import Settings
from app.dependencies import get_storage_service
from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    UnexpectedFileFieldError,
)
from core.services.storage_service import StorageService, StoredMedia

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class MediaRule:
    """What a media form field accepts."""

    field: str
    type_prefix: str
    max_size: int


def media_rules(settings: Settings) -> dict[str, MediaRule]:
    return {
        "image": MediaRule("image", "image/", settings.MAX_IMAGE_SIZE_BYTES),
        "video": MediaRule("video", "video/", settings.MAX_VIDEO_SIZE_BYTES),
    }


@dataclass
class ReportUpload:
    """Text fields of the submission plus the media already in storage."""

    fields: dict[str, str] = field(default_factory=dict)
    image: StoredMedia | None = None
    video: StoredMedia | None = None

    @property
    def stored_keys(self) -> list[str]:
        return [media.key for media in (self.image, self.video) if media is not None]


# =============================================================================
# Helper Functions
# =============================================================================

def _file_size(upload: UploadFile) -> int:
    f = upload.file
    position = f.tell()
    f.seek(0, os.SEEK_END)
    size = f.tell()
    f.seek(position)
    return size


def _is_empty_part(upload: UploadFile, size: int) -> bool:
    """Browsers send an unnamed, empty part for a file input left blank."""
    return not upload.filename and size == 0


def check_media(upload: UploadFile, rule: MediaRule) -> int:
    """
    Validate one file against its field rule.

    Returns:
        The file size in bytes

    Raises:
        InvalidFileTypeError: Declared type is outside the field's family
        FileTooLargeError: File exceeds the field's ceiling
    """
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith(rule.type_prefix):
        raise InvalidFileTypeError(rule.field, upload.content_type)

    size = _file_size(upload)
    if size > rule.max_size:
        raise FileTooLargeError(rule.field, size, rule.max_size)
    return size


def _store(storage: StorageService, upload: UploadFile, rule: MediaRule, size: int) -> StoredMedia:
    """Copy the spooled part to a named temp file in chunks, then upload it."""
    upload.file.seek(0)
    tmp = tempfile.NamedTemporaryFile(prefix="ovasight-", delete=False)
    try:
        with tmp:
            shutil.copyfileobj(upload.file, tmp, CHUNK_SIZE)
        return storage.upload_file(
            field=rule.field,
            path=tmp.name,
            filename=upload.filename,
            content_type=upload.content_type or "application/octet-stream",
            size=size,
        )
    finally:
        os.unlink(tmp.name)


# =============================================================================
# Dependency
# =============================================================================

async def receive_report_upload(
    request: Request,
    storage: StorageService = Depends(get_storage_service),
) -> ReportUpload:
    """
    Validate and store the `image` / `video` parts of a report submission.

    Presence of the image is left to the controller so that a missing image
    is reported before any other field problem.
    """
    settings: Settings = request.app.state.settings
    rules = media_rules(settings)

    form = await request.form(max_files=len(rules) + 2, max_fields=50)

    result = ReportUpload()
    pending: list[tuple[UploadFile, MediaRule, int]] = []
    seen: set[str] = set()

    for name, value in form.multi_items():
        if not isinstance(value, UploadFile):
            result.fields.setdefault(name, value)
            continue

        rule = rules.get(name)
        if rule is None:
            raise UnexpectedFileFieldError(name)

        if _is_empty_part(value, _file_size(value)):
            continue
        size = check_media(value, rule)
        if name in seen:
            raise UnexpectedFileFieldError(name)
        seen.add(name)
        pending.append((value, rule, size))

    try:
        for upload, rule, size in pending:
            stored = await run_in_threadpool(_store, storage, upload, rule, size)
            setattr(result, rule.field, stored)
    except Exception:
        if result.stored_keys:
            await run_in_threadpool(storage.delete_files, result.stored_keys)
        raise

    return result
