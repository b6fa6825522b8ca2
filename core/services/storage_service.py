# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Object storage adapter for report media. Files are written from disk paths
# so large videos are streamed by the HTTP client rather than loaded whole.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from uuid import uuid4

from supabase import Client

from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredMedia:
    """A file accepted by the upload pipeline and written to storage."""

    field: str
    key: str
    location: str
    content_type: str
    size: int


def build_media_key(field: str, filename: str | None) -> str:
    """
    Build a collision-free storage key for an uploaded file.

    Example:
        build_media_key("image", "front.JPG") -> "reports/images/3f2a...c1.jpg"
    """
    _, ext = os.path.splitext(filename or "")
    ext = ext.lower() if ext and len(ext) <= 10 else ""
    return f"reports/{field}s/{uuid4().hex}{ext}"


class StorageService:
    """
    Service for Supabase Storage operations on the report media bucket.
    """

    def __init__(self, client: Client, bucket: str, region: str):
        self.client = client
        self.bucket = bucket
        self.region = region

    def upload_file(
        self,
        field: str,
        path: str,
        filename: str | None,
        content_type: str,
        size: int,
    ) -> StoredMedia:
        """
        Upload a file from a local path and resolve its public URL.

        Args:
            field: Form field the file came from ("image" or "video")
            path: Local path of the spooled file
            filename: Client-supplied filename (only the extension is kept)
            content_type: Declared MIME type
            size: File size in bytes

        Returns:
            StoredMedia with the storage key and public location

        Raises:
            StorageUploadError: If the write or URL lookup fails
        """
        key = build_media_key(field, filename)
        bucket = self.client.storage.from_(self.bucket)

        try:
            bucket.upload(
                path=key,
                file=path,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            location = bucket.get_public_url(key)
        except Exception as e:
            logger.error(f"Storage upload failed for {key}: {e}")
            raise StorageUploadError(key, str(e))

        logger.info(f"Uploaded {field} to storage: {key} ({size} bytes, {self.region})")
        return StoredMedia(
            field=field,
            key=key,
            location=location,
            content_type=content_type,
            size=size,
        )

    def delete_files(self, keys: list[str]) -> bool:
        """
        Delete files from storage.

        Used to clean up media whose report was never persisted. Failures
        are logged and reported as False; they never mask the original error.
        """
        if not keys:
            return True

        try:
            self.client.storage.from_(self.bucket).remove(keys)
            logger.info(f"Deleted {len(keys)} file(s) from storage: {keys}")
            return True
        except Exception as e:
            logger.error(f"Failed to delete files {keys}: {e}")
            return False
