# =============================================================================
# tests/test_uploads.py - Media Check Unit Tests
# =============================================================================

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from app.exceptions import FileTooLargeError, InvalidFileTypeError
from app.uploads import MediaRule, ReportUpload, check_media
from core.services.storage_service import StoredMedia

IMAGE_RULE = MediaRule("image", "image/", max_size=10)
VIDEO_RULE = MediaRule("video", "video/", max_size=100)


def _upload(content: bytes, content_type: str | None, filename: str = "file.bin") -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(content), filename=filename, headers=headers)


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/png", "IMAGE/HEIC"])
def test_accepts_any_image_subtype(content_type):
    assert check_media(_upload(b"12345", content_type), IMAGE_RULE) == 5


@pytest.mark.parametrize("content_type", ["video/mp4", "application/pdf", "text/plain", None])
def test_rejects_other_types_for_image(content_type):
    with pytest.raises(InvalidFileTypeError) as exc_info:
        check_media(_upload(b"1", content_type), IMAGE_RULE)

    assert exc_info.value.message == "Invalid file type. Only images and videos are allowed."


def test_image_in_video_field_is_rejected():
    with pytest.raises(InvalidFileTypeError):
        check_media(_upload(b"1", "image/png"), VIDEO_RULE)


def test_size_at_limit_is_accepted():
    assert check_media(_upload(b"x" * 10, "image/png"), IMAGE_RULE) == 10


def test_size_over_limit_is_rejected():
    with pytest.raises(FileTooLargeError) as exc_info:
        check_media(_upload(b"x" * 11, "image/png"), IMAGE_RULE)

    assert exc_info.value.status_code == 413
    assert exc_info.value.details["size"] == 11


def test_check_leaves_file_position_alone():
    upload = _upload(b"abcdef", "image/png")
    upload.file.seek(2)

    check_media(upload, IMAGE_RULE)

    assert upload.file.tell() == 2


def test_stored_keys():
    image = StoredMedia("image", "reports/images/a.jpg", "https://x/a.jpg", "image/jpeg", 1)

    assert ReportUpload().stored_keys == []
    assert ReportUpload(image=image).stored_keys == ["reports/images/a.jpg"]
