"""
Tests for image upload.
"""

import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from inkfeed.config import config
from inkfeed.routes.uploads import upload_image
from inkfeed.services.upload_service import UploadService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestUploadImage:
    """Tests for POST /upload/image."""

    def test_upload_requires_auth(self, client):
        """Should return 401 without a token."""
        response = client.post(
            "/upload/image", files={"file": ("pic.png", PNG_BYTES, "image/png")}
        )
        assert response.status_code == 401

    def test_upload_png(self, client, make_user, temp_upload_dir):
        """Should store the file under a random name and return its URL."""
        headers = make_user("alice")
        response = client.post(
            "/upload/image",
            files={"file": ("Holiday.PNG", PNG_BYTES, "image/png")},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["url"] == f"/uploads/{data['filename']}"
        assert data["filename"].endswith(".png")
        assert data["filename"] != "Holiday.PNG"
        assert (temp_upload_dir / data["filename"]).read_bytes() == PNG_BYTES

    def test_extension_follows_content_type(self, client, make_user, temp_upload_dir):
        """A misleading filename cannot choose what the file is served as."""
        headers = make_user("alice")
        response = client.post(
            "/upload/image",
            files={"file": ("page.html", PNG_BYTES, "image/png")},
            headers=headers,
        )
        assert response.status_code == 200
        filename = response.json()["filename"]
        assert filename.endswith(".png")
        assert not list(temp_upload_dir.glob("*.html"))

    def test_unsupported_type(self, client, make_user):
        """Should return 400 for non-image uploads."""
        headers = make_user("alice")
        response = client.post(
            "/upload/image",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=headers,
        )
        assert response.status_code == 400

    def test_empty_file(self, client, make_user):
        """Should return 400 for an empty file."""
        headers = make_user("alice")
        response = client.post(
            "/upload/image",
            files={"file": ("pic.png", b"", "image/png")},
            headers=headers,
        )
        assert response.status_code == 400

    def test_too_large(self, client, make_user):
        """Should return 413 above MAX_UPLOAD_BYTES."""
        headers = make_user("alice")
        original_max = config.MAX_UPLOAD_BYTES
        config.MAX_UPLOAD_BYTES = 16
        try:
            response = client.post(
                "/upload/image",
                files={"file": ("pic.png", PNG_BYTES, "image/png")},
                headers=headers,
            )
        finally:
            config.MAX_UPLOAD_BYTES = original_max
        assert response.status_code == 413

    def test_missing_file(self, client, make_user):
        """Should reject a request without a file part."""
        headers = make_user("alice")
        response = client.post("/upload/image", headers=headers)
        assert response.status_code == 422


class TestUploadService:
    """Tests for UploadService directly."""

    def test_creates_upload_dir(self, tmp_path):
        """The upload directory is created on first save."""
        service = UploadService(tmp_path / "nested" / "uploads", max_bytes=1024)
        url, filename = service.save_image("a.gif", "image/gif", b"GIF89a")
        assert (tmp_path / "nested" / "uploads" / filename).exists()
        assert url.startswith("/uploads/")

    def test_limit_is_inclusive(self, tmp_path):
        """A file exactly at the limit is accepted."""
        service = UploadService(tmp_path, max_bytes=4)
        service.save_image("a.webp", "image/webp", b"1234")
        with pytest.raises(HTTPException) as exc_info:
            service.save_image("a.webp", "image/webp", b"12345")
        assert exc_info.value.status_code == 413

    def test_jpeg_extension(self, tmp_path):
        """Files are named after their MIME type."""
        service = UploadService(tmp_path, max_bytes=1024)
        _, filename = service.save_image(None, "image/jpeg", b"\xff\xd8\xff")
        assert filename.endswith(".jpg")


class RecordingBytesIO(io.BytesIO):
    """BytesIO that remembers the sizes it was asked to read."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.read_sizes = []

    def read(self, size=-1):
        self.read_sizes.append(size)
        return super().read(size)


class TestUploadReadLimit:
    """The route never reads more than one byte past the limit."""

    @pytest.mark.asyncio
    async def test_oversized_upload_read_is_capped(self, tmp_path):
        body = RecordingBytesIO(b"\x00" * 10_000)
        upload = UploadFile(
            file=body,
            filename="big.png",
            headers=Headers({"content-type": "image/png"}),
        )
        service = UploadService(tmp_path, max_bytes=16)

        with pytest.raises(HTTPException) as exc_info:
            await upload_image(user_id=1, service=service, file=upload)

        assert exc_info.value.status_code == 413
        assert body.read_sizes == [17]
        assert list(tmp_path.iterdir()) == []
