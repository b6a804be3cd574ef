import threading

import cloudinary.uploader
import pytest
from starlette.datastructures import UploadFile as StarletteUploadFile

from src.services import cloudinary_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def fake_upload(monkeypatch):
    calls = []

    async def upload_image(contents, folder, public_id):
        calls.append({"contents": contents, "folder": folder, "public_id": public_id})
        return {
            "url": f"https://res.cloudinary.com/demo/image/upload/{folder}/{public_id}.png",
            "public_id": f"{folder}/{public_id}",
        }

    monkeypatch.setattr(cloudinary_service, "upload_image", upload_image)
    return calls


class TestUploadImage:

    def test_upload_returns_public_url(self, client, fake_upload):
        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        assert len(fake_upload) == 1
        call = fake_upload[0]
        assert call["contents"] == PNG_BYTES
        assert call["folder"] == "cvalams/pages"
        assert len(call["public_id"]) == 32
        assert response.json() == {
            "publicUrl": f"https://res.cloudinary.com/demo/image/upload/cvalams/pages/{call['public_id']}.png"
        }

    def test_each_upload_gets_unique_name(self, client, fake_upload):
        for _ in range(2):
            client.post("/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")})

        assert fake_upload[0]["public_id"] != fake_upload[1]["public_id"]

    def test_missing_file(self, client, fake_upload):
        response = client.post(
            "/api/upload-image", files={"other": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 400
        assert fake_upload == []

    def test_rejects_non_image(self, client, fake_upload):
        response = client.post(
            "/api/upload-image", files={"image": ("notes.txt", b"hola", "text/plain")}
        )

        assert response.status_code == 400
        assert fake_upload == []

    def test_rejects_large_file(self, client, fake_upload, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "10")

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 413
        assert fake_upload == []

    def test_large_file_rejected_without_reading_it(self, client, fake_upload, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "10")
        reads = []
        original_read = StarletteUploadFile.read

        async def recording_read(self, size=-1):
            reads.append(size)
            return await original_read(self, size)

        monkeypatch.setattr(StarletteUploadFile, "read", recording_read)

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 413
        assert reads == []

    def test_read_is_bounded_by_limit(self, client, fake_upload, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "1000")
        reads = []
        original_read = StarletteUploadFile.read

        async def recording_read(self, size=-1):
            reads.append(size)
            return await original_read(self, size)

        monkeypatch.setattr(StarletteUploadFile, "read", recording_read)

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        assert reads == [1001]
        assert fake_upload[0]["contents"] == PNG_BYTES

    def test_sdk_upload_options(self, client, monkeypatch):
        calls = []

        def upload(contents, **options):
            calls.append({"contents": contents, "options": options})
            return {
                "secure_url": "https://res.cloudinary.com/demo/image/upload/cvalams/pages/x.png",
                "public_id": "cvalams/pages/x",
            }

        monkeypatch.setattr(cloudinary.uploader, "upload", upload)
        monkeypatch.setattr(cloudinary_service, "_cloudinary_configured", True)

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        assert response.json() == {
            "publicUrl": "https://res.cloudinary.com/demo/image/upload/cvalams/pages/x.png"
        }
        assert len(calls) == 1
        assert calls[0]["contents"] == PNG_BYTES
        assert calls[0]["options"]["folder"] == "cvalams/pages"
        assert calls[0]["options"]["overwrite"] is False
        assert calls[0]["options"]["resource_type"] == "image"

    @pytest.mark.asyncio
    async def test_sdk_upload_leaves_event_loop_thread(self, monkeypatch):
        loop_thread = threading.get_ident()
        threads = []

        def upload(contents, **options):
            threads.append(threading.get_ident())
            return {"secure_url": "https://res.cloudinary.com/demo/x.png", "public_id": "x"}

        monkeypatch.setattr(cloudinary.uploader, "upload", upload)
        monkeypatch.setattr(cloudinary_service, "_cloudinary_configured", True)

        result = await cloudinary_service.upload_image(PNG_BYTES, folder="cvalams/pages", public_id="x")

        assert result["url"] == "https://res.cloudinary.com/demo/x.png"
        assert threads and threads[0] != loop_thread

    def test_storage_failure(self, client, monkeypatch):
        async def upload_image(contents, folder, public_id):
            raise cloudinary_service.CloudinaryUploadError("bucket caído")

        monkeypatch.setattr(cloudinary_service, "upload_image", upload_image)

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 500
        assert "bucket caído" in response.json()["detail"]

    def test_cloudinary_not_configured(self, client, monkeypatch):
        for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(cloudinary_service, "_cloudinary_configured", False)

        response = client.post(
            "/api/upload-image", files={"image": ("logo.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 500
