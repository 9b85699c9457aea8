"""
Tests for the Cloudinary image host wrapper
"""

from unittest.mock import MagicMock, patch

import pytest

from models.school import ImageUpload
from services.image_host import CloudinaryImageHost
from utils.errors import UploadError

IMAGE = ImageUpload(filename="oak.png", content_type="image/png", data=b"\x89PNG\r\n\x1a\n")


@pytest.fixture
def host():
    with patch("services.image_host.cloudinary.config"):
        yield CloudinaryImageHost("demo", "key", "secret", folder="school-images")


class TestCloudinaryImageHost:

    def test_unconfigured(self):
        host = CloudinaryImageHost(None, "key", None)

        assert not host.is_configured

    @pytest.mark.asyncio
    async def test_upload_without_credentials_fails(self):
        host = CloudinaryImageHost(None, None, None)

        with pytest.raises(UploadError):
            await host.upload(IMAGE)

    @pytest.mark.asyncio
    async def test_upload_returns_secure_url(self, host):
        response = {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/school-images/school-abc.png",
            "public_id": "school-images/school-abc"
        }
        with patch("services.image_host.cloudinary.uploader.upload", MagicMock(return_value=response)) as upload:
            hosted = await host.upload(IMAGE)

        assert hosted.url == response["secure_url"]
        assert hosted.public_id == "school-images/school-abc"
        args, kwargs = upload.call_args
        assert args[0] == IMAGE.data
        assert kwargs["folder"] == "school-images"

    @pytest.mark.asyncio
    async def test_upload_error_wrapped(self, host):
        failing = MagicMock(side_effect=RuntimeError("Invalid Signature"))
        with patch("services.image_host.cloudinary.uploader.upload", failing):
            with pytest.raises(UploadError) as exc_info:
                await host.upload(IMAGE)

        assert exc_info.value.message == "Internal server error"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_upload_without_url_fails(self, host):
        with patch("services.image_host.cloudinary.uploader.upload", MagicMock(return_value={})):
            with pytest.raises(UploadError):
                await host.upload(IMAGE)

    @pytest.mark.asyncio
    async def test_delete(self, host):
        with patch("services.image_host.cloudinary.uploader.destroy", MagicMock(return_value={"result": "ok"})) as destroy:
            await host.delete("school-images/school-abc")

        assert destroy.call_args.args[0] == "school-images/school-abc"

    @pytest.mark.asyncio
    async def test_delete_rejected(self, host):
        with patch("services.image_host.cloudinary.uploader.destroy", MagicMock(return_value={"result": "error"})):
            with pytest.raises(UploadError):
                await host.delete("school-images/school-abc")
