"""
Tests for capture photo uploads.
"""
import pytest
from unittest.mock import MagicMock, patch
from botocore.exceptions import ClientError, EndpointConnectionError

from zonaflash.core.errors import MediaUploadFailure
from zonaflash.services.media_uploader import MediaUploader


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def uploader(s3_client):
    return MediaUploader(
        "zona-flash-media",
        prefix="zona_flash/captures/",
        public_base_url="https://storage.googleapis.com/",
        client=s3_client,
    )


class TestMediaUploader:
    def test_object_name(self, uploader):
        assert uploader.object_name("hunter_uid_001", 1700000000.7) == "zona_flash/captures/hunter_uid_001/1700000000.jpg"

    def test_public_url(self, uploader):
        assert (
            uploader.public_url("zona_flash/captures/u/1.jpg")
            == "https://storage.googleapis.com/zona-flash-media/zona_flash/captures/u/1.jpg"
        )

    def test_upload_puts_object_and_returns_url(self, uploader, s3_client):
        with patch("zonaflash.services.media_uploader.time.time", return_value=1700000000):
            url = uploader.upload(b"jpeg-bytes", "image/png", "hunter_uid_001")

        s3_client.put_object.assert_called_once_with(
            Bucket="zona-flash-media",
            Key="zona_flash/captures/hunter_uid_001/1700000000.jpg",
            Body=b"jpeg-bytes",
            ContentType="image/png",
        )
        assert url == "https://storage.googleapis.com/zona-flash-media/zona_flash/captures/hunter_uid_001/1700000000.jpg"

    def test_default_content_type(self, uploader, s3_client):
        uploader.upload(b"jpeg-bytes", None, "hunter_uid_001")

        assert s3_client.put_object.call_args.kwargs["ContentType"] == "image/jpeg"

    def test_client_error_becomes_upload_failure(self, uploader, s3_client):
        s3_client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
        )

        with pytest.raises(MediaUploadFailure):
            uploader.upload(b"jpeg-bytes", "image/jpeg", "hunter_uid_001")

    def test_connection_error_becomes_upload_failure(self, uploader, s3_client):
        s3_client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")

        with pytest.raises(MediaUploadFailure):
            uploader.upload(b"jpeg-bytes", "image/jpeg", "hunter_uid_001")

    def test_disabled_without_bucket(self, s3_client):
        uploader = MediaUploader("", client=s3_client)

        assert uploader.enabled is False
        with pytest.raises(MediaUploadFailure):
            uploader.upload(b"jpeg-bytes", "image/jpeg", "hunter_uid_001")
        s3_client.put_object.assert_not_called()

    def test_empty_photo_rejected(self, uploader, s3_client):
        with pytest.raises(MediaUploadFailure):
            uploader.upload(b"", "image/jpeg", "hunter_uid_001")
        s3_client.put_object.assert_not_called()

    def test_from_settings(self, monkeypatch):
        from zonaflash.core.config import settings
        monkeypatch.setattr(settings, "MEDIA_BUCKET", "bucket-from-env")
        monkeypatch.setattr(settings, "MEDIA_PREFIX", "captures")

        uploader = MediaUploader.from_settings()

        assert uploader.bucket == "bucket-from-env"
        assert uploader.object_name("u", 5) == "captures/u/5.jpg"
