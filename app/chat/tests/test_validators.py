"""
Tests for ChatMediaValidator.

Detection is content-based: file names and declared content types are
ignored, only bytes Pillow can decode are accepted.
"""

import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from chat.tests.conftest import make_image_bytes, make_oversized_gif
from chat.validators import ChatMediaValidator


class TestChatMediaValidator:
    @pytest.mark.parametrize(
        "image_format, media_type, extension, mime_type",
        [
            ("PNG", "image", ".png", "image/png"),
            ("JPEG", "image", ".jpg", "image/jpeg"),
            ("GIF", "gif", ".gif", "image/gif"),
        ],
    )
    def test_accepts_images(self, image_format, media_type, extension, mime_type):
        upload = io.BytesIO(make_image_bytes(image_format))

        result = ChatMediaValidator().validate(upload)

        assert result.is_valid
        assert result.media_type == media_type
        assert result.extension == extension
        assert result.mime_type == mime_type

    def test_ignores_declared_type(self):
        """
        Why it matters: A text file named .png with an image content type
        must still be rejected.
        """
        upload = SimpleUploadedFile("fake.png", b"plain text", content_type="image/png")

        result = ChatMediaValidator().validate(upload)

        assert not result.is_valid
        assert result.error == "Only image files are allowed"
        assert result.error_code == "MIME_TYPE_NOT_ALLOWED"

    def test_gif_detected_under_wrong_name(self):
        upload = SimpleUploadedFile("photo.jpg", make_image_bytes("GIF"), content_type="image/jpeg")

        assert ChatMediaValidator().validate(upload).media_type == "gif"

    def test_empty_file(self):
        result = ChatMediaValidator().validate(io.BytesIO(b""))

        assert result.error_code == "EMPTY_FILE"

    def test_size_limit(self):
        data = make_image_bytes("PNG")

        result = ChatMediaValidator(max_bytes=len(data) - 1).validate(io.BytesIO(data))

        assert result.error_code == "FILE_TOO_LARGE"

    def test_file_rewound_after_validation(self):
        upload = io.BytesIO(make_image_bytes("PNG"))

        ChatMediaValidator().validate(upload)

        assert upload.tell() == 0

    def test_decompression_bomb_rejected(self):
        """
        A few dozen bytes can declare billions of pixels.

        Why it matters: Such a file passes the byte-size cap, so the pixel
        limit is the only thing stopping it; it must come back as an invalid
        upload, not an unhandled error.
        """
        result = ChatMediaValidator().validate(io.BytesIO(make_oversized_gif()))

        assert not result.is_valid
        assert result.error_code == "IMAGE_TOO_LARGE"
        assert result.error == "Image dimensions are too large"

    def test_pixel_limit_follows_pillow_setting(self, monkeypatch):
        monkeypatch.setattr("PIL.Image.MAX_IMAGE_PIXELS", 10)

        result = ChatMediaValidator().validate(io.BytesIO(make_image_bytes("PNG")))

        assert result.error_code == "IMAGE_TOO_LARGE"

    def test_truncated_image_rejected(self):
        data = make_image_bytes("GIF")[:13]

        result = ChatMediaValidator().validate(io.BytesIO(data))

        assert not result.is_valid
