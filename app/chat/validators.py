"""
Chat media validators.

Provides content-based image detection for chat uploads using Pillow. The
declared content type and file extension are not trusted; the bytes must
decode as an image.

Policy:
    - Images only
    - GIF maps to the ``gif`` media kind, every other image format to ``image``
    - At most MEDIA_CONFIG.MAX_UPLOAD_BYTES (10 MiB by default)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from chat.constants import MEDIA_CONFIG
from chat.models import MediaKind


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class ValidationResult:
    """Result of media validation.

    Attributes:
        is_valid: Whether the file passed validation.
        media_type: Media kind for the message (image or gif).
        mime_type: MIME type derived from the decoded image format.
        extension: File extension matching the detected format.
        error: Human-readable error message if validation failed.
        error_code: Machine-readable error code if validation failed.
    """

    is_valid: bool
    media_type: str | None = None
    mime_type: str | None = None
    extension: str | None = None
    error: str | None = None
    error_code: str | None = None


# =============================================================================
# Validator Class
# =============================================================================


class ChatMediaValidator:
    """Validates chat media uploads.

    Example:
        validator = ChatMediaValidator()
        result = validator.validate(uploaded_file)
        if result.is_valid:
            print(f"Kind: {result.media_type}, MIME: {result.mime_type}")
        else:
            print(f"Validation failed: {result.error}")
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes or MEDIA_CONFIG.MAX_UPLOAD_BYTES

    def validate(self, file: BinaryIO) -> ValidationResult:
        """Validate an uploaded file.

        Performs the following checks in order:
        1. Empty file check
        2. Size limit check (before any decoding)
        3. Image format detection from content (declared pixel counts past
           Pillow's decompression bomb limit are rejected)

        Args:
            file: File-like object to validate. Must support read() and seek().

        Returns:
            ValidationResult with validation outcome and detected file info.
        """
        file.seek(0, 2)
        file_size = file.tell()
        file.seek(0)

        if file_size == 0:
            return ValidationResult(
                is_valid=False,
                error="File is empty",
                error_code="EMPTY_FILE",
            )

        if file_size > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            return ValidationResult(
                is_valid=False,
                error=f"File size exceeds {limit_mb}MB limit",
                error_code="FILE_TOO_LARGE",
            )

        try:
            image_format = self._detect_format(file)
        except Image.DecompressionBombError:
            return ValidationResult(
                is_valid=False,
                error="Image dimensions are too large",
                error_code="IMAGE_TOO_LARGE",
            )

        if image_format is None:
            return ValidationResult(
                is_valid=False,
                error="Only image files are allowed",
                error_code="MIME_TYPE_NOT_ALLOWED",
            )

        mime_type = Image.MIME.get(image_format, f"image/{image_format.lower()}")
        media_type = MediaKind.GIF if image_format == "GIF" else MediaKind.IMAGE

        return ValidationResult(
            is_valid=True,
            media_type=media_type,
            mime_type=mime_type,
            extension=f".{image_format.lower()}" if image_format != "JPEG" else ".jpg",
        )

    def _detect_format(self, file: BinaryIO) -> str | None:
        """Return Pillow's format name (e.g. 'PNG', 'GIF'), or None if not an image."""
        file.seek(0)
        try:
            with Image.open(file) as image:
                image.verify()
                return image.format
        except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError):
            return None
        finally:
            file.seek(0)
