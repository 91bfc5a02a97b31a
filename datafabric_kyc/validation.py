"""Pre-flight checks for check creation and document upload.

Checks run in a fixed order and stop at the first violation. Nothing here
touches the network.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

from PIL import Image, UnidentifiedImageError

from .exceptions import ImageNotFoundError, ImagePermissionError, ValidationError
from .models import DocumentType, ImageType

logger = logging.getLogger(__name__)

REQUIRED_CHECK_FIELDS = (
    "first_name",
    "last_name",
    "date_of_birth",
    "document_type",
    "document_number",
)

DATE_FORMAT = "%Y-%m-%d"

MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")

# Pillow names JPEGs carrying a multi-picture segment "MPO"; camera files often do
FORMAT_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}


def validate_check_creation(payload: Mapping[str, Any]) -> None:
    """Validate a create-check payload.

    Raises:
        ValidationError: On the first missing field, unknown document type
            or malformed date of birth
    """
    for field in REQUIRED_CHECK_FIELDS:
        if not payload.get(field):
            raise ValidationError(f"Missing required field: {field}")

    valid_doc_types = [t.value for t in DocumentType]
    if payload["document_type"] not in valid_doc_types:
        raise ValidationError(
            "Invalid document_type. Must be one of: " + ", ".join(valid_doc_types)
        )

    date_of_birth = payload["date_of_birth"]
    if not isinstance(date_of_birth, str):
        raise ValidationError("date_of_birth must be a string")
    if not _is_exact_date(date_of_birth):
        raise ValidationError("Invalid date_of_birth format. Must be YYYY-MM-DD")


def _is_exact_date(value: str) -> bool:
    """True if value is a real calendar date written exactly as YYYY-MM-DD.

    strptime accepts unpadded parts like ``1990-5-15``, so the parsed date
    is formatted back and compared with the input. isoformat zero-pads
    years below 1000.
    """
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return parsed.date().isoformat() == value


def validate_document_upload(path: str | os.PathLike, image_type: str) -> str:
    """Validate an image before upload.

    Returns:
        The MIME type detected from the file content

    Raises:
        ImageNotFoundError: If the path does not exist
        ImagePermissionError: If the file cannot be read
        ValidationError: On bad image type, size or format
    """
    image_path = Path(path)

    if not image_path.exists():
        raise ImageNotFoundError(f"Image file not found: {path}")

    if not os.access(image_path, os.R_OK):
        raise ImagePermissionError(f"Image file is not readable: {path}")

    valid_image_types = [t.value for t in ImageType]
    if image_type not in valid_image_types:
        raise ValidationError(
            "Invalid image_type. Must be one of: " + ", ".join(valid_image_types)
        )

    if image_path.stat().st_size > MAX_IMAGE_BYTES:
        raise ValidationError("Image file size must not exceed 10MB")

    mime_type = detect_mime_type(image_path)
    if mime_type not in ALLOWED_MIME_TYPES:
        logger.debug("Rejected upload with detected type %s", mime_type)
        raise ValidationError("Invalid image format. Must be JPEG, PNG, or WebP")

    return mime_type


def detect_mime_type(path: Path) -> str | None:
    """Sniff the image format from file content, ignoring the extension."""
    try:
        with Image.open(path) as img:
            fmt = img.format or ""
        return FORMAT_MIME_TYPES.get(fmt) or Image.MIME.get(fmt)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Could not identify image %s: %s", path.name, e)
        return None
