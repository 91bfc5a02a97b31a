"""Tests for pre-flight request validation."""

from pathlib import Path

import pytest

from datafabric_kyc import validation
from datafabric_kyc.exceptions import (
    ImageNotFoundError,
    ImagePermissionError,
    KycError,
    ValidationError,
)
from datafabric_kyc.validation import (
    MAX_IMAGE_BYTES,
    REQUIRED_CHECK_FIELDS,
    validate_check_creation,
    validate_document_upload,
)


class TestValidateCheckCreation:
    def test_valid_payload_passes(self, valid_check_payload: dict):
        validate_check_creation(valid_check_payload)

    @pytest.mark.parametrize("field", REQUIRED_CHECK_FIELDS)
    def test_missing_field_is_named(self, valid_check_payload: dict, field: str):
        del valid_check_payload[field]
        with pytest.raises(ValidationError) as exc_info:
            validate_check_creation(valid_check_payload)
        assert str(exc_info.value) == f"Missing required field: {field}"

    @pytest.mark.parametrize("field", REQUIRED_CHECK_FIELDS)
    def test_empty_string_counts_as_missing(self, valid_check_payload: dict, field: str):
        valid_check_payload[field] = ""
        with pytest.raises(ValidationError, match=f"Missing required field: {field}$"):
            validate_check_creation(valid_check_payload)

    def test_first_missing_field_wins(self):
        with pytest.raises(ValidationError, match="first_name"):
            validate_check_creation({"last_name": "User"})

    def test_invalid_document_type_lists_allowed(self, valid_check_payload: dict):
        valid_check_payload["document_type"] = "library_card"
        with pytest.raises(ValidationError) as exc_info:
            validate_check_creation(valid_check_payload)
        assert str(exc_info.value) == (
            "Invalid document_type. Must be one of: "
            "passport, drivers_license, national_id, residence_permit"
        )

    @pytest.mark.parametrize("doc_type", ["passport", "drivers_license", "national_id", "residence_permit"])
    def test_all_document_types_accepted(self, valid_check_payload: dict, doc_type: str):
        valid_check_payload["document_type"] = doc_type
        validate_check_creation(valid_check_payload)

    @pytest.mark.parametrize("dob", ["1990-01-01", "2000-02-29", "1985-12-31", "1970-06-15", "0990-05-15"])
    def test_exact_dates_accepted(self, valid_check_payload: dict, dob: str):
        valid_check_payload["date_of_birth"] = dob
        validate_check_creation(valid_check_payload)

    @pytest.mark.parametrize(
        "dob",
        [
            "15-05-1990",
            "1990/05/15",
            "1990-5-15",
            "1990-05-5",
            "1990-02-30",
            "1999-02-29",
            "1990-13-01",
            "invalid-date",
            "1990-05-15T00:00:00",
            " 1990-05-15",
        ],
    )
    def test_malformed_dates_rejected(self, valid_check_payload: dict, dob: str):
        valid_check_payload["date_of_birth"] = dob
        with pytest.raises(ValidationError) as exc_info:
            validate_check_creation(valid_check_payload)
        assert str(exc_info.value) == "Invalid date_of_birth format. Must be YYYY-MM-DD"

    def test_non_string_date_rejected(self, valid_check_payload: dict):
        valid_check_payload["date_of_birth"] = 19900515
        with pytest.raises(ValidationError, match="date_of_birth must be a string"):
            validate_check_creation(valid_check_payload)

    def test_validation_error_is_kyc_error_without_code(self):
        with pytest.raises(KycError) as exc_info:
            validate_check_creation({})
        assert exc_info.value.code is None
        assert exc_info.value.cause is None


class TestValidateDocumentUpload:
    def test_png_passes(self, png_image: Path):
        assert validate_document_upload(png_image, "front") == "image/png"

    def test_jpeg_passes(self, jpeg_image: Path):
        assert validate_document_upload(str(jpeg_image), "selfie") == "image/jpeg"

    def test_webp_passes(self, tmp_path: Path):
        from PIL import Image

        path = tmp_path / "selfie.webp"
        Image.new("RGB", (16, 16)).save(path, "WEBP")
        assert validate_document_upload(path, "selfie") == "image/webp"

    def test_multi_picture_jpeg_passes(self, tmp_path: Path):
        """Camera JPEGs with an MPF segment open as MPO in Pillow."""
        from PIL import Image

        path = tmp_path / "phone-photo.jpg"
        first = Image.new("RGB", (16, 16), (200, 200, 200))
        second = Image.new("RGB", (16, 16), (50, 50, 50))
        first.save(path, "MPO", save_all=True, append_images=[second])
        assert path.read_bytes()[:3] == b"\xff\xd8\xff"
        assert validate_document_upload(path, "front") == "image/jpeg"

    def test_missing_file(self, tmp_path: Path):
        missing = tmp_path / "nope.jpg"
        with pytest.raises(ImageNotFoundError, match=f"Image file not found: {missing}"):
            validate_document_upload(missing, "front")

    def test_unreadable_file(self, png_image: Path, monkeypatch):
        monkeypatch.setattr(validation.os, "access", lambda path, mode: False)
        with pytest.raises(ImagePermissionError, match="Image file is not readable"):
            validate_document_upload(png_image, "front")

    def test_invalid_image_type(self, png_image: Path):
        with pytest.raises(ValidationError) as exc_info:
            validate_document_upload(png_image, "side")
        assert str(exc_info.value) == (
            "Invalid image_type. Must be one of: front, back, selfie, proof_of_address"
        )

    def test_file_too_large(self, tmp_path: Path):
        path = tmp_path / "huge.jpg"
        with path.open("wb") as f:
            f.truncate(MAX_IMAGE_BYTES + 1)
        with pytest.raises(ValidationError, match="must not exceed 10MB"):
            validate_document_upload(path, "front")

    def test_file_at_limit_checks_format_next(self, tmp_path: Path):
        path = tmp_path / "limit.jpg"
        with path.open("wb") as f:
            f.write(b"this is not an image file at all")
            f.truncate(MAX_IMAGE_BYTES)
        with pytest.raises(ValidationError, match="Invalid image format"):
            validate_document_upload(path, "front")

    def test_unsupported_image_format(self, gif_image: Path):
        with pytest.raises(ValidationError, match="Must be JPEG, PNG, or WebP"):
            validate_document_upload(gif_image, "front")

    def test_extension_is_ignored(self, tmp_path: Path):
        """A text file named .jpg is still rejected by content sniffing."""
        path = tmp_path / "fake.jpg"
        path.write_text("this is not an image file at all")
        with pytest.raises(ValidationError, match="Invalid image format"):
            validate_document_upload(path, "front")

    def test_type_checked_before_size(self, tmp_path: Path):
        path = tmp_path / "huge.jpg"
        with path.open("wb") as f:
            f.truncate(MAX_IMAGE_BYTES + 1)
        with pytest.raises(ValidationError, match="Invalid image_type"):
            validate_document_upload(path, "side")
