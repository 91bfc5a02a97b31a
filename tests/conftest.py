"""Shared test fixtures for the KYC client tests."""

from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def valid_check_payload() -> dict:
    """A create-check payload that passes local validation."""
    return {
        "user_reference": "user_123",
        "first_name": "Ahmad",
        "last_name": "Ibrahim",
        "date_of_birth": "1995-03-20",
        "document_type": "national_id",
        "document_number": "A1234567",
        "country": "MY",
    }


@pytest.fixture
def flat_check_body() -> dict:
    """Check response in the flat envelope, as returned by create."""
    return {
        "status": "success",
        "check_id": "db4e12df-4c4e-4aba-ad60-73116a2be8d7",
        "result": None,
        "kyc_status": "pending",
        "risk_score": None,
        "message": "KYC check created and processed.",
        "verification_details": [],
        "expires_at": "2025-12-27T15:56:40.000000Z",
        "request_id": "test_request_123",
    }


@pytest.fixture
def wrapped_check_body() -> dict:
    """Check response in the wrapped envelope."""
    return {
        "status": "success",
        "data": {
            "check_id": "chk_wrapped_123",
            "kyc_status": "completed",
            "result": "approved",
            "risk_score": "low",
        },
    }


@pytest.fixture
def document_body() -> dict:
    """Document upload response with OCR extraction."""
    return {
        "status": "success",
        "message": "Document uploaded successfully",
        "document": {
            "id": 42,
            "image_type": "front",
            "has_ocr_data": True,
            "ocr_data": {
                "document_type": "national_id",
                "full_name": "AHMAD BIN IBRAHIM",
                "first_name": "Ahmad",
                "last_name": "Ibrahim",
                "id_number": "950320-14-5678",
                "date_of_birth": "1995-03-20",
                "gender": "M",
                "nationality": "MYS",
                "address": "12 Jalan Ampang, Kuala Lumpur",
                "confidence": 94,
                "provider": "openai",
            },
        },
    }


def _write_image(path: Path, fmt: str) -> Path:
    Image.new("RGB", (32, 24), (200, 200, 200)).save(path, fmt)
    return path


@pytest.fixture
def png_image(tmp_path: Path) -> Path:
    return _write_image(tmp_path / "id-front.png", "PNG")


@pytest.fixture
def jpeg_image(tmp_path: Path) -> Path:
    return _write_image(tmp_path / "id-front.jpg", "JPEG")


@pytest.fixture
def gif_image(tmp_path: Path) -> Path:
    """A real image in a format the API does not accept."""
    return _write_image(tmp_path / "id-front.gif", "GIF")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
