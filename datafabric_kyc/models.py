"""Response models for the KYC API.

Every model is built once from a normalized payload (see normalization.py).
Fallbacks and defaults are applied at parse time, so accessors never raise on
missing or mistyped fields.
"""

import copy
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CheckStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class CheckResult(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    REVIEW_REQUIRED = "review_required"


class RiskScore(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DocumentType(str, Enum):
    PASSPORT = "passport"
    DRIVERS_LICENSE = "drivers_license"
    NATIONAL_ID = "national_id"
    RESIDENCE_PERMIT = "residence_permit"


class ImageType(str, Enum):
    FRONT = "front"
    BACK = "back"
    SELFIE = "selfie"
    PROOF_OF_ADDRESS = "proof_of_address"


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or_none(value: Any) -> int | None:
    # bool is an int subclass but never a valid count or id
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, treating naive values as UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class _RawPayloadModel(BaseModel):
    """Keeps the exact payload a model was parsed from."""

    model_config = ConfigDict(frozen=True)

    raw: Any = Field(default_factory=dict, repr=False)

    def to_dict(self) -> Any:
        """Return a copy of the payload this model was built from."""
        return copy.deepcopy(self.raw)

    def to_json(self) -> str:
        return json.dumps(self.raw, indent=4)


class CheckResponse(_RawPayloadModel):
    """A single KYC check."""

    check_id: str = ""
    status: str = ""
    result: str | None = None
    risk_score: str | None = None
    verification_details: dict[str, Any] = Field(default_factory=dict)
    expires_at: str | None = None
    request_id: str | None = None
    message: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CheckResponse":
        check_id = data.get("check_id")
        if not isinstance(check_id, str):
            fallback = data.get("id")
            if isinstance(fallback, str):
                check_id = fallback
            elif _int_or_none(fallback) is not None:
                check_id = str(fallback)
            else:
                check_id = ""

        status = data.get("kyc_status")
        if status is None:
            status = data.get("status")

        details = data.get("verification_details")

        return cls(
            raw=copy.deepcopy(data),
            check_id=check_id,
            status=_str_or_none(status) or "",
            result=_str_or_none(data.get("result")),
            risk_score=_str_or_none(data.get("risk_score")),
            verification_details=details if isinstance(details, dict) else {},
            expires_at=_str_or_none(data.get("expires_at")),
            request_id=_str_or_none(data.get("request_id")),
            message=_str_or_none(data.get("message")),
        )

    def is_approved(self) -> bool:
        return self.result == CheckResult.APPROVED.value

    def is_rejected(self) -> bool:
        return self.result == CheckResult.REJECTED.value

    def requires_review(self) -> bool:
        return self.result == CheckResult.REVIEW_REQUIRED.value

    def is_pending(self) -> bool:
        return self.status in (CheckStatus.PENDING.value, CheckStatus.IN_PROGRESS.value)

    def is_completed(self) -> bool:
        return self.status == CheckStatus.COMPLETED.value

    def is_expired(self) -> bool:
        """True only if expires_at parses to an instant before now."""
        if self.expires_at is None:
            return False
        expires = _parse_timestamp(self.expires_at)
        if expires is None:
            return False
        return expires < datetime.now(timezone.utc)


class CheckListResponse(_RawPayloadModel):
    """One page of KYC checks with pagination metadata."""

    checks: list[CheckResponse] = Field(default_factory=list)
    total: int = 0
    per_page: int = 20
    current_page: int = 1
    last_page: int = 1

    @classmethod
    def from_payload(cls, body: dict[str, Any]) -> "CheckListResponse":
        data = body.get("data")
        items = data if isinstance(data, list) else []
        pagination = body.get("pagination")
        if not isinstance(pagination, dict):
            pagination = {}

        def page_value(key: str, default: int) -> int:
            value = _int_or_none(pagination.get(key))
            return default if value is None else value

        return cls(
            raw=copy.deepcopy(items),
            checks=[
                CheckResponse.from_payload(item if isinstance(item, dict) else {})
                for item in items
            ],
            total=page_value("total", 0),
            per_page=page_value("per_page", 20),
            current_page=page_value("current_page", 1),
            last_page=page_value("last_page", 1),
        )

    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page


class OcrExtraction(BaseModel):
    """Fields the server's OCR provider pulled from a document image."""

    model_config = ConfigDict(frozen=True)

    document_type: str | None = None
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    id_number: str | None = None
    date_of_birth: str | None = None
    gender: str | None = None
    nationality: str | None = None
    address: str | None = None
    confidence: int | None = None
    provider: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "OcrExtraction":
        text_fields = {
            name: _str_or_none(data.get(name))
            for name in cls.model_fields
            if name != "confidence"
        }
        return cls(confidence=_int_or_none(data.get("confidence")), **text_fields)


class DocumentResponse(_RawPayloadModel):
    """Result of a document upload, with OCR data when extraction ran."""

    id: int | None = None
    image_type: str | None = None
    has_ocr_data: bool = False
    ocr_data: OcrExtraction | None = None
    status: str = ""

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "DocumentResponse":
        document = data.get("document")
        if not isinstance(document, dict):
            document = {}
        ocr = document.get("ocr_data")

        return cls(
            raw=copy.deepcopy(data),
            id=_int_or_none(document.get("id")),
            image_type=_str_or_none(document.get("image_type")),
            # server-authoritative: only a literal true counts
            has_ocr_data=document.get("has_ocr_data") is True,
            ocr_data=OcrExtraction.from_payload(ocr) if isinstance(ocr, dict) else None,
            status=_str_or_none(data.get("status")) or "",
        )

    def is_successful(self) -> bool:
        return self.status == "success"

    def _ocr_field(self, name: str) -> Any:
        if self.ocr_data is None:
            return None
        return getattr(self.ocr_data, name)

    @property
    def extracted_document_type(self) -> str | None:
        return self._ocr_field("document_type")

    @property
    def extracted_full_name(self) -> str | None:
        return self._ocr_field("full_name")

    @property
    def extracted_first_name(self) -> str | None:
        return self._ocr_field("first_name")

    @property
    def extracted_last_name(self) -> str | None:
        return self._ocr_field("last_name")

    @property
    def extracted_id_number(self) -> str | None:
        return self._ocr_field("id_number")

    @property
    def extracted_date_of_birth(self) -> str | None:
        return self._ocr_field("date_of_birth")

    @property
    def extracted_gender(self) -> str | None:
        return self._ocr_field("gender")

    @property
    def extracted_nationality(self) -> str | None:
        return self._ocr_field("nationality")

    @property
    def extracted_address(self) -> str | None:
        return self._ocr_field("address")

    @property
    def confidence(self) -> int | None:
        return self._ocr_field("confidence")

    @property
    def provider(self) -> str | None:
        return self._ocr_field("provider")


class DocumentListResponse(_RawPayloadModel):
    """Documents attached to a check, kept as plain mappings."""

    documents: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, body: dict[str, Any]) -> "DocumentListResponse":
        items = body.get("documents")
        if not isinstance(items, list):
            items = []
        return cls(
            raw=copy.deepcopy(items),
            documents=[item if isinstance(item, dict) else {} for item in copy.deepcopy(items)],
        )

    def count(self) -> int:
        return len(self.documents)

    def has_ocr_data(self) -> bool:
        return any(doc.get("has_ocr_data") is True for doc in self.documents)

    def documents_by_type(self, image_type: str) -> list[dict[str, Any]]:
        return [doc for doc in self.documents if doc.get("image_type") == image_type]
