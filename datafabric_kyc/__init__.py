"""Python client for the DataFabric KYC identity-verification API."""

from .client import AsyncKycClient, KycClient
from .config import VERSION as __version__
from .exceptions import ImageNotFoundError, ImagePermissionError, KycError, ValidationError
from .models import (
    CheckListResponse,
    CheckResponse,
    CheckResult,
    CheckStatus,
    DocumentListResponse,
    DocumentResponse,
    DocumentType,
    ImageType,
    OcrExtraction,
    RiskScore,
)
from .normalization import extract_response_data
from .validation import validate_check_creation, validate_document_upload

__all__ = [
    "__version__",
    # Clients
    "KycClient",
    "AsyncKycClient",
    # Errors
    "KycError",
    "ValidationError",
    "ImageNotFoundError",
    "ImagePermissionError",
    # Responses
    "CheckResponse",
    "CheckListResponse",
    "DocumentResponse",
    "DocumentListResponse",
    "OcrExtraction",
    # Enums
    "CheckStatus",
    "CheckResult",
    "RiskScore",
    "DocumentType",
    "ImageType",
    # Helpers
    "extract_response_data",
    "validate_check_creation",
    "validate_document_upload",
]
