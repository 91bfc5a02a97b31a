"""Errors raised by the KYC client."""


class KycError(Exception):
    """Base error for every client-level failure.

    Args:
        message: Human-readable description
        code: Numeric code from the transport, usually the HTTP status
        cause: Underlying exception, also chained as ``__cause__``
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause


class ValidationError(KycError):
    """Request rejected locally, before any network call."""


class ImageNotFoundError(ValidationError):
    """Upload path does not exist."""


class ImagePermissionError(ValidationError):
    """Upload path exists but cannot be read."""
