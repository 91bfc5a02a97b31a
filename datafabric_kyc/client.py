"""HTTP clients for the DataFabric KYC API.

Uses httpx with separate overall and connect timeouts. There is no retry
policy here: every failure surfaces once as a KycError and callers decide
whether to try again.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, TypeVar

import httpx

from .config import TEST_KEY_PREFIX, USER_AGENT, settings
from .exceptions import KycError
from .models import CheckListResponse, CheckResponse, DocumentListResponse, DocumentResponse
from .normalization import decode_body, extract_response_data
from .validation import validate_check_creation, validate_document_upload

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")

CHECKS_PATH = "/api/v1/kyc/checks"

LIST_FILTERS = ("status", "result", "user_reference", "per_page", "page")


class _BaseKycClient:
    """Request composition and response handling shared by both clients."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
    ):
        self._api_key = api_key
        self._base_url = (base_url or settings.BASE_URL).rstrip("/")
        self._test_mode = api_key.startswith(TEST_KEY_PREFIX)

        overall = timeout if timeout is not None else settings.TIMEOUT_SECONDS
        conn = connect_timeout if connect_timeout is not None else settings.CONNECT_TIMEOUT
        self._timeout = httpx.Timeout(float(overall), connect=float(conn))

    @property
    def base_url(self) -> str:
        return self._base_url

    def is_test_mode(self) -> bool:
        """True for sandbox keys. Decided from the key prefix alone."""
        return self._test_mode

    def _headers(self) -> dict[str, str]:
        return {
            "X-Api-Key": self._api_key,
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    @staticmethod
    def _check_path(check_id: str, suffix: str = "") -> str:
        return f"{CHECKS_PATH}/{check_id}{suffix}"

    @staticmethod
    def _list_params(filters: dict[str, Any]) -> dict[str, Any]:
        unknown = set(filters) - set(LIST_FILTERS)
        if unknown:
            logger.debug("Passing unrecognized list filters: %s", sorted(unknown))
        return {key: value for key, value in filters.items() if value is not None}

    @staticmethod
    def _upload_fields(image_type: str, auto_extract: bool) -> dict[str, str]:
        return {
            "image_type": image_type,
            "auto_extract": "true" if auto_extract else "false",
        }

    @staticmethod
    def _parse(
        operation: str,
        resp: httpx.Response,
        build: Callable[[dict[str, Any]], ResponseT],
    ) -> ResponseT:
        """Turn a raw response into a model, or raise a prefixed KycError."""
        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.warning("%s: HTTP %d: %s", operation, resp.status_code, detail)
            raise KycError(
                f"{operation}: HTTP {resp.status_code}: {detail}",
                code=resp.status_code,
            )

        try:
            body = decode_body(resp)
        except KycError as e:
            logger.warning("%s: %s", operation, e.message)
            raise KycError(
                f"{operation}: {e.message}",
                code=resp.status_code,
                cause=e.cause or e,
            ) from e

        return build(extract_response_data(body))

    @staticmethod
    def _transport_error(operation: str, e: httpx.HTTPError) -> KycError:
        logger.warning("%s: %s", operation, e)
        return KycError(f"{operation}: {e}", cause=e)


def _error_detail(resp: httpx.Response) -> str:
    """Best-effort server message for a failed response."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return resp.reason_phrase or f"HTTP {resp.status_code}"


class KycClient(_BaseKycClient):
    """Blocking client for the KYC API.

    Example:
        with KycClient("dfb_test_...") as client:
            check = client.create_check({...})
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(api_key, base_url, timeout, connect_timeout)
        self._client = httpx.Client(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=transport,
        )

    def close(self):
        self._client.close()

    def __enter__(self) -> "KycClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        build: Callable[[dict[str, Any]], ResponseT],
        **kwargs: Any,
    ) -> ResponseT:
        logger.debug("%s %s", method, path)
        try:
            if method == "GET":
                resp = self._client.get(path, **kwargs)
            else:
                resp = self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            raise self._transport_error(operation, e) from e

        return self._parse(operation, resp, build)

    def create_check(self, payload: dict[str, Any]) -> CheckResponse:
        """Create a KYC check.

        Raises:
            ValidationError: If the payload fails local validation
            KycError: On transport or protocol failure
        """
        validate_check_creation(payload)
        return self._request(
            "Failed to create KYC check", "POST", CHECKS_PATH,
            CheckResponse.from_payload, json=payload,
        )

    def get_check(self, check_id: str) -> CheckResponse:
        return self._request(
            "Failed to get KYC check", "GET", self._check_path(check_id),
            CheckResponse.from_payload,
        )

    def list_checks(self, **filters: Any) -> CheckListResponse:
        """List checks. Filters: status, result, user_reference, per_page, page."""
        return self._request(
            "Failed to list KYC checks", "GET", CHECKS_PATH,
            CheckListResponse.from_payload, params=self._list_params(filters),
        )

    def reprocess_check(self, check_id: str) -> CheckResponse:
        return self._request(
            "Failed to reprocess KYC check", "POST", self._check_path(check_id, "/reprocess"),
            CheckResponse.from_payload,
        )

    def upload_document(
        self,
        check_id: str,
        image_path: str | os.PathLike,
        image_type: str,
        auto_extract: bool = True,
    ) -> DocumentResponse:
        """Upload a document image, optionally running OCR extraction.

        The file is streamed from disk, not read into memory.
        """
        mime_type = validate_document_upload(image_path, image_type)
        path = Path(image_path)

        # Log size only, never image content
        logger.info(
            "Uploading document: check=%s type=%s size=%d bytes",
            check_id, image_type, path.stat().st_size,
        )

        with path.open("rb") as image:
            return self._request(
                "Failed to upload document", "POST", self._check_path(check_id, "/documents"),
                DocumentResponse.from_payload,
                files={"image": (path.name, image, mime_type)},
                data=self._upload_fields(image_type, auto_extract),
            )

    def get_documents(self, check_id: str) -> DocumentListResponse:
        return self._request(
            "Failed to get documents", "GET", self._check_path(check_id, "/documents"),
            DocumentListResponse.from_payload,
        )


class AsyncKycClient(_BaseKycClient):
    """Async counterpart of KycClient, backed by httpx.AsyncClient."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(api_key, base_url, timeout, connect_timeout)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=transport,
        )

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncKycClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        build: Callable[[dict[str, Any]], ResponseT],
        **kwargs: Any,
    ) -> ResponseT:
        logger.debug("%s %s", method, path)
        try:
            if method == "GET":
                resp = await self._client.get(path, **kwargs)
            else:
                resp = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            raise self._transport_error(operation, e) from e

        return self._parse(operation, resp, build)

    async def create_check(self, payload: dict[str, Any]) -> CheckResponse:
        validate_check_creation(payload)
        return await self._request(
            "Failed to create KYC check", "POST", CHECKS_PATH,
            CheckResponse.from_payload, json=payload,
        )

    async def get_check(self, check_id: str) -> CheckResponse:
        return await self._request(
            "Failed to get KYC check", "GET", self._check_path(check_id),
            CheckResponse.from_payload,
        )

    async def list_checks(self, **filters: Any) -> CheckListResponse:
        return await self._request(
            "Failed to list KYC checks", "GET", CHECKS_PATH,
            CheckListResponse.from_payload, params=self._list_params(filters),
        )

    async def reprocess_check(self, check_id: str) -> CheckResponse:
        return await self._request(
            "Failed to reprocess KYC check", "POST", self._check_path(check_id, "/reprocess"),
            CheckResponse.from_payload,
        )

    async def upload_document(
        self,
        check_id: str,
        image_path: str | os.PathLike,
        image_type: str,
        auto_extract: bool = True,
    ) -> DocumentResponse:
        """Upload a document image.

        httpx's async multipart encoder reads file parts synchronously, so
        the file is read in full before sending.
        """
        mime_type = validate_document_upload(image_path, image_type)
        path = Path(image_path)
        content = path.read_bytes()

        logger.info(
            "Uploading document: check=%s type=%s size=%d bytes",
            check_id, image_type, len(content),
        )

        return await self._request(
            "Failed to upload document", "POST", self._check_path(check_id, "/documents"),
            DocumentResponse.from_payload,
            files={"image": (path.name, content, mime_type)},
            data=self._upload_fields(image_type, auto_extract),
        )

    async def get_documents(self, check_id: str) -> DocumentListResponse:
        return await self._request(
            "Failed to get documents", "GET", self._check_path(check_id, "/documents"),
            DocumentListResponse.from_payload,
        )
