"""Caller-side error handling: validation errors, retries and backoff.

The library never retries. This example retries transport failures with
tenacity and leaves validation errors alone, since resending the same
payload cannot fix them.

    pip install "datafabric-kyc[examples]"
"""

import logging
import os

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from datafabric_kyc import CheckResponse, KycClient, KycError, ValidationError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, ValidationError) or not isinstance(exc, KycError):
        return False
    # 4xx other than rate limiting will fail the same way again
    return exc.code is None or exc.code == 429 or exc.code >= 500


@retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, exp_base=2, max=30),
    reraise=True,
    before_sleep=lambda state: logger.warning(
        "KYC request failed, retrying in %.1fs (attempt %d/3)",
        state.next_action.sleep,  # type: ignore[union-attr]
        state.attempt_number,
    ),
)
def create_check_with_retry(client: KycClient, payload: dict) -> CheckResponse:
    return client.create_check(payload)


def friendly_message(e: KycError) -> str:
    if "Missing required field" in e.message:
        return "Please fill in all required fields."
    if "Invalid document_type" in e.message:
        return "Please select a valid document type."
    if "Invalid date" in e.message:
        return "Please enter a valid date of birth (YYYY-MM-DD)."
    if e.code == 401:
        return "Authentication failed. Please check your API key."
    if e.code == 429:
        return "Too many requests. Please try again in a few minutes."
    return "An error occurred. Please try again later."


def main():
    api_key = os.environ.get("DATAFABRIC_API_KEY", "dfb_test_your_api_key_here")

    with KycClient(api_key) as client:
        try:
            client.create_check({"first_name": "Test", "last_name": "User", "date_of_birth": "15-05-1990"})
        except ValidationError as e:
            logger.info("Rejected locally: %s -> %s", e, friendly_message(e))

        try:
            check = create_check_with_retry(client, {
                "first_name": "Retry",
                "last_name": "Test",
                "date_of_birth": "1990-01-01",
                "document_type": "passport",
                "document_number": "RETRY123",
            })
            logger.info("Created %s", check.check_id)
        except KycError as e:
            logger.error("Giving up: %s (code=%s) -> %s", e, e.code, friendly_message(e))


if __name__ == "__main__":
    main()
