"""Create a check and poll it until a decision is available."""

import logging
import os
import time

from datafabric_kyc import KycClient, KycError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    api_key = os.environ.get("DATAFABRIC_API_KEY", "dfb_test_your_api_key_here")

    with KycClient(api_key) as client:
        if client.is_test_mode():
            logger.info("Using sandbox key against %s", client.base_url)

        try:
            check = client.create_check({
                "user_reference": "user_12345",
                "first_name": "John",
                "last_name": "Doe",
                "date_of_birth": "1990-05-15",
                "document_type": "passport",
                "document_number": "AB1234567",
                "country": "US",
            })
            logger.info("Created check %s (status=%s)", check.check_id, check.status)

            while check.is_pending():
                time.sleep(2)
                check = client.get_check(check.check_id)

            if check.is_approved():
                logger.info("Approved, risk score %s", check.risk_score)
            elif check.requires_review():
                logger.info("Manual review required")
            else:
                logger.info("Finished with status=%s result=%s", check.status, check.result)
        except KycError as e:
            logger.error("KYC request failed: %s (code=%s)", e, e.code)


if __name__ == "__main__":
    main()
