"""Walk every page of completed checks."""

import logging
import os

from datafabric_kyc import KycClient

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    api_key = os.environ.get("DATAFABRIC_API_KEY", "dfb_test_your_api_key_here")

    with KycClient(api_key) as client:
        page_number = 1
        while True:
            page = client.list_checks(status="completed", per_page=20, page=page_number)
            for check in page.checks:
                expired = " (expired)" if check.is_expired() else ""
                logger.info("%s result=%s%s", check.check_id, check.result, expired)

            if not page.has_more_pages():
                break
            page_number = page.current_page + 1

        logger.info("Total completed checks: %d", page.total)


if __name__ == "__main__":
    main()
