"""Create several checks in parallel.

The client does not coordinate concurrency. Fan-out is up to the caller;
each worker thread gets its own client.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed

from datafabric_kyc import CheckResponse, KycClient, KycError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

API_KEY = os.environ.get("DATAFABRIC_API_KEY", "dfb_test_your_api_key_here")

APPLICANTS = [
    {"first_name": "Ahmad", "last_name": "Ibrahim", "date_of_birth": "1995-03-20",
     "document_type": "national_id", "document_number": "950320145678"},
    {"first_name": "Maria", "last_name": "Santos", "date_of_birth": "1988-11-02",
     "document_type": "passport", "document_number": "P7788990"},
    {"first_name": "Wei", "last_name": "Chen", "date_of_birth": "2001-07-09",
     "document_type": "drivers_license", "document_number": "D1234567"},
]


def create_one(payload: dict) -> CheckResponse:
    with KycClient(API_KEY) as client:
        return client.create_check(payload)


def main():
    with ThreadPoolExecutor(max_workers=3) as pool:
        futures = {pool.submit(create_one, p): p["document_number"] for p in APPLICANTS}
        for future in as_completed(futures):
            number = futures[future]
            try:
                check = future.result()
                logger.info("%s -> %s (%s)", number, check.check_id, check.status)
            except KycError as e:
                logger.error("%s failed: %s", number, e)


if __name__ == "__main__":
    main()
