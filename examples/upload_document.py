"""Upload an ID image and read back the OCR extraction."""

import logging
import os
import sys

from datafabric_kyc import KycClient, KycError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def main(image_path: str):
    api_key = os.environ.get("DATAFABRIC_API_KEY", "dfb_test_your_api_key_here")

    with KycClient(api_key) as client:
        try:
            check = client.create_check({
                "first_name": "Ahmad",
                "last_name": "Ibrahim",
                "date_of_birth": "1995-03-20",
                "document_type": "national_id",
                "document_number": "TEMP123456",
            })
            doc = client.upload_document(check.check_id, image_path, "front", auto_extract=True)
        except KycError as e:
            logger.error("Upload failed: %s", e)
            sys.exit(1)

        logger.info("Uploaded document %s (%s)", doc.id, doc.image_type)
        if doc.has_ocr_data:
            logger.info(
                "OCR via %s, confidence %s%%: name=%s id=%s dob=%s",
                doc.provider, doc.confidence, doc.extracted_full_name,
                doc.extracted_id_number, doc.extracted_date_of_birth,
            )
        else:
            logger.info("No OCR data extracted")

        documents = client.get_documents(check.check_id)
        logger.info("Check has %d document(s), %d front", documents.count(), len(documents.documents_by_type("front")))


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "sample-id-front.jpg")
