"""Envelope normalization for API responses.

The API answers in one of two shapes:

    {"status": "success", "check_id": "...", ...}
    {"status": "success", "data": {"check_id": "...", ...}}

Both are reduced to the flat form before any response model sees them.
"""

import json
from typing import Any

import httpx

from .exceptions import KycError


def extract_response_data(body: dict[str, Any]) -> dict[str, Any]:
    """Flatten a wrapped envelope; fields from ``data`` win on collision."""
    data = body.get("data")
    if isinstance(data, dict):
        flattened = {key: value for key, value in body.items() if key != "data"}
        flattened.update(data)
        return flattened

    return body


def decode_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body.

    Raises:
        KycError: If the body is not JSON or is not a JSON object
    """
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise KycError("Invalid response from API", cause=e) from e

    if not isinstance(body, dict):
        raise KycError("Invalid response from API")

    return body
