"""
Helpers for API Gateway proxy events (REST v1 and HTTP API v2 payloads).
"""

import base64
import binascii
import json
from typing import Any, Dict, Optional

from utils.logger import get_logger

logger = get_logger("http")

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def get_method(event: dict) -> str:
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method") or ""
    return str(method).upper()


def cors_headers(allowed_origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Content-Type": "application/json",
    }


def json_response(status_code: int, payload: Optional[Any], headers: Dict[str, str]) -> dict:
    """
    Build a Lambda proxy response. A payload of None yields an empty body.
    """
    return {
        "statusCode": status_code,
        "headers": dict(headers),
        "body": "" if payload is None else json.dumps(payload),
    }


def parse_body(event: dict) -> Any:
    """
    Extract and parse the JSON body from the Lambda event.

    - For API Gateway: event["body"] is a JSON string, possibly base64-encoded.
    - For direct invocations and local tests: body may already be a dict.

    Raises ValueError when there is no body or it is not valid JSON.
    """
    body = event.get("body")

    if isinstance(body, dict):
        return body

    if not isinstance(body, str):
        raise ValueError("missing body")

    raw_body = body
    if event.get("isBase64Encoded"):
        try:
            raw_body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError("body is not valid base64") from e

    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning(
            "http.invalid_json",
            extra={"body_preview": raw_body[:200]},
        )
        raise ValueError("body is not valid JSON") from e
