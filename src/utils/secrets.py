import json
from functools import lru_cache

import boto3

from utils.logger import get_logger

logger = get_logger("secrets")


@lru_cache(maxsize=8)
def get_twilio_secrets(secret_name: str, region_name: str = "us-east-1") -> dict:
    """
    Fetch Twilio credentials from AWS Secrets Manager.

    Expects the secret value to be a JSON object, e.g.:

        {
          "account_sid": "AC...",
          "auth_token": "...",
          "phone_number": "+15551234567"
        }

    Results are cached per container; a failed lookup raises and is not cached.
    """
    logger.info(
        "secrets.fetch",
        extra={"secret_name": secret_name, "region": region_name},
    )

    client = boto3.client("secretsmanager", region_name=region_name)

    resp = client.get_secret_value(SecretId=secret_name)
    secret_str = resp.get("SecretString")

    if not secret_str:
        msg = f"Secret '{secret_name}' has no SecretString payload"
        logger.error(msg)
        raise RuntimeError(msg)

    try:
        data = json.loads(secret_str)
    except json.JSONDecodeError as e:
        logger.error(
            "secrets.invalid_json",
            extra={"secret_name": secret_name, "error": str(e)},
        )
        raise RuntimeError(f"Secret '{secret_name}' is not valid JSON") from e

    if not isinstance(data, dict):
        raise RuntimeError(f"Secret '{secret_name}' must be a JSON object")

    return data
