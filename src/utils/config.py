import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from botocore.exceptions import BotoCoreError, ClientError

from utils.logger import get_logger
from utils.secrets import get_twilio_secrets

logger = get_logger("config")

DEFAULT_MAX_MESSAGES = 10
DEFAULT_ALLOWED_ORIGIN = "*"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration for the relay.

    Built from the environment on each invocation and handed to the handler;
    nothing reads os.environ after this point.
    """

    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    from_number: Optional[str] = None
    allowed_origin: str = DEFAULT_ALLOWED_ORIGIN
    max_messages: int = DEFAULT_MAX_MESSAGES

    def missing_credentials(self) -> List[str]:
        return [
            name
            for name, value in [
                ("account_sid", self.account_sid),
                ("auth_token", self.auth_token),
                ("from_number", self.from_number),
            ]
            if not value
        ]

    def __repr__(self) -> str:
        # Keep the auth token out of logs and tracebacks.
        return (
            f"Settings(account_sid={self.account_sid!r}, auth_token={'***' if self.auth_token else None}, "
            f"from_number={self.from_number!r}, allowed_origin={self.allowed_origin!r}, "
            f"max_messages={self.max_messages!r})"
        )


def _parse_max_messages(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        return DEFAULT_MAX_MESSAGES
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "config.invalid_max_messages",
            extra={"value": raw, "fallback": DEFAULT_MAX_MESSAGES},
        )
        return DEFAULT_MAX_MESSAGES
    return value


def _secret_credentials(secret_name: str, region_name: str) -> dict:
    """
    Look up credentials in Secrets Manager. Any failure is logged and yields
    an empty dict, so the handler reports a configuration error.
    """
    try:
        data = get_twilio_secrets(secret_name, region_name)
    except (BotoCoreError, ClientError, RuntimeError) as e:
        logger.error(
            "config.secret_lookup_failed",
            extra={"secret_name": secret_name, "error": str(e)},
        )
        return {}

    return {
        "account_sid": data.get("account_sid"),
        "auth_token": data.get("auth_token"),
        "from_number": data.get("phone_number") or data.get("from_number"),
    }


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER: credentials
    ALLOWED_ORIGIN: CORS origin, "*" when unset
    MAX_MESSAGES_PER_REQUEST: per-request send cap, 10 when unset
    TWILIO_SECRET_NAME: optional Secrets Manager secret used to fill in
                        whichever credentials the environment lacks

    Missing credentials are not an error here; the handler decides, since a
    CORS pre-flight must succeed even on a misconfigured deployment.
    """
    env = os.environ if environ is None else environ

    credentials = {
        "account_sid": env.get("TWILIO_ACCOUNT_SID") or None,
        "auth_token": env.get("TWILIO_AUTH_TOKEN") or None,
        "from_number": env.get("TWILIO_PHONE_NUMBER") or None,
    }

    secret_name = env.get("TWILIO_SECRET_NAME")
    if secret_name and not all(credentials.values()):
        region_name = env.get("AWS_REGION", "us-east-1")
        from_secret = _secret_credentials(secret_name, region_name)
        for key, value in credentials.items():
            if not value:
                credentials[key] = from_secret.get(key) or None

    return Settings(
        allowed_origin=env.get("ALLOWED_ORIGIN") or DEFAULT_ALLOWED_ORIGIN,
        max_messages=_parse_max_messages(env.get("MAX_MESSAGES_PER_REQUEST")),
        **credentials,
    )
