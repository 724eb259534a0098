from typing import Callable, Optional

from dispatch import SmsProvider, dispatch_batch
from utils.config import Settings, load_settings
from utils.errors import (
    ConfigurationError,
    MalformedRequest,
    MethodNotAllowed,
    RelayError,
    TooManyMessages,
)
from utils.http import cors_headers, get_method, json_response, parse_body
from utils.logger import get_logger
from utils.twilio_client import TwilioProvider

logger = get_logger("send_sms")

ProviderFactory = Callable[[Settings], SmsProvider]


class SendSmsHandler:
    """
    POST /send-sms: relay a batch of up to `max_messages` SMS through Twilio.

    Request:  {"messages": [{"to": "+1555...", "body": "..."}, ...]}
    Response: {"success": bool, "sent": [{to, sid, status}], "errors": [{to, error}]}

    Method, credentials, body shape and batch size are checked in that order
    and any violation ends the request before Twilio is contacted. Once the
    batch is accepted the response is always 200; per-message failures are
    reported in the body.
    """

    def __init__(
        self,
        settings: Settings,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        self.settings = settings
        self.provider_factory = provider_factory or TwilioProvider.from_settings
        self.headers = cors_headers(settings.allowed_origin)

    def handle(self, event: dict) -> dict:
        try:
            return self._handle(event)
        except RelayError as e:
            logger.warning(
                "send_sms.rejected",
                extra={"status_code": e.status_code, "error": e.message},
            )
            return json_response(e.status_code, {"error": e.message}, self.headers)
        except Exception:
            logger.exception("send_sms.internal_error")
            return json_response(500, {"error": "Internal server error."}, self.headers)

    def _handle(self, event: dict) -> dict:
        # 1) Method
        method = get_method(event)
        if method == "OPTIONS":
            return json_response(200, None, self.headers)
        if method != "POST":
            raise MethodNotAllowed()

        # 2) Credentials
        missing = self.settings.missing_credentials()
        if missing:
            logger.error("send_sms.env_error", extra={"missing": missing})
            raise ConfigurationError()

        # 3) Body
        messages = self._parse_messages(event)

        # 4) Cap
        if len(messages) > self.settings.max_messages:
            raise TooManyMessages(self.settings.max_messages)

        # 5) Dispatch
        provider = self.provider_factory(self.settings)
        result = dispatch_batch(messages, provider)

        logger.info(
            "send_sms.done",
            extra={
                "requested": len(messages),
                "sent": len(result.sent),
                "failed": len(result.errors),
            },
        )
        return json_response(200, result.to_dict(), self.headers)

    def _parse_messages(self, event: dict) -> list:
        try:
            payload = parse_body(event)
        except ValueError:
            raise MalformedRequest()

        messages = payload.get("messages") if isinstance(payload, dict) else None
        if not isinstance(messages, list) or not messages:
            raise MalformedRequest()
        return messages


def lambda_handler(event, context):
    logger.info(
        "send_sms.lambda_start",
        extra={
            "request_id": getattr(context, "aws_request_id", None),
            "method": get_method(event),
        },
    )

    return SendSmsHandler(load_settings()).handle(event)
