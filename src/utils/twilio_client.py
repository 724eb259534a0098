# utils/twilio_client.py

from dataclasses import dataclass
from functools import lru_cache

from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client as TwilioClient

from utils.config import Settings
from utils.errors import ConfigurationError, ProviderDispatchError
from utils.logger import get_logger

logger = get_logger("twilio_client")


@dataclass(frozen=True)
class ProviderReceipt:
    sid: str
    status: str


@lru_cache(maxsize=4)
def _client_for(account_sid: str, auth_token: str) -> TwilioClient:
    # One client per credential pair per container
    client = TwilioClient(account_sid, auth_token)
    logger.info("Twilio client initialized successfully")
    return client


def build_client(settings: Settings) -> TwilioClient:
    """
    Return an authenticated Twilio client for the given settings.

    Raises ConfigurationError when any credential is missing.
    """
    missing = settings.missing_credentials()
    if missing:
        logger.error("Missing Twilio credentials", extra={"missing": missing})
        raise ConfigurationError()

    return _client_for(settings.account_sid, settings.auth_token)


class TwilioProvider:
    """
    The relay's send capability: one Twilio Messages API call per message.

    send() returns a ProviderReceipt or raises ProviderDispatchError. There are
    no retries here; whatever the Twilio HTTP client does is what happens.
    """

    def __init__(self, client, from_number: str):
        self._client = client
        self._from_number = from_number

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioProvider":
        return cls(build_client(settings), settings.from_number)

    def send(self, to: str, body: str) -> ProviderReceipt:
        try:
            resp = self._client.messages.create(
                to=to,
                from_=self._from_number,
                body=body,
            )
        except TwilioRestException as e:
            # e.msg is the API's human-readable reason, without the SDK's
            # colourised traceback formatting.
            raise ProviderDispatchError(e.msg or str(e), code=e.code) from e
        except TwilioException as e:
            raise ProviderDispatchError(str(e)) from e

        return ProviderReceipt(sid=resp.sid, status=str(resp.status))
