from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Union

from utils.errors import ProviderDispatchError
from utils.logger import get_logger

logger = get_logger("dispatch")

MISSING_FIELDS_ERROR = 'Missing "to" or "body"'


class SmsProvider(Protocol):
    def send(self, to: str, body: str) -> Any:
        """Send one SMS; return an object with `sid` and `status` or raise."""
        ...


@dataclass(frozen=True)
class Message:
    to: str
    body: str


@dataclass(frozen=True)
class Success:
    to: str
    sid: str
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {"to": self.to, "sid": self.sid, "status": self.status}


@dataclass(frozen=True)
class Failure:
    to: Any
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"to": self.to, "error": self.error}


Outcome = Union[Success, Failure]


@dataclass
class BatchResult:
    sent: List[Success]
    errors: List[Failure]

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "sent": [s.to_dict() for s in self.sent],
        }
        # "errors" only appears when something failed
        if self.errors:
            payload["errors"] = [f.to_dict() for f in self.errors]
        return payload


def validate_item(item: Any) -> Optional[Message]:
    """
    Return a Message if the item has non-empty string `to` and `body`,
    otherwise None.
    """
    if not isinstance(item, dict):
        return None
    to = item.get("to")
    body = item.get("body")
    if not isinstance(to, str) or not isinstance(body, str) or not to or not body:
        return None
    return Message(to=to, body=body)


def dispatch_one(item: Any, provider: SmsProvider) -> Outcome:
    message = validate_item(item)
    if message is None:
        to = item.get("to") if isinstance(item, dict) else None
        logger.warning("dispatch.item_invalid", extra={"to": to})
        return Failure(to=to, error=MISSING_FIELDS_ERROR)

    try:
        receipt = provider.send(message.to, message.body)
    except ProviderDispatchError as e:
        logger.error(
            "dispatch.provider_error",
            extra={"to": message.to, "error": e.description, "code": e.code},
        )
        return Failure(to=message.to, error=e.description)
    except Exception as e:
        # Transport failures and anything else: the batch goes on.
        logger.exception("dispatch.unexpected_error", extra={"to": message.to})
        return Failure(to=message.to, error=str(e) or e.__class__.__name__)

    logger.info(
        "dispatch.sent",
        extra={"to": message.to, "sid": receipt.sid, "status": receipt.status},
    )
    return Success(to=message.to, sid=receipt.sid, status=receipt.status)


def dispatch_batch(items: List[Any], provider: SmsProvider) -> BatchResult:
    """
    Send every item in input order and collect one outcome per item.

    A failing item never stops the ones after it, and nothing is retried.
    """
    result = BatchResult(sent=[], errors=[])
    for item in items:
        outcome = dispatch_one(item, provider)
        if isinstance(outcome, Success):
            result.sent.append(outcome)
        else:
            result.errors.append(outcome)
    return result
