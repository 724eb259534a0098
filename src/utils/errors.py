"""
Error taxonomy for the SMS relay.

Request-level errors (subclasses of RelayError) abort the whole request before
anything is dispatched and are turned into a JSON `{"error": ...}` response by
the handler. ProviderDispatchError is item-level: the dispatch loop records it
as a failure for that one message and carries on.
"""

from typing import Optional


class RelayError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class MethodNotAllowed(RelayError):
    status_code = 405
    message = "Method Not Allowed"


class ConfigurationError(RelayError):
    # Never name the missing credential in the response.
    status_code = 500
    message = "Twilio credentials not configured on server."


class MalformedRequest(RelayError):
    status_code = 400
    message = "Invalid request body. Expected { messages: [{ to, body }] }"


class TooManyMessages(RelayError):
    status_code = 400

    def __init__(self, limit: int):
        super().__init__(f"Maximum {limit} messages per request.")
        self.limit = limit


class ProviderDispatchError(Exception):
    """Twilio rejected or failed to send a single message."""

    def __init__(self, description: str, code=None):
        super().__init__(description)
        self.description = description
        self.code = code
