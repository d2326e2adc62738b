# therapy_scheduler/utils/errors.py

from fastapi import HTTPException


class UnauthorizedRequestError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=401, detail=detail)


# Domain errors. Routers turn these into their endpoint's JSON error shape.

class ConfigurationError(RuntimeError):
    """A required secret or setting is absent from the environment."""

class ChatCompletionError(RuntimeError):
    """The chat-completion upstream failed or returned nothing usable."""

class CalendarBookingError(RuntimeError):
    """Token refresh or event insertion against Google Calendar failed."""

class OAuthStateError(ValueError):
    """The OAuth `state` parameter is missing, malformed or lacks a therapist id."""

class OAuthExchangeError(RuntimeError):
    """Google rejected the authorization-code exchange."""
