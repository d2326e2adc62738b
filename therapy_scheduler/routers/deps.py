# therapy_scheduler/routers/deps.py

from typing import Any, Optional
from fastapi import Depends, Request
from jose import JWTError

from therapy_scheduler.core.config import Settings, get_settings
from therapy_scheduler.core.jwt import decode_jwt_token
from therapy_scheduler.db.mongo import db
from therapy_scheduler.services.calendar import CalendarBooker
from therapy_scheduler.services.chat_engine import ChatCompletionGateway
from therapy_scheduler.services.google_oauth import GoogleOAuthClient
from therapy_scheduler.services.inquiry_store import InquiryRepository
from therapy_scheduler.utils.errors import UnauthorizedRequestError


def get_repository() -> InquiryRepository:
    return InquiryRepository(db)

def get_gateway(settings: Settings = Depends(get_settings)) -> ChatCompletionGateway:
    return ChatCompletionGateway(settings)

def get_booker(settings: Settings = Depends(get_settings)) -> CalendarBooker:
    return CalendarBooker(settings)

def get_oauth_client(settings: Settings = Depends(get_settings)) -> GoogleOAuthClient:
    return GoogleOAuthClient(settings)


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty. Invalid JSON raises ValueError."""
    if not (await request.body()).strip():
        return None
    return await request.json()


def get_current_user(authorization: Optional[str], settings: Settings) -> dict:
    """
    Validates an `Authorization: Bearer <jwt>` header value.

    Not wired through Depends: the OAuth endpoint reports auth failures in its
    own `{error}` body, so it calls this inside its handler.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedRequestError("Missing or invalid authorization header")

    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = decode_jwt_token(token, settings)
    except JWTError:
        raise UnauthorizedRequestError("Invalid authentication token")

    user_id = payload.get("sub")
    if user_id is None:
        raise UnauthorizedRequestError("Invalid authentication token")
    return {"user_id": user_id, "role": payload.get("role", "user")}
