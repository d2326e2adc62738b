# therapy_scheduler/services/google_oauth.py

import base64
import binascii
import json

from authlib.integrations.base_client import OAuthError
from authlib.integrations.requests_client import OAuth2Session
from fastapi.concurrency import run_in_threadpool

from therapy_scheduler.core.config import Settings
from therapy_scheduler.core.logger import logger
from therapy_scheduler.utils.errors import OAuthExchangeError, OAuthStateError

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
CALENDAR_SCOPES = " ".join([
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/calendar.readonly",
])


def encode_state(therapist_id: str) -> str:
    return base64.b64encode(json.dumps({"therapistId": therapist_id}).encode("utf-8")).decode("ascii")


def decode_state(state: str) -> str:
    """Returns the therapist id carried in the OAuth `state` parameter."""
    if not state:
        raise OAuthStateError("State parameter is missing")
    try:
        payload = json.loads(base64.b64decode(state, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise OAuthStateError(f"Malformed state parameter: {e}") from e

    therapist_id = payload.get("therapistId") if isinstance(payload, dict) else None
    if not therapist_id:
        raise OAuthStateError("Therapist ID not found in state")
    return str(therapist_id)


class GoogleOAuthClient:
    """Offline-access consent flow that connects a therapist's Google Calendar."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _session(self) -> OAuth2Session:
        self.settings.require("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET")
        return OAuth2Session(
            client_id=self.settings.GOOGLE_CLIENT_ID,
            client_secret=self.settings.GOOGLE_CLIENT_SECRET,
            scope=CALENDAR_SCOPES,
            redirect_uri=self.settings.GOOGLE_REDIRECT_URI,
        )

    def generate_oauth_url(self, therapist_id: str) -> str:
        url, _ = self._session().create_authorization_url(
            GOOGLE_AUTH_URL,
            state=encode_state(therapist_id),
            access_type="offline",
            prompt="consent",
        )
        return url

    def exchange_code(self, code: str) -> dict:
        logger.info("Exchanging authorization code for tokens")
        try:
            token = self._session().fetch_token(
                GOOGLE_TOKEN_URL,
                code=code,
                grant_type="authorization_code",
            )
        except OAuthError as e:
            logger.error(f"Error exchanging code: {e}")
            raise OAuthExchangeError(f"Failed to exchange code: {e}") from e

        if not token.get("refresh_token"):
            raise OAuthExchangeError("Google did not return a refresh token")
        logger.info("Tokens obtained successfully")
        return dict(token)

    async def exchange_code_async(self, code: str) -> dict:
        return await run_in_threadpool(self.exchange_code, code)
