# therapy_scheduler/services/calendar.py

from datetime import datetime, timedelta
from typing import Optional

import requests
from fastapi.concurrency import run_in_threadpool
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from therapy_scheduler.core.config import Settings
from therapy_scheduler.core.logger import describe_secret, logger
from therapy_scheduler.utils.errors import CalendarBookingError, ConfigurationError

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


class CalendarBooker:
    """
    Books the fixed therapy-session event on a Google Calendar.

    Each booking is two straight calls: refresh token -> access token, then one
    events.insert. Nothing is retried.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def log_configuration(self) -> None:
        for name in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REFRESH_TOKEN"):
            logger.info(f"{name}: {describe_secret(getattr(self.settings, name))}")

    def build_event(self) -> dict:
        start = datetime.fromisoformat(self.settings.CALENDAR_EVENT_START)
        end = start + timedelta(minutes=self.settings.CALENDAR_EVENT_DURATION_MINUTES)
        return {
            "summary": self.settings.CALENDAR_EVENT_NAME,
            "description": self.settings.CALENDAR_EVENT_DESCRIPTION,
            "start": {"dateTime": start.isoformat(), "timeZone": self.settings.CALENDAR_TIMEZONE},
            "end": {"dateTime": end.isoformat(), "timeZone": self.settings.CALENDAR_TIMEZONE},
        }

    def get_access_token(self, refresh_token: str) -> str:
        logger.info("Exchanging refresh token for access token")
        response = requests.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": self.settings.GOOGLE_CLIENT_ID,
                "client_secret": self.settings.GOOGLE_CLIENT_SECRET,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
        )
        if not response.ok:
            logger.error(f"Token endpoint error: {response.text}")
            raise CalendarBookingError(f"Token exchange failed: {response.text}")

        access_token = response.json().get("access_token")
        if not access_token:
            raise CalendarBookingError("Token exchange failed: no access_token in response")
        return access_token

    def insert_event(self, access_token: str, event: dict) -> dict:
        service = build(
            "calendar", "v3",
            credentials=Credentials(token=access_token),
            cache_discovery=False,
        )
        try:
            return service.events().insert(
                calendarId=self.settings.GOOGLE_CALENDAR_ID,
                body=event,
            ).execute()
        except HttpError as e:
            logger.error(f"Calendar API error: {e}")
            raise CalendarBookingError(f"Calendar insert failed: {e}") from e

    def add_event(self, refresh_token: Optional[str] = None) -> dict:
        """
        Creates the event using `refresh_token`, or the process-wide
        GOOGLE_REFRESH_TOKEN when none is given.
        """
        self.settings.require("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET")
        refresh_token = refresh_token or self.settings.GOOGLE_REFRESH_TOKEN
        if not refresh_token:
            raise ConfigurationError("Missing one or more Google OAuth environment variables")

        access_token = self.get_access_token(refresh_token)
        event = self.build_event()
        data = self.insert_event(access_token, event)

        logger.info(f"Event created, id={data.get('id')}")
        return {
            "success": True,
            "eventId": data.get("id"),
            "eventDetails": {
                "summary": data.get("summary"),
                "start": (data.get("start") or {}).get("dateTime"),
                "end": (data.get("end") or {}).get("dateTime"),
            },
        }

    async def book(self, refresh_token: Optional[str] = None) -> dict:
        return await run_in_threadpool(self.add_event, refresh_token)
