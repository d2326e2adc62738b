# tests/conftest.py

import os
import sys
from datetime import datetime

# Add the project root (where `therapy_scheduler/` lives) to PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi.testclient import TestClient

from therapy_scheduler.core.config import Settings, get_settings
from therapy_scheduler.main import app
from therapy_scheduler.models.inquiry import InquiryCreate, InquiryInDB
from therapy_scheduler.models.therapist import Therapist
from therapy_scheduler.routers.deps import (
    get_booker,
    get_gateway,
    get_repository,
)
from therapy_scheduler.utils.errors import CalendarBookingError


SUMMARY_REPLY = (
    "Thanks! Here is a summary of what you've told me:\n\n"
    "Problem: Anxiety\n"
    "Schedule: Weekdays at 4pm\n"
    "Insurance: Aetna\n"
    "Specialist Needed: Anxiety\n"
    "Contact: jane@example.com\n"
    "Matched Therapist: Dr. Amanda Wilson\n\n"
    "Does this look correct? Reply \"yes\" to confirm."
)


def make_settings(**overrides) -> Settings:
    values = dict(
        OPENAI_API_KEY="sk-test",
        SECRET_KEY="test-secret",
        GOOGLE_CLIENT_ID="client-id",
        GOOGLE_CLIENT_SECRET="client-secret",
        GOOGLE_REFRESH_TOKEN="default-refresh",
        GOOGLE_REDIRECT_URI="http://testserver/oauth",
        FRONTEND_URL="http://frontend.test",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeRepository:
    def __init__(self, therapists=None):
        self.therapists = list(therapists or [])
        self.inserted = []
        self.refresh_tokens = {}

    async def list_therapists(self, limit: int = 100):
        return self.therapists[:limit]

    async def get_therapist(self, therapist_id):
        return next((t for t in self.therapists if t.id == therapist_id), None)

    async def set_google_refresh_token(self, therapist_id, refresh_token):
        self.refresh_tokens[therapist_id] = refresh_token

    async def insert_inquiry(self, inquiry: InquiryCreate):
        self.inserted.append(inquiry)
        return InquiryInDB(
            _id=f"inq-{len(self.inserted)}",
            created_at=datetime(2025, 5, 1, 12, 0, 0),
            **inquiry.model_dump(),
        )


class FakeGateway:
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or ["How can I help you today?"])
        self.error = error
        self.calls = []

    async def complete_async(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]


class FakeBooker:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def book(self, refresh_token=None):
        self.calls.append(refresh_token)
        if self.fail:
            raise CalendarBookingError("Calendar insert failed: 403")
        return {
            "success": True,
            "eventId": "evt-1",
            "eventDetails": {
                "summary": "Therapy Session",
                "start": "2025-05-15T16:00:00-07:00",
                "end": "2025-05-15T17:00:00-07:00",
            },
        }


@pytest.fixture
def therapists():
    return [
        Therapist(
            id="t-1",
            name="Dr. Amanda Wilson",
            specialties=["Anxiety", "Depression", "PTSD"],
            accepted_insurance=["Aetna", "Blue Cross"],
            google_refresh_token="amanda-refresh",
        ),
        Therapist(
            id="t-2",
            name="Dr. James Taylor",
            specialties="Family Therapy, Couples Counseling",
            accepted_insurance="United, Kaiser",
        ),
    ]


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def repository(therapists):
    return FakeRepository(therapists)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def booker():
    return FakeBooker()


@pytest.fixture
def client(settings, repository, gateway, booker):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_booker] = lambda: booker
    yield TestClient(app)
    app.dependency_overrides.clear()
