# therapy_scheduler/schemas/calendar.py

from pydantic import BaseModel
from typing import Optional


class CalendarRequest(BaseModel):
    therapistId: Optional[str] = None

class EventDetails(BaseModel):
    summary: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

class CalendarResult(BaseModel):
    success: bool
    eventId: Optional[str] = None
    eventDetails: Optional[EventDetails] = None
    error: Optional[str] = None
