# therapy_scheduler/models/inquiry.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class InquiryStatus(str, Enum):
    PENDING = "pending"
    MATCHED = "matched"


class InquiryCreate(BaseModel):
    patient_identifier: str
    problem_description: str
    requested_schedule: str
    insurance_info: str
    extracted_specialty: str
    matched_therapist_id: Optional[str] = None
    matched_therapist_name: Optional[str] = None
    status: InquiryStatus = InquiryStatus.PENDING


class InquiryInDB(InquiryCreate):
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
    )

    id: str = Field(..., alias="_id")
    created_at: datetime

    def to_response_dict(self) -> dict:
        """JSON-safe dict returned to the browser as `savedData`."""
        return self.model_dump(mode="json")
