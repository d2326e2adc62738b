# therapy_scheduler/models/therapist.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class Therapist(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    specialties: Union[str, List[str]] = ""
    accepted_insurance: Union[str, List[str]] = Field(default="", alias="acceptedInsurance")
    google_refresh_token: Optional[str] = None

    @classmethod
    def from_mongo(cls, doc: dict) -> "Therapist":
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc.get("id") or doc["_id"])
        return cls(**data)

    @property
    def specialties_text(self) -> str:
        return _as_text(self.specialties)

    @property
    def insurance_text(self) -> str:
        return _as_text(self.accepted_insurance)

    def directory_line(self) -> str:
        """One line for the system prompt's therapist directory."""
        return (
            f"- {self.name} | Specialties: {self.specialties_text or 'n/a'}"
            f" | Accepted insurance: {self.insurance_text or 'n/a'}"
        )


def _as_text(value: Union[str, List[str], None]) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return ", ".join(str(v) for v in value)
