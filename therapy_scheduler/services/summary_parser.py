# therapy_scheduler/services/summary_parser.py

import re
from typing import Iterable, Optional
from pydantic import BaseModel

# field name -> label the model is prompted to emit
SUMMARY_LABELS = {
    "problem": "Problem",
    "schedule": "Schedule",
    "insurance": "Insurance",
    "specialist_needed": "Specialist Needed",
    "contact": "Contact",
    "matched_therapist": "Matched Therapist",
}
REQUIRED_FIELDS = ("problem", "schedule", "insurance", "specialist_needed")


def _label_pattern(label: str) -> re.Pattern:
    # `Label:` at line start, after optional indent, bullet or markdown emphasis;
    # value runs to end of line
    return re.compile(
        rf"^[ \t]*(?:(?:[-*•]|\d+[.)])[ \t]+)?[*_]*{re.escape(label)}[*_]*[ \t]*:[*_]*[ \t]*([^\r\n]*)",
        re.MULTILINE,
    )


_PATTERNS = {field: _label_pattern(label) for field, label in SUMMARY_LABELS.items()}


class SummaryFields(BaseModel):
    problem: str
    schedule: str
    insurance: str
    specialist_needed: str
    contact: Optional[str] = None
    matched_therapist: Optional[str] = None


def extract_field(text: str, field: str) -> Optional[str]:
    match = _PATTERNS[field].search(text)
    if not match:
        return None
    value = match.group(1).strip().strip("*_").strip()
    return value or None


def parse_summary(text: Optional[str]) -> Optional[SummaryFields]:
    """
    Pulls the labeled summary fields out of an assistant reply.

    Returns None unless Problem, Schedule, Insurance and Specialist Needed are
    all present; Contact and Matched Therapist are optional.
    """
    if not text:
        return None
    values = {field: extract_field(text, field) for field in SUMMARY_LABELS}
    if any(values[field] is None for field in REQUIRED_FIELDS):
        return None
    return SummaryFields(**values)


def find_summary(candidates: Iterable[Optional[str]]) -> Optional[SummaryFields]:
    """First candidate text that parses as a complete summary, in the given order."""
    for text in candidates:
        summary = parse_summary(text)
        if summary is not None:
            return summary
    return None
