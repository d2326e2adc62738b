# therapy_scheduler/services/therapist_matcher.py

from typing import Optional, Sequence
from therapy_scheduler.models.therapist import Therapist


def _contains(haystack: str, needle: Optional[str]) -> bool:
    return bool(needle) and needle.lower() in haystack.lower()


def match_therapist(
    therapists: Sequence[Therapist],
    name: Optional[str],
    specialty: Optional[str],
    insurance: Optional[str],
) -> Optional[Therapist]:
    """
    Resolves the therapist named in a summary.

    Tries, in order: exact name, case-insensitive name, then the first therapist
    whose specialties contain `specialty` and whose accepted insurance contains
    `insurance` (case-insensitive substrings). List order breaks ties.
    """
    if name:
        for therapist in therapists:
            if therapist.name == name:
                return therapist

        lowered = name.lower()
        for therapist in therapists:
            if therapist.name.lower() == lowered:
                return therapist

    for therapist in therapists:
        if _contains(therapist.specialties_text, specialty) and _contains(therapist.insurance_text, insurance):
            return therapist

    return None
