# therapy_scheduler/services/confirmation.py

from typing import Optional

# Closed vocabulary. Anything else, "yes please" included, is not a confirmation.
CONFIRMATION_PHRASES = frozenset({
    "yes",
    "y",
    "yes.",
    "yes!",
    "yeah",
    "yep",
    "yup",
    "ok",
    "okay",
    "correct",
    "confirm",
    "confirmed",
    "sure",
    "right",
    "that's right",
    "that's correct",
    "that is correct",
    "yes, that's correct",
    "yes that's correct",
    "yes, correct",
    "sounds good",
    "looks good",
    "perfect",
})


def is_confirmation(message: Optional[str]) -> bool:
    if not message:
        return False
    return message.strip().lower() in CONFIRMATION_PHRASES
