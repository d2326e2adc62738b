# therapy_scheduler/services/chat_engine.py

from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from fastapi.concurrency import run_in_threadpool
from openai import OpenAI

from therapy_scheduler.core.config import Settings
from therapy_scheduler.core.logger import logger
from therapy_scheduler.models.inquiry import InquiryCreate, InquiryInDB, InquiryStatus
from therapy_scheduler.models.therapist import Therapist
from therapy_scheduler.services.calendar import CalendarBooker
from therapy_scheduler.services.confirmation import is_confirmation
from therapy_scheduler.services.inquiry_store import InquiryRepository
from therapy_scheduler.services.prompt_templates import (
    BOOKING_CONFIRMED_NOTE,
    BOOKING_FAILED_NOTE,
    FALLBACK_REPLY,
    build_system_prompt,
)
from therapy_scheduler.services.summary_parser import SummaryFields, find_summary
from therapy_scheduler.services.therapist_matcher import match_therapist
from therapy_scheduler.utils.errors import ChatCompletionError


class ChatCompletionGateway:
    """Role-tagged messages in, one assistant message out."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self.settings.require("OPENAI_API_KEY")
            self._client = OpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                base_url=self.settings.OPENAI_BASE_URL,
            )
        return self._client

    def complete(self, messages: List[Dict[str, str]]) -> str:
        client = self.client
        try:
            response = client.chat.completions.create(
                model=self.settings.LLM_MODEL,
                messages=messages,
                temperature=self.settings.LLM_TEMPERATURE,
                max_tokens=self.settings.LLM_MAX_TOKENS,
            )
        except Exception as e:
            raise ChatCompletionError(f"OpenAI error: {str(e)}") from e

        if not response.choices:
            return FALLBACK_REPLY
        return response.choices[0].message.content or FALLBACK_REPLY

    async def complete_async(self, messages: List[Dict[str, str]]) -> str:
        return await run_in_threadpool(self.complete, messages)


def summary_candidates(history: List[Dict[str, str]], reply: str) -> List[str]:
    """The reply the user is confirming (latest prior assistant turn), then the new reply."""
    candidates = []
    for msg in reversed(history):
        if msg["role"] == "assistant":
            candidates.append(msg["content"])
            break
    candidates.append(reply)
    return candidates


def build_inquiry(summary: SummaryFields, therapist: Optional[Therapist]) -> InquiryCreate:
    return InquiryCreate(
        patient_identifier=summary.contact or f"anonymous-{uuid4().hex[:8]}",
        problem_description=summary.problem,
        requested_schedule=summary.schedule,
        insurance_info=summary.insurance,
        extracted_specialty=summary.specialist_needed,
        matched_therapist_id=therapist.id if therapist else None,
        matched_therapist_name=summary.matched_therapist,
        status=InquiryStatus.MATCHED if therapist else InquiryStatus.PENDING,
    )


async def persist_confirmed_summary(
    summary: SummaryFields,
    therapists: List[Therapist],
    repository: InquiryRepository,
    settings: Settings,
) -> Tuple[Optional[InquiryInDB], Optional[Therapist]]:
    therapist = match_therapist(
        therapists,
        name=summary.matched_therapist,
        specialty=summary.specialist_needed,
        insurance=summary.insurance,
    )
    if therapist is None:
        logger.warning(
            f"No therapist match for '{summary.matched_therapist}' "
            f"({summary.specialist_needed} / {summary.insurance})"
        )
        if not settings.PERSIST_UNMATCHED_INQUIRIES:
            return None, None
    else:
        logger.info(f"Matched therapist {therapist.id} ({therapist.name})")

    saved = await repository.insert_inquiry(build_inquiry(summary, therapist))
    return saved, therapist


async def book_first_session(booker: CalendarBooker, therapist: Therapist) -> bool:
    # Best-effort: the inquiry row stays as saved whatever happens here
    try:
        await booker.book(therapist.google_refresh_token)
        return True
    except Exception:
        logger.exception(f"Calendar booking failed for therapist {therapist.id}")
        return False


async def chat_with_assistant(
    message_text: str,
    history: List[Dict[str, str]],
    *,
    gateway: ChatCompletionGateway,
    repository: InquiryRepository,
    booker: CalendarBooker,
    settings: Settings,
) -> Dict[str, Any]:
    """
    Runs one chat turn.

    Persistence happens only when the user's message is a confirmation phrase
    AND a complete summary block is found in the reply being confirmed or in
    the new reply.
    """
    therapists = await repository.list_therapists(limit=settings.THERAPIST_FETCH_LIMIT)
    system_prompt = build_system_prompt([t.directory_line() for t in therapists])

    messages = (
        [{"role": "system", "content": system_prompt}]
        + history
        + [{"role": "user", "content": message_text}]
    )
    reply = await gateway.complete_async(messages)

    data_saved = False
    saved_data = None
    calendar_booked = None

    if is_confirmation(message_text):
        summary = find_summary(summary_candidates(history, reply))
        if summary is None:
            logger.info("Confirmation received but no complete summary was found")
        else:
            logger.info("Confirmed summary found; saving inquiry")
            saved, therapist = await persist_confirmed_summary(summary, therapists, repository, settings)
            if saved is not None:
                data_saved = True
                saved_data = saved.to_response_dict()
                if therapist is not None and settings.BOOK_CALENDAR_ON_MATCH:
                    calendar_booked = await book_first_session(booker, therapist)
                    note = BOOKING_CONFIRMED_NOTE if calendar_booked else BOOKING_FAILED_NOTE
                    reply = f"{reply}\n\n{note}"

    updated_history = history + [
        {"role": "user", "content": message_text},
        {"role": "assistant", "content": reply},
    ]

    return {
        "reply": reply,
        "conversationHistory": updated_history,
        "dataSaved": data_saved,
        "savedData": saved_data,
        "calendarBooked": calendar_booked,
    }
