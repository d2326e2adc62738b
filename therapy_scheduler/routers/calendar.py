# therapy_scheduler/routers/calendar.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from therapy_scheduler.core.logger import logger
from therapy_scheduler.routers.deps import get_booker, get_repository, read_json_body
from therapy_scheduler.schemas.calendar import CalendarRequest, CalendarResult
from therapy_scheduler.services.calendar import CalendarBooker
from therapy_scheduler.services.inquiry_store import InquiryRepository

router = APIRouter(tags=["calendar"])


@router.post(
    "",
    response_model=CalendarResult,
    response_model_exclude_none=True,
    responses={500: {"model": CalendarResult}},
    summary="Book the fixed therapy session on Google Calendar",
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": CalendarRequest.model_json_schema()}},
        }
    },
)
async def create_calendar_event(
    raw_request: Request,
    booker: CalendarBooker = Depends(get_booker),
    repository: InquiryRepository = Depends(get_repository),
):
    try:
        payload = await read_json_body(raw_request)
        request = CalendarRequest.model_validate(payload) if payload is not None else CalendarRequest()
        therapist_id = request.therapistId
        logger.info(f"Calendar booking requested (therapist={therapist_id or 'default'})")

        refresh_token = None
        if therapist_id:
            therapist = await repository.get_therapist(therapist_id)
            if therapist is None:
                raise LookupError(f"Therapist '{therapist_id}' not found")
            if not therapist.google_refresh_token:
                logger.warning(f"Therapist {therapist_id} has no Google refresh token")
                raise LookupError(f"Therapist '{therapist_id}' has not connected a Google Calendar")
            refresh_token = therapist.google_refresh_token
        result = await booker.book(refresh_token)
    except Exception as e:
        logger.exception("Error in calendar handler")
        return JSONResponse(
            status_code=500,
            content=CalendarResult(success=False, error=str(e)).model_dump(exclude_none=True),
        )

    return CalendarResult(**result)
