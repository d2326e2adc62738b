# therapy_scheduler/routers/chat.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from therapy_scheduler.core.config import Settings, get_settings
from therapy_scheduler.core.logger import logger
from therapy_scheduler.routers.deps import get_booker, get_gateway, get_repository, read_json_body
from therapy_scheduler.schemas.chat import ChatErrorResponse, ChatRequest, ChatResponse
from therapy_scheduler.services.calendar import CalendarBooker
from therapy_scheduler.services.chat_engine import ChatCompletionGateway, chat_with_assistant
from therapy_scheduler.services.inquiry_store import InquiryRepository
from therapy_scheduler.services.prompt_templates import ERROR_REPLY, MISSING_API_KEY_REPLY

router = APIRouter(tags=["chat"])


@router.post(
    "",
    response_model=ChatResponse,
    responses={500: {"model": ChatErrorResponse}},
    summary="Send a message and receive the assistant's reply",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
        }
    },
)
async def chat_endpoint(
    raw_request: Request,
    settings: Settings = Depends(get_settings),
    gateway: ChatCompletionGateway = Depends(get_gateway),
    repository: InquiryRepository = Depends(get_repository),
    booker: CalendarBooker = Depends(get_booker),
):
    if not settings.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY not found in environment variables")
        return JSONResponse(
            status_code=500,
            content=ChatErrorResponse(error="API key not configured", reply=MISSING_API_KEY_REPLY).model_dump(),
        )

    try:
        # a malformed body lands in the {error, reply} answer below
        request = ChatRequest.model_validate(await read_json_body(raw_request))
        history = [msg.model_dump() for msg in request.conversationHistory]
        result = await chat_with_assistant(
            request.messageText,
            history,
            gateway=gateway,
            repository=repository,
            booker=booker,
            settings=settings,
        )
    except Exception as e:
        logger.exception("Error processing chat request")
        return JSONResponse(
            status_code=500,
            content=ChatErrorResponse(error=str(e), reply=ERROR_REPLY).model_dump(),
        )

    return ChatResponse(**result)
