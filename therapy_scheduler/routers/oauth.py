# therapy_scheduler/routers/oauth.py

from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from starlette.responses import RedirectResponse

from therapy_scheduler.core.config import Settings, get_settings
from therapy_scheduler.core.logger import logger
from therapy_scheduler.routers.deps import get_current_user, get_oauth_client, get_repository, read_json_body
from therapy_scheduler.schemas.oauth import OAuthUrlRequest, OAuthUrlResponse
from therapy_scheduler.services.google_oauth import GoogleOAuthClient, decode_state
from therapy_scheduler.services.inquiry_store import InquiryRepository
from therapy_scheduler.utils.errors import UnauthorizedRequestError

router = APIRouter(tags=["oauth"])

ADMIN_THERAPISTS_PATH = "/admin/therapists"


def admin_redirect(settings: Settings, **params) -> RedirectResponse:
    url = f"{settings.FRONTEND_URL.rstrip('/')}{ADMIN_THERAPISTS_PATH}?{urlencode(params)}"
    return RedirectResponse(url=url, status_code=302)


@router.get("", summary="Google OAuth callback")
async def oauth_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    repository: InquiryRepository = Depends(get_repository),
):
    if error:
        logger.warning(f"OAuth error from Google: {error}")
        return admin_redirect(settings, calendar_error=error)

    try:
        if not code:
            raise ValueError("Authorization code is missing")
        therapist_id = decode_state(state)
        tokens = await oauth_client.exchange_code_async(code)
        await repository.set_google_refresh_token(therapist_id, tokens["refresh_token"])
    except Exception as e:
        logger.exception("OAuth callback failed")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return admin_redirect(settings, calendar_connected="true")


@router.post(
    "",
    response_model=OAuthUrlResponse,
    summary="Get the Google consent URL for a therapist",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": OAuthUrlRequest.model_json_schema()}},
        }
    },
)
async def get_oauth_url(
    raw_request: Request,
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
):
    try:
        user = get_current_user(authorization, settings)
        payload = await read_json_body(raw_request)
        therapist_id = OAuthUrlRequest.model_validate(payload).therapistId if payload is not None else None
        if not therapist_id:
            raise ValueError("Therapist ID is required")
        oauth_url = oauth_client.generate_oauth_url(therapist_id)
    except UnauthorizedRequestError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.detail})
    except Exception as e:
        logger.exception("Failed to build OAuth URL")
        return JSONResponse(status_code=500, content={"error": str(e)})

    logger.info(f"Issued OAuth URL for therapist {therapist_id} to {user['user_id']}")
    return OAuthUrlResponse(oauthUrl=oauth_url)
