# therapy_scheduler/schemas/oauth.py

from pydantic import BaseModel
from typing import Optional


class OAuthUrlRequest(BaseModel):
    therapistId: Optional[str] = None

class OAuthUrlResponse(BaseModel):
    oauthUrl: str
