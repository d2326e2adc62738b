# therapy_scheduler/schemas/chat.py
from pydantic import BaseModel, Field
from typing import Literal, List, Optional, Dict, Any

# ---------------------
# Request / Response Models
# ---------------------

class Message(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str

class ChatRequest(BaseModel):
    messageText: str
    conversationHistory: List[Message] = Field(default_factory=list)

class ChatResponse(BaseModel):
    reply: str
    conversationHistory: List[Message]
    dataSaved: bool = False
    savedData: Optional[Dict[str, Any]] = None
    calendarBooked: Optional[bool] = None

class ChatErrorResponse(BaseModel):
    error: str
    reply: str
