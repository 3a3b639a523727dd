"""Chat and recommendation request/response schemas."""

from typing import Any, List, Optional
from pydantic import BaseModel, Field

from shopassist.application.models import Intent, Product


class ChatRequest(BaseModel):
    """Chat request schema, shared by /chat and /shop-products.

    Fields are loosely typed so the router can answer malformed input with
    specific error messages.
    """
    transcript: Any = None
    message_history: Any = Field(default_factory=list, alias="messageHistory")

    class Config:
        populate_by_name = True


class ChatResponse(BaseModel):
    """Successful chat response schema."""
    success: bool = True
    intent: Optional[Intent] = None
    message: str
    data: Optional[List[Product]] = None
    query: Optional[str] = None
    requires_clarification: Optional[bool] = Field(default=None, alias="requiresClarification")
    clarification: Optional[str] = None
    timestamp: str

    class Config:
        populate_by_name = True
