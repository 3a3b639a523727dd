"""Internal data model shared by the routing pipeline."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Intent(str, Enum):
    GREETING = "greeting"
    SHOPPING = "shopping"
    GENERAL_SHOPPING = "general_shopping"
    UNCLEAR = "unclear"


class ErrorKind(str, Enum):
    """Terminal failure kinds; values are the user-facing ``error`` strings."""
    INVALID_INPUT = "Invalid input"
    INTENT_DETECTION_FAILED = "Failed to understand request"
    QUERY_EXTRACTION_FAILED = "Failed to understand product request"
    SEARCH_FAILED = "Failed to fetch products"
    RANKING_FAILED = "Failed to rank products"
    NO_PRODUCTS_FOUND = "No suitable products found"
    GENERAL_SHOPPING_FAILED = "Failed to understand general shopping request"
    SYSTEM_ERROR = "System error"


class ConversationTurn(BaseModel):
    """One prior message; ``content`` is always a string."""
    role: Role = Role.USER
    content: str

    class Config:
        frozen = True

    def as_message(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class IntentResult(BaseModel):
    """Classifier output."""
    intent: Intent
    confidence: float = Field(ge=0.0, le=1.0)
    clarification: Optional[str] = None

    @model_validator(mode="after")
    def _clarification_only_when_unclear(self):
        if self.clarification is not None and self.intent != Intent.UNCLEAR:
            raise ValueError("clarification is only allowed for the 'unclear' intent")
        return self


class SearchQuery(BaseModel):
    """Structured product search request extracted from free text."""
    search_query: str = Field(alias="searchQuery", min_length=1)
    category: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True


class Product(BaseModel):
    """Normalized product record; every field is always populated."""
    rank: int = Field(ge=1)
    title: str
    price: str
    link: str
    image: str
    shipping: str
    rating: str
    reason: str
    asin: str


class ResponseEnvelope(BaseModel):
    """Uniform result of every routing branch."""
    intent: Optional[Intent] = None
    success: Optional[bool] = None
    error: Optional[ErrorKind] = None
    message: str
    details: Optional[str] = None
    recommendations: Optional[List[Product]] = None
    query: Optional[str] = None
    requires_clarification: Optional[bool] = Field(default=None, alias="requiresClarification")
    clarification: Optional[str] = None

    class Config:
        populate_by_name = True

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        details: Optional[str] = None,
        intent: Optional[Intent] = None,
    ) -> "ResponseEnvelope":
        return cls(intent=intent, error=kind, message=message, details=details)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire (camelCase) names, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SupportAnalysis(BaseModel):
    """Result of one support analyzer (text or image)."""
    success: Optional[bool] = None
    response: Optional[str] = None
    description: Optional[str] = None
    requires_human: Optional[bool] = Field(default=None, alias="requiresHuman")
    next_steps: Optional[List[str]] = Field(default=None, alias="nextSteps")
    issues: Optional[List[str]] = None
    suggestions: Optional[List[str]] = None
    error: Optional[str] = None

    class Config:
        populate_by_name = True

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
