"""Customer support schemas."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, StrictStr


class SupportRequestBody(BaseModel):
    """Support request schema; at least one of description or image is required."""
    problem_description: Optional[StrictStr] = Field(default=None, alias="problemDescription")
    image_base64: Optional[StrictStr] = Field(default=None, alias="imageBase64")
    message_history: List[Any] = Field(default_factory=list, alias="messageHistory")

    class Config:
        populate_by_name = True


class SupportResponse(BaseModel):
    """Combined support analysis response schema."""
    success: bool = True
    timestamp: str
    text_analysis: Optional[Dict[str, Any]] = Field(default=None, alias="textAnalysis")
    image_analysis: Optional[Dict[str, Any]] = Field(default=None, alias="imageAnalysis")

    class Config:
        populate_by_name = True
