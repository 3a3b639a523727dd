"""Common schemas used across the API."""

from typing import Dict, Optional
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    timestamp: str
    services: Dict[str, bool]
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned with every 4xx/5xx response."""
    success: Optional[bool] = None
    error: str
    message: str
    details: Optional[str] = None
