"""Chat router: intent-routed conversation and direct recommendations."""

from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter, Depends

from shopassist.application.models import ResponseEnvelope
from shopassist.application.services.intent_router import IntentRouter
from shopassist.config.logging_config import get_logger
from shopassist.interfaces.api.dependencies import get_intent_router
from shopassist.interfaces.api.errors import error_response
from shopassist.interfaces.api.schemas.chat import ChatRequest, ChatResponse
from shopassist.interfaces.api.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}}


def _run(request: ChatRequest, handler: Callable[..., ResponseEnvelope]):
    if not request.transcript:
        return error_response(400, "Missing transcript", "Please provide a transcript parameter")
    if not isinstance(request.transcript, str):
        return error_response(400, "Invalid transcript format", "Transcript must be a string")
    if not isinstance(request.message_history, list):
        return error_response(400, "Invalid messageHistory format", "messageHistory must be an array")

    logger.info(f"Received transcript: {request.transcript}")
    logger.info(f"Message history length: {len(request.message_history)}")

    envelope = handler(request.transcript, request.message_history)
    if envelope.is_error:
        return error_response(400, envelope.error.value, envelope.message, envelope.details)

    return ChatResponse(
        success=True,
        intent=envelope.intent,
        message=envelope.message,
        data=envelope.recommendations,
        query=envelope.query,
        requires_clarification=envelope.requires_clarification,
        clarification=envelope.clarification,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
def chat(request: ChatRequest, intent_router: IntentRouter = Depends(get_intent_router)):
    """Classify the message and answer with greeting, advice, products or a clarification."""
    return _run(request, intent_router.handle_message)


@router.post("/shop-products", response_model=ChatResponse, responses=ERROR_RESPONSES)
def shop_products(request: ChatRequest, intent_router: IntentRouter = Depends(get_intent_router)):
    """Skip classification and return product recommendations."""
    return _run(request, intent_router.get_shopping_recommendations)
