"""Customer support router (text and image analysis)."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from shopassist.application.services.support_analyzer import (
    IMAGE_ANALYSIS,
    TEXT_ANALYSIS,
    SupportRequest,
    SupportService,
)
from shopassist.config.logging_config import get_logger
from shopassist.interfaces.api.dependencies import get_support_service
from shopassist.interfaces.api.errors import error_response
from shopassist.interfaces.api.schemas.common import ErrorResponse
from shopassist.interfaces.api.schemas.support import SupportRequestBody, SupportResponse

logger = get_logger(__name__)

router = APIRouter(tags=["support"])


@router.post("/support", response_model=SupportResponse, responses={400: {"model": ErrorResponse}})
def support(
    body: SupportRequestBody,
    support_service: SupportService = Depends(get_support_service),
):
    """Analyze a problem description and/or a product photo."""
    request = SupportRequest(
        problem_description=body.problem_description,
        image_base64=body.image_base64,
        message_history=body.message_history,
    )
    if not request.has_input:
        return error_response(400, "Missing input", "Please provide either a problem description or an image")

    logger.info(
        f"Support request received: has_text={bool(body.problem_description)} "
        f"has_image={bool(body.image_base64)} history={len(body.message_history)}"
    )
    results = support_service.analyze(request)
    text_analysis = results.get(TEXT_ANALYSIS)
    image_analysis = results.get(IMAGE_ANALYSIS)

    return SupportResponse(
        success=True,
        timestamp=datetime.now(timezone.utc).isoformat(),
        text_analysis=text_analysis.to_payload() if text_analysis else None,
        image_analysis=image_analysis.to_payload() if image_analysis else None,
    )
