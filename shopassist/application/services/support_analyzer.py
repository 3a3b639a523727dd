"""Customer support analysis over text descriptions and images."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from shopassist.application.exceptions import CapabilityError, InvalidInputError, SupportAnalysisError
from shopassist.application.models import SupportAnalysis
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.base import CompletionClient, ImageCompletionClient
from shopassist.infrastructure.llm.prompts import NO_IMAGE_CONTEXT, SUPPORT_IMAGE_PROMPT, SUPPORT_TEXT_PROMPT
from shopassist.utils.history import sanitize_message_history
from shopassist.utils.json_extraction import parse_json_object

logger = get_logger(__name__)

TEXT_ANALYSIS = "textAnalysis"
IMAGE_ANALYSIS = "imageAnalysis"

MORE_DETAILS_STEP = "Please provide more details about your issue"
INVALID_TEXT_RESPONSE = (
    "I couldn't analyze your problem automatically. A support agent can help you further."
)
TEXT_FAILURE_RESPONSE = "Could not analyze your problem description"

IMAGE_NOT_PROCESSED = "Image not processed"
INVALID_IMAGE_RESPONSE = "Invalid response format"
IMAGE_FAILURE_DESCRIPTION = "Failed to process image"


@dataclass(frozen=True)
class SupportRequest:
    """One support request; at least one of description or image is set."""
    problem_description: Optional[str] = None
    image_base64: Optional[str] = None
    message_history: Any = None

    @property
    def has_input(self) -> bool:
        return bool(self.problem_description) or bool(self.image_base64)


class SupportAnalyzer(Protocol):
    """One analysis modality."""

    result_key: str

    def accepts(self, request: SupportRequest) -> bool:
        ...

    def analyze(self, request: SupportRequest) -> SupportAnalysis:
        ...

    def failure_result(self, error: Exception) -> SupportAnalysis:
        ...


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(item) for item in value]


class TextSupportAnalyzer:
    """Analyzes a free-text problem description into support guidance."""

    result_key = TEXT_ANALYSIS

    def __init__(self, llm: CompletionClient, temperature: float = 0.4, max_tokens: int = 1024):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    def accepts(self, request: SupportRequest) -> bool:
        return bool(request.problem_description)

    def analyze(self, request: SupportRequest) -> SupportAnalysis:
        """
        Request structured support guidance for a problem description.

        Raises:
            InvalidInputError: No usable description
            SupportAnalysisError: The completion capability failed
        """
        description = request.problem_description
        if not isinstance(description, str) or not description.strip():
            raise InvalidInputError("Invalid problem description")

        history = sanitize_message_history(request.message_history)
        try:
            raw = self.llm.complete(
                SUPPORT_TEXT_PROMPT,
                history,
                description,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                force_json=True,
            )
        except CapabilityError as e:
            raise SupportAnalysisError(f"Failed to process support text: {e}") from e

        return self.parse(raw)

    @staticmethod
    def parse(raw: str) -> SupportAnalysis:
        parsed = parse_json_object(raw)
        if parsed is None:
            logger.warning("Support text response had no JSON object, using raw text")
            return SupportAnalysis(
                success=True,
                response=raw.strip(),
                requires_human=True,
                next_steps=[MORE_DETAILS_STEP],
            )

        response = parsed.get("response")
        next_steps = _string_list(parsed.get("nextSteps", []))
        requires_human = parsed.get("requiresHuman", False)
        if (
            not isinstance(response, str)
            or not response.strip()
            or next_steps is None
            or not isinstance(requires_human, bool)
        ):
            logger.warning(f"Support text response has invalid format: {parsed}")
            return SupportAnalysis(
                success=True,
                response=INVALID_TEXT_RESPONSE,
                requires_human=True,
                next_steps=[],
            )

        return SupportAnalysis(
            success=True,
            response=response.strip(),
            requires_human=requires_human,
            next_steps=next_steps,
        )

    def failure_result(self, error: Exception) -> SupportAnalysis:
        return SupportAnalysis(
            success=False,
            response=TEXT_FAILURE_RESPONSE,
            requires_human=True,
            next_steps=[],
            error=str(error),
        )


class ImageSupportAnalyzer:
    """Analyzes a product photo (plus optional context) for visible problems."""

    result_key = IMAGE_ANALYSIS

    def __init__(self, llm: ImageCompletionClient, temperature: float = 0.3, max_tokens: int = 1024):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    def accepts(self, request: SupportRequest) -> bool:
        return bool(request.image_base64)

    def analyze(self, request: SupportRequest) -> SupportAnalysis:
        """
        Request a structured description of issues visible in the image.

        Capability failures are reported in the result (success=False)
        instead of being raised.

        Raises:
            InvalidInputError: No usable image payload
        """
        image = request.image_base64
        if not isinstance(image, str) or not image.strip():
            raise InvalidInputError("Invalid image data")

        context = request.problem_description if isinstance(request.problem_description, str) else ""
        prompt = SUPPORT_IMAGE_PROMPT.format(context=context.strip() or NO_IMAGE_CONTEXT)
        try:
            raw = self.llm.complete_with_image(
                prompt,
                image,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                force_json=True,
            )
        except CapabilityError as e:
            logger.error(f"Image support analysis failed: {e}")
            return self.failure_result(e)

        return self.parse(raw)

    @staticmethod
    def parse(raw: str) -> SupportAnalysis:
        parsed = parse_json_object(raw)
        if parsed is None:
            logger.warning("Image analysis response had no JSON object")
            return SupportAnalysis(success=True, description=IMAGE_NOT_PROCESSED, issues=[], suggestions=[])

        description = parsed.get("description")
        issues = _string_list(parsed.get("issues"))
        suggestions = _string_list(parsed.get("suggestions"))
        if not isinstance(description, str) or not description.strip() or issues is None or suggestions is None:
            logger.warning(f"Image analysis response has invalid format: {parsed}")
            return SupportAnalysis(success=True, description=INVALID_IMAGE_RESPONSE, issues=[], suggestions=[])

        return SupportAnalysis(
            success=True,
            description=description.strip(),
            issues=issues,
            suggestions=suggestions,
        )

    def failure_result(self, error: Exception) -> SupportAnalysis:
        return SupportAnalysis(
            success=False,
            description=IMAGE_FAILURE_DESCRIPTION,
            issues=[],
            suggestions=[],
            error=str(error),
        )


class SupportService:
    """Runs every analyzer that accepts a request, one after another."""

    def __init__(self, analyzers: Sequence[SupportAnalyzer]):
        self.analyzers = list(analyzers)

    def analyze(self, request: SupportRequest) -> Dict[str, Optional[SupportAnalysis]]:
        """
        Analyze a support request across all modalities.

        Args:
            request: Support request with description and/or image

        Returns:
            Mapping of result key to analysis, None for modalities not supplied

        Raises:
            InvalidInputError: Neither description nor image supplied
        """
        if not request.has_input:
            raise InvalidInputError("Please provide either a problem description or an image")

        results: Dict[str, Optional[SupportAnalysis]] = {
            analyzer.result_key: None for analyzer in self.analyzers
        }
        for analyzer in self.analyzers:
            if not analyzer.accepts(request):
                continue
            try:
                results[analyzer.result_key] = analyzer.analyze(request)
            except Exception as e:
                logger.error(f"{analyzer.result_key} failed: {e}")
                results[analyzer.result_key] = analyzer.failure_result(e)
        return results
