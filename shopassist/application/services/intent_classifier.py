"""Intent classification over the fixed shopping taxonomy."""

import math
from typing import Any, Optional

from shopassist.application.exceptions import InvalidInputError, ResponseValidationError
from shopassist.application.models import Intent, IntentResult
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.base import CompletionClient
from shopassist.infrastructure.llm.prompts import INTENT_CLASSIFICATION_PROMPT
from shopassist.utils.history import sanitize_message_history
from shopassist.utils.json_extraction import parse_json_object

logger = get_logger(__name__)

FALLBACK_CONFIDENCE = 0.3
DEFAULT_CONFIDENCE = 0.5
# "unclear" is always reported below the 0.5 ambiguity threshold
UNCLEAR_CONFIDENCE_CEILING = 0.49


def _coerce_confidence(value: Any) -> float:
    if isinstance(value, bool):
        return DEFAULT_CONFIDENCE
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if math.isnan(confidence):
        return DEFAULT_CONFIDENCE
    return min(max(confidence, 0.0), 1.0)


def parse_intent(raw: Optional[str]) -> IntentResult:
    """
    Validate a raw model response into an IntentResult.

    Args:
        raw: Model output, expected to hold a JSON object

    Returns:
        IntentResult with confidence clamped to [0, 1]

    Raises:
        ResponseValidationError: No JSON object, or intent not in the taxonomy
    """
    parsed = parse_json_object(raw)
    if parsed is None:
        raise ResponseValidationError("Intent response is not a JSON object")

    value = parsed.get("intent")
    try:
        intent = Intent(value)
    except (ValueError, TypeError):
        raise ResponseValidationError(f"Invalid intent received: {value!r}")

    confidence = _coerce_confidence(parsed.get("confidence", DEFAULT_CONFIDENCE))
    clarification = None
    if intent == Intent.UNCLEAR:
        confidence = min(confidence, UNCLEAR_CONFIDENCE_CEILING)
        text = parsed.get("clarification")
        if isinstance(text, str) and text.strip():
            clarification = text.strip()

    return IntentResult(intent=intent, confidence=confidence, clarification=clarification)


class IntentClassifier:
    """Classifies a message as greeting, shopping, general_shopping or unclear."""

    def __init__(
        self,
        llm: CompletionClient,
        temperature: float = 0.2,
        max_tokens: int = 100,
        fallback_to_unclear: bool = False,
    ):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.fallback_to_unclear = fallback_to_unclear

    def fallback_result(self) -> IntentResult:
        """Result used whenever classification fails."""
        if self.fallback_to_unclear:
            return IntentResult(intent=Intent.UNCLEAR, confidence=FALLBACK_CONFIDENCE)
        return IntentResult(intent=Intent.GENERAL_SHOPPING, confidence=FALLBACK_CONFIDENCE)

    def classify(self, transcript: str, message_history: Any = None) -> IntentResult:
        """
        Classify the user's latest message.

        Any failure after input validation degrades to fallback_result()
        instead of reaching the caller.

        Args:
            transcript: Latest user message
            message_history: Prior turns in any shape

        Returns:
            IntentResult

        Raises:
            InvalidInputError: transcript is empty or not a string
        """
        if not isinstance(transcript, str) or not transcript.strip():
            raise InvalidInputError("Invalid transcript parameter")

        history = sanitize_message_history(message_history)
        try:
            raw = self.llm.complete(
                INTENT_CLASSIFICATION_PROMPT,
                history,
                transcript,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                force_json=True,
            )
            result = parse_intent(raw)
        except Exception as e:
            fallback = self.fallback_result()
            logger.warning(f"Intent detection failed, falling back to '{fallback.intent.value}': {e}")
            return fallback

        logger.info(f"Intent detected: {result.intent.value} ({result.confidence:.2f})")
        return result
