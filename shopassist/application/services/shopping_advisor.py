"""Free-text advice for broad, non-specific shopping questions."""

from typing import Any, Sequence, Tuple

from shopassist.application.exceptions import ResponseValidationError
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.base import CompletionClient
from shopassist.infrastructure.llm.prompts import SHOPPING_ADVICE_PROMPT
from shopassist.utils.history import sanitize_message_history
from shopassist.utils.json_extraction import parse_json_object

logger = get_logger(__name__)

GIFT_ADVICE = (
    "For gifts, consider the recipient's interests and hobbies. Popular options include books, "
    "personalized items, experience gifts, or subscription services. Think about what would make "
    "them happy or solve a problem they have."
)
DEAL_ADVICE = (
    "To find the best deals, check weekly ads, sign up for store newsletters, and look for clearance "
    "sections both in-store and online. Many stores offer price matching if you find a better deal elsewhere."
)
DECISION_ADVICE = (
    "When deciding between options, consider your budget, how often you'll use the item, and any "
    "specific features you need. Reading reviews and comparing specifications can help you make an "
    "informed decision."
)
GENERIC_ADVICE = (
    "I'd be happy to help with your shopping question. Could you provide a few more details about what "
    "you're looking for? For example, are you shopping for a specific occasion or type of product?"
)

# Checked in order; first keyword hit wins
CANNED_ADVICE: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("gift", "present"), GIFT_ADVICE),
    (("deal", "sale"), DEAL_ADVICE),
    (("choose", "decide"), DECISION_ADVICE),
)


def extract_advice_message(raw: str) -> str:
    """
    Pull the advice text out of a model response.

    A JSON envelope is preferred; text with no JSON object at all is used
    verbatim as the message.

    Raises:
        ResponseValidationError: JSON found but without a usable message
    """
    parsed = parse_json_object(raw)
    if parsed is None:
        message = raw
    else:
        message = parsed.get("message")
    if not isinstance(message, str) or not message.strip():
        raise ResponseValidationError("No message found in response")
    return message.strip()


def canned_advice(transcript: str) -> str:
    lowered = transcript.lower()
    for keywords, advice in CANNED_ADVICE:
        if any(keyword in lowered for keyword in keywords):
            return advice
    return GENERIC_ADVICE


class ShoppingAdvisor:
    """Answers general shopping questions; always returns a usable message."""

    def __init__(self, llm: CompletionClient, temperature: float = 0.7, max_tokens: int = 512):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    def advise(self, transcript: str, message_history: Any = None) -> dict:
        """
        Produce shopping advice for a broad question.

        Args:
            transcript: Latest user message
            message_history: Prior turns in any shape

        Returns:
            {"message": advice text}
        """
        text = transcript if isinstance(transcript, str) else ""
        history = sanitize_message_history(message_history)
        try:
            raw = self.llm.complete(
                SHOPPING_ADVICE_PROMPT,
                history,
                text,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                force_json=True,
            )
            return {"message": extract_advice_message(raw)}
        except Exception as e:
            logger.warning(f"Shopping advice generation failed, using canned advice: {e}")
            return {"message": canned_advice(text)}
