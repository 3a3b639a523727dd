"""Extraction of a structured product search query from free text."""

from typing import Any, Optional, Sequence, Tuple

from pydantic import ValidationError

from shopassist.application.exceptions import (
    CapabilityError,
    InvalidInputError,
    QueryExtractionError,
    ResponseValidationError,
)
from shopassist.application.models import SearchQuery
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.base import CompletionClient
from shopassist.infrastructure.llm.prompts import SEARCH_QUERY_PROMPT
from shopassist.utils.history import sanitize_message_history
from shopassist.utils.json_extraction import parse_json_object

logger = get_logger(__name__)

# (keywords, fallback query), checked in order
KEYWORD_FALLBACKS: Sequence[Tuple[Tuple[str, ...], SearchQuery]] = (
    (
        ("birthday", "party"),
        SearchQuery(search_query="birthday party supplies", category="party supplies"),
    ),
)


def parse_search_query(raw: Optional[str]) -> SearchQuery:
    """
    Validate a raw model response into a SearchQuery.

    Raises:
        ResponseValidationError: No JSON object or no usable searchQuery
    """
    parsed = parse_json_object(raw)
    if parsed is None:
        raise ResponseValidationError("Search query response is not a JSON object")

    query = parsed.get("searchQuery")
    if not isinstance(query, str) or not query.strip():
        raise ResponseValidationError("No search query found in response")

    category = parsed.get("category")
    if not isinstance(category, str) or not category.strip():
        category = None

    try:
        return SearchQuery(search_query=query.strip(), category=category.strip() if category else None)
    except ValidationError as e:
        raise ResponseValidationError(str(e)) from e


def keyword_fallback(transcript: str) -> Optional[SearchQuery]:
    """Return the first canned query whose keywords appear in the transcript."""
    lowered = transcript.lower()
    for keywords, query in KEYWORD_FALLBACKS:
        if any(keyword in lowered for keyword in keywords):
            return query
    return None


class SearchQueryExtractor:
    """Turns a shopping request into a concise marketplace search query."""

    def __init__(self, llm: CompletionClient, temperature: float = 0.3, max_tokens: int = 256):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    def extract(self, transcript: str, message_history: Any = None) -> SearchQuery:
        """
        Extract a search query, falling back to keyword heuristics.

        Args:
            transcript: Latest user message
            message_history: Prior turns in any shape

        Returns:
            SearchQuery

        Raises:
            InvalidInputError: transcript is empty or not a string
            QueryExtractionError: Extraction failed and no keyword matched
        """
        if not isinstance(transcript, str) or not transcript.strip():
            raise InvalidInputError("Invalid transcript parameter")

        history = sanitize_message_history(message_history)
        try:
            raw = self.llm.complete(
                SEARCH_QUERY_PROMPT,
                history,
                transcript,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                force_json=True,
            )
            return parse_search_query(raw)
        except CapabilityError as e:
            fallback = keyword_fallback(transcript)
            if fallback is not None:
                logger.warning(f"Search query extraction failed, using keyword fallback '{fallback.search_query}': {e}")
                return fallback
            logger.error(f"Search query extraction failed: {e}")
            raise QueryExtractionError(f"Failed to extract search query: {e}") from e
