"""Intent routing: classify a message, dispatch it, and wrap every outcome in an envelope."""

from typing import Any, Dict, List, Protocol

from shopassist.application.exceptions import NoProductsAvailableError, NoProductsFoundError
from shopassist.application.models import (
    ConversationTurn,
    ErrorKind,
    Intent,
    ResponseEnvelope,
)
from shopassist.application.services.intent_classifier import IntentClassifier
from shopassist.application.services.responders import (
    DEFAULT_GREETING,
    ClarificationResponder,
    GreetingResponder,
)
from shopassist.application.services.search_query_extractor import SearchQueryExtractor
from shopassist.application.services.shopping_advisor import ShoppingAdvisor
from shopassist.config.logging_config import get_logger
from shopassist.utils.formatters import DEFAULT_SEARCH_URL, normalize_products
from shopassist.utils.history import sanitize_message_history

logger = get_logger(__name__)

INVALID_INPUT_MESSAGE = "Please provide a valid product request."
INTENT_FAILED_MESSAGE = "Could you please clarify your request?"
QUERY_FAILED_MESSAGE = "Could you please clarify what product you're looking for?"
SEARCH_FAILED_MESSAGE = "Sorry, I couldn't search for products right now. Please try again later."
RANKING_FAILED_MESSAGE = "I found some products but couldn't rank them properly. Please try again."
NO_PRODUCTS_MESSAGE = "I couldn't find any suitable products for your request. Try being more specific."
GENERAL_SHOPPING_FAILED_MESSAGE = "Could you please clarify what you're looking for?"
SYSTEM_ERROR_MESSAGE = "Sorry, something went wrong. Please try again."


class ProductSearch(Protocol):
    def search(self, query: str) -> List[Dict[str, Any]]:
        ...


def _is_valid_transcript(transcript: Any) -> bool:
    return isinstance(transcript, str) and bool(transcript.strip())


class IntentRouter:
    """Single request pipeline over the classifier and the intent handlers.

    Never raises: every failure ends in a ResponseEnvelope with ``error`` set.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        query_extractor: SearchQueryExtractor,
        product_search: ProductSearch,
        advisor: ShoppingAdvisor,
        greeter: GreetingResponder,
        clarifier: ClarificationResponder,
        chat_top_k: int = 3,
        recommendations_top_k: int = 5,
        search_url: str = DEFAULT_SEARCH_URL,
    ):
        self.classifier = classifier
        self.query_extractor = query_extractor
        self.product_search = product_search
        self.advisor = advisor
        self.greeter = greeter
        self.clarifier = clarifier
        self.chat_top_k = chat_top_k
        self.recommendations_top_k = recommendations_top_k
        self.search_url = search_url

    def handle_message(self, transcript: Any, message_history: Any = None) -> ResponseEnvelope:
        """
        Classify a message and route it to the matching handler.

        Args:
            transcript: Latest user message
            message_history: Prior turns in any shape

        Returns:
            ResponseEnvelope for the terminal state of the request
        """
        try:
            if not _is_valid_transcript(transcript):
                return self._invalid_input()
            history = sanitize_message_history(message_history)
            return self._route(transcript, history)
        except Exception as e:
            logger.error(f"Unexpected error while handling message: {e}")
            return ResponseEnvelope.failure(ErrorKind.SYSTEM_ERROR, SYSTEM_ERROR_MESSAGE, str(e))

    def get_shopping_recommendations(self, transcript: Any, message_history: Any = None) -> ResponseEnvelope:
        """
        Run the product pipeline directly, without intent classification.

        Args:
            transcript: Product request
            message_history: Prior turns in any shape

        Returns:
            ResponseEnvelope with up to recommendations_top_k products
        """
        try:
            if not _is_valid_transcript(transcript):
                return self._invalid_input()
            history = sanitize_message_history(message_history)
            return self.run_shopping(transcript, history, self.recommendations_top_k)
        except Exception as e:
            logger.error(f"Unexpected error while building recommendations: {e}")
            return ResponseEnvelope.failure(ErrorKind.SYSTEM_ERROR, SYSTEM_ERROR_MESSAGE, str(e))

    def _invalid_input(self) -> ResponseEnvelope:
        return ResponseEnvelope.failure(ErrorKind.INVALID_INPUT, INVALID_INPUT_MESSAGE)

    def _route(self, transcript: str, history: List[ConversationTurn]) -> ResponseEnvelope:
        logger.info("Step 1: Determining user intent...")
        try:
            intent_result = self.classifier.classify(transcript, history)
        except Exception as e:
            logger.error(f"Intent detection failed: {e}")
            return ResponseEnvelope.failure(ErrorKind.INTENT_DETECTION_FAILED, INTENT_FAILED_MESSAGE, str(e))

        if intent_result.intent == Intent.GREETING:
            return self._greet()
        if intent_result.intent == Intent.SHOPPING:
            return self.run_shopping(transcript, history, self.chat_top_k)
        if intent_result.intent == Intent.GENERAL_SHOPPING:
            return self._advise(transcript, history)
        return self.clarifier.respond(intent_result.clarification)

    def _greet(self) -> ResponseEnvelope:
        try:
            return self.greeter.respond()
        except Exception as e:
            logger.warning(f"Greeting handler failed, using default greeting: {e}")
            return ResponseEnvelope(intent=Intent.GREETING, success=True, message=DEFAULT_GREETING)

    def _advise(self, transcript: str, history: List[ConversationTurn]) -> ResponseEnvelope:
        logger.info("Step 2: Handling general shopping query...")
        try:
            advice = self.advisor.advise(transcript, history)
            message = advice["message"]
        except Exception as e:
            logger.error(f"General shopping query handling failed: {e}")
            return ResponseEnvelope.failure(
                ErrorKind.GENERAL_SHOPPING_FAILED, GENERAL_SHOPPING_FAILED_MESSAGE, str(e)
            )
        return ResponseEnvelope(intent=Intent.GENERAL_SHOPPING, success=True, message=message)

    def run_shopping(self, transcript: str, history: List[ConversationTurn], top_k: int) -> ResponseEnvelope:
        """
        Extract a query, search, and normalize the top ``top_k`` products.

        Args:
            transcript: Product request
            history: Sanitized conversation history
            top_k: Number of recommendations to keep

        Returns:
            ResponseEnvelope, successful only when at least one product is returned
        """
        logger.info("Step 2: Getting search query from user input...")
        try:
            search_query = self.query_extractor.extract(transcript, history)
        except Exception as e:
            logger.error(f"Search query extraction failed: {e}")
            return ResponseEnvelope.failure(ErrorKind.QUERY_EXTRACTION_FAILED, QUERY_FAILED_MESSAGE, str(e))

        query = search_query.search_query
        logger.info(f"Search query extracted: {query}")

        logger.info("Step 3: Fetching products...")
        try:
            raw_products = self.product_search.search(query)
        except NoProductsFoundError as e:
            logger.warning(f"No products found for '{query}': {e}")
            return ResponseEnvelope.failure(ErrorKind.NO_PRODUCTS_FOUND, NO_PRODUCTS_MESSAGE, str(e))
        except Exception as e:
            logger.error(f"Product search failed: {e}")
            return ResponseEnvelope.failure(ErrorKind.SEARCH_FAILED, SEARCH_FAILED_MESSAGE, str(e))

        logger.info("Step 4: Ranking products...")
        try:
            products = normalize_products(raw_products, top_k, self.search_url)
        except NoProductsAvailableError as e:
            logger.warning(f"No products available for '{query}'")
            return ResponseEnvelope.failure(ErrorKind.NO_PRODUCTS_FOUND, NO_PRODUCTS_MESSAGE, str(e))
        except Exception as e:
            logger.error(f"Product ranking failed: {e}")
            return ResponseEnvelope.failure(ErrorKind.RANKING_FAILED, RANKING_FAILED_MESSAGE, str(e))

        return ResponseEnvelope(
            intent=Intent.SHOPPING,
            success=True,
            query=query,
            recommendations=products,
            message=f'Here are my top {len(products)} recommendations for "{query}":',
        )
