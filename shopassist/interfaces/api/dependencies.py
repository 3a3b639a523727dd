"""FastAPI dependencies for dependency injection."""

import random

from shopassist.application.services.intent_classifier import IntentClassifier
from shopassist.application.services.intent_router import IntentRouter
from shopassist.application.services.responders import ClarificationResponder, GreetingResponder
from shopassist.application.services.search_query_extractor import SearchQueryExtractor
from shopassist.application.services.shopping_advisor import ShoppingAdvisor
from shopassist.application.services.support_analyzer import (
    ImageSupportAnalyzer,
    SupportService,
    TextSupportAnalyzer,
)
from shopassist.config.settings import Settings, settings
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.gemini_client import GeminiClient
from shopassist.infrastructure.llm.groq_client import GroqClient
from shopassist.infrastructure.phrases.phrase_loader import CLARIFICATIONS, GREETINGS, PhraseLoader
from shopassist.infrastructure.search.product_search_client import ProductSearchClient

logger = get_logger(__name__)

# Global service instances (initialized in lifespan)
_product_search_client: ProductSearchClient | None = None
_intent_router: IntentRouter | None = None
_support_service: SupportService | None = None


def init_services(app_settings: Settings = settings):
    """Build capability clients and services once, before serving."""
    global _product_search_client, _intent_router, _support_service

    intent_llm = GroqClient(app_settings, app_settings.intent_model)
    query_llm = GroqClient(app_settings, app_settings.query_model)
    vision_llm = GroqClient(app_settings, app_settings.vision_model)
    gemini = GeminiClient(app_settings)

    phrases = PhraseLoader()
    rng = random.SystemRandom()

    _product_search_client = ProductSearchClient(app_settings)
    _intent_router = IntentRouter(
        classifier=IntentClassifier(
            intent_llm,
            temperature=app_settings.intent_temperature,
            max_tokens=app_settings.intent_max_tokens,
            fallback_to_unclear=app_settings.intent_fallback_to_unclear,
        ),
        query_extractor=SearchQueryExtractor(
            query_llm,
            temperature=app_settings.query_temperature,
            max_tokens=app_settings.query_max_tokens,
        ),
        product_search=_product_search_client,
        advisor=ShoppingAdvisor(
            gemini,
            temperature=app_settings.advice_temperature,
            max_tokens=app_settings.advice_max_tokens,
        ),
        greeter=GreetingResponder(phrases.get_bank(GREETINGS), rng),
        clarifier=ClarificationResponder(phrases.get_bank(CLARIFICATIONS), rng),
        chat_top_k=app_settings.chat_top_k,
        recommendations_top_k=app_settings.recommendations_top_k,
        search_url=app_settings.marketplace_search_url,
    )
    _support_service = SupportService([
        TextSupportAnalyzer(
            gemini,
            temperature=app_settings.support_temperature,
            max_tokens=app_settings.support_max_tokens,
        ),
        ImageSupportAnalyzer(
            vision_llm,
            temperature=app_settings.vision_temperature,
            max_tokens=app_settings.vision_max_tokens,
        ),
    ])


def shutdown_services():
    """Release HTTP resources held by the services."""
    global _product_search_client, _intent_router, _support_service

    if _product_search_client is not None:
        _product_search_client.close()
    _product_search_client = None
    _intent_router = None
    _support_service = None


def services_status() -> dict:
    """Which services are initialized, for the health check."""
    return {
        "intent_router": _intent_router is not None,
        "product_search": _product_search_client is not None,
        "support": _support_service is not None,
    }


def get_app_settings() -> Settings:
    return settings


def get_intent_router() -> IntentRouter:
    """
    Get intent router instance.

    Returns:
        IntentRouter instance
    """
    if _intent_router is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _intent_router


def get_product_search_client() -> ProductSearchClient:
    """
    Get product search client instance.

    Returns:
        ProductSearchClient instance
    """
    if _product_search_client is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _product_search_client


def get_support_service() -> SupportService:
    """
    Get support service instance.

    Returns:
        SupportService instance
    """
    if _support_service is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _support_service
