"""Exception hierarchy for the shopping assistant pipeline."""

from typing import Optional


class ShoppingAssistantError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(ShoppingAssistantError):
    """Caller supplied malformed input. No fallback applies."""


class CapabilityError(ShoppingAssistantError):
    """An external capability (language model or product search) failed."""


class CompletionError(CapabilityError):
    """Language-model completion failed or returned nothing."""


class ResponseValidationError(CapabilityError):
    """Capability answered, but the payload is semantically invalid."""


class SearchError(CapabilityError):
    """Product search capability failed."""


class SearchConfigurationError(SearchError):
    """Product search is not configured (missing credentials)."""


class SearchRequestError(SearchError):
    """Product search transport failed or returned a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedSearchResponseError(SearchError):
    """Product search body could not be decoded into a product list."""


class EmptyResultError(ShoppingAssistantError):
    """A capability succeeded but produced nothing usable."""


class NoProductsFoundError(EmptyResultError, SearchError):
    """Product search returned an empty result set."""


class NoProductsAvailableError(EmptyResultError):
    """Normalizer received an empty product list."""


class InvalidProductDataError(ShoppingAssistantError):
    """Normalizer received something that is not a product list."""


class QueryExtractionError(ShoppingAssistantError):
    """No search query could be extracted and no keyword fallback matched."""


class SupportAnalysisError(ShoppingAssistantError):
    """Support text analysis could not be produced."""
