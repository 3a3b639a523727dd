"""Marketplace product search over the RapidAPI real-time data APIs."""

from typing import Any, Dict, List, Optional

import httpx

from shopassist.application.exceptions import (
    InvalidInputError,
    MalformedSearchResponseError,
    NoProductsFoundError,
    SearchConfigurationError,
    SearchRequestError,
)
from shopassist.config.settings import Settings
from shopassist.config.logging_config import get_logger

logger = get_logger(__name__)


class ProductSearchClient:
    """Client for marketplace product search and product offers."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """
        Initialize the search client.

        Args:
            settings: Application settings (RapidAPI key, hosts, timeout)
            http_client: Pre-built httpx client, mainly for tests
        """
        self.api_key = settings.rapidapi_key
        self.search_host = settings.search_api_host
        self.offers_host = settings.offers_api_host
        self.country = settings.search_country
        self.http_client = http_client or httpx.Client(timeout=settings.search_timeout_seconds)

    def close(self) -> None:
        self.http_client.close()

    def _get(self, host: str, path: str, params: Dict[str, Any]) -> Any:
        if not self.api_key:
            raise SearchConfigurationError("Missing RapidAPI key")

        headers = {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": host,
        }
        try:
            response = self.http_client.get(f"https://{host}{path}", params=params, headers=headers)
        except httpx.HTTPError as e:
            raise SearchRequestError(f"Request to {host} failed: {e}") from e

        if not response.is_success:
            raise SearchRequestError(
                f"API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedSearchResponseError(f"Response from {host} is not valid JSON") from e

    def search(self, query: str) -> List[Dict[str, Any]]:
        """
        Search marketplace products.

        Args:
            query: Search phrase

        Returns:
            Raw product records, in the order returned by the API

        Raises:
            InvalidInputError: Empty or non-string query
            SearchConfigurationError: No API key configured
            SearchRequestError: Transport failure or non-success status
            MalformedSearchResponseError: Body is not a product list
            NoProductsFoundError: API returned zero products
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidInputError("Invalid query parameter")

        logger.info(f"Fetching marketplace products for: {query}")
        data = self._get(
            self.search_host,
            "/search",
            {
                "query": query,
                "page": 1,
                "country": self.country,
                "sort_by": "RELEVANCE",
                "product_condition": "ALL",
            },
        )

        payload = data.get("data") if isinstance(data, dict) else None
        products = payload.get("products") if isinstance(payload, dict) else None
        if not isinstance(products, list):
            raise MalformedSearchResponseError("No products found in API response")
        if not products:
            raise NoProductsFoundError(f"No products found for '{query}'")

        logger.info(f"Search returned {len(products)} products for: {query}")
        return products

    def get_product_offers(self, product_id: str) -> Dict[str, Any]:
        """
        Fetch offers for one product.

        Args:
            product_id: Product identifier from the offers API

        Returns:
            Decoded JSON object as returned by the API
        """
        if not isinstance(product_id, str) or not product_id.strip():
            raise InvalidInputError("Invalid product_id parameter")

        logger.info(f"Fetching product offers for: {product_id}")
        data = self._get(
            self.offers_host,
            "/product-offers-v2",
            {
                "product_id": product_id,
                "page": 1,
                "country": self.country.lower(),
                "language": "en",
            },
        )
        if not isinstance(data, dict):
            raise MalformedSearchResponseError("Invalid response format from Product Offers API")
        return data
