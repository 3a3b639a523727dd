"""Catalog search and product offers passthrough router."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from shopassist.application.exceptions import (
    EmptyResultError,
    SearchConfigurationError,
    ShoppingAssistantError,
)
from shopassist.application.services.intent_router import NO_PRODUCTS_MESSAGE
from shopassist.config.settings import Settings
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.search.product_search_client import ProductSearchClient
from shopassist.interfaces.api.dependencies import get_app_settings, get_product_search_client
from shopassist.interfaces.api.errors import error_response
from shopassist.interfaces.api.schemas.common import ErrorResponse
from shopassist.interfaces.api.schemas.search import (
    ProductList,
    ProductOffersResponse,
    SearchProductsRequest,
    SearchProductsResponse,
)
from shopassist.utils.formatters import normalize_products

logger = get_logger(__name__)

router = APIRouter(tags=["products"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _configuration_error():
    return error_response(500, "Configuration error", "Server configuration is incomplete", success=False)


@router.post("/search-products", response_model=SearchProductsResponse, responses=ERROR_RESPONSES)
def search_products(
    request: SearchProductsRequest,
    search_client: ProductSearchClient = Depends(get_product_search_client),
    app_settings: Settings = Depends(get_app_settings),
):
    """Search the marketplace and return up to catalog_top_k normalized products."""
    if not request.query or not request.query.strip():
        return error_response(400, "Missing query parameter", "Please provide a search query", success=False)

    try:
        raw_products = search_client.search(request.query)
        products = normalize_products(
            raw_products,
            app_settings.catalog_top_k,
            app_settings.marketplace_search_url,
        )
    except EmptyResultError as e:
        return error_response(404, "No suitable products found", NO_PRODUCTS_MESSAGE, str(e), success=False)
    except SearchConfigurationError:
        logger.error("Missing RapidAPI key")
        return _configuration_error()
    except ShoppingAssistantError as e:
        logger.error(f"Product search endpoint error: {e}")
        return error_response(
            502,
            "Failed to fetch products",
            "Could not retrieve products from the product search API",
            str(e),
            success=False,
        )

    logger.info(f"Returning {len(products)} products for: {request.query}")
    return SearchProductsResponse(success=True, data=ProductList(products=products))


@router.get("/product-offers", response_model=ProductOffersResponse, responses=ERROR_RESPONSES)
def product_offers(
    product_id: Optional[str] = Query(default=None),
    search_client: ProductSearchClient = Depends(get_product_search_client),
):
    """Fetch offers for one product."""
    if not product_id:
        return error_response(400, "Missing product_id parameter", "Please provide a 'product_id' query parameter")

    try:
        data = search_client.get_product_offers(product_id)
    except SearchConfigurationError:
        logger.error("Missing RapidAPI key")
        return _configuration_error()
    except ShoppingAssistantError as e:
        logger.error(f"Product offers endpoint error: {e}")
        return error_response(
            502,
            "Failed to fetch product offers",
            "Could not retrieve product offers from the API",
            str(e),
        )

    return ProductOffersResponse(success=True, data=data)
