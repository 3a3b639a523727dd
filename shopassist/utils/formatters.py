"""Normalization of raw marketplace product records for display."""

from collections.abc import Mapping
from typing import Any, List, Optional
from urllib.parse import quote

from shopassist.application.exceptions import InvalidProductDataError, NoProductsAvailableError
from shopassist.application.models import Product

NOT_AVAILABLE = "N/A"
NOT_RATED = "Not rated"
TOP_MATCH_REASON = "Top matching results"
DEFAULT_SEARCH_URL = "https://www.amazon.com/s?k="


def _text(value: Any) -> Optional[str]:
    """Return a trimmed string, or None for missing/blank values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def format_rating(star_rating: Any, num_ratings: Any) -> str:
    """
    Format a star rating with its review count.

    Args:
        star_rating: Raw star rating (e.g. "4.5" or 4.5)
        num_ratings: Raw review count, may be missing

    Returns:
        "4.5/5 (120 reviews)" or NOT_RATED
    """
    # numeric zero means unrated
    stars = _text(star_rating) if star_rating else None
    if not stars:
        return NOT_RATED
    return f"{stars}/5 ({_text(num_ratings) or 0} reviews)"


def build_marketplace_link(title: str, search_url: str = DEFAULT_SEARCH_URL) -> str:
    """Build a marketplace search URL keyed by the product title."""
    return f"{search_url}{quote(title, safe='')}"


def normalize_product(raw: Any, rank: int, search_url: str = DEFAULT_SEARCH_URL) -> Product:
    """
    Map one raw search record onto a fully populated Product.

    Args:
        raw: Raw product record; non-mappings are treated as empty records
        rank: 1-based output position
        search_url: Prefix for synthesized links

    Returns:
        Product with every missing field replaced by a sentinel
    """
    record = raw if isinstance(raw, Mapping) else {}

    title = _text(record.get("product_title")) or NOT_AVAILABLE
    link = _text(record.get("product_url")) or build_marketplace_link(title, search_url)

    return Product(
        rank=rank,
        title=title,
        price=_text(record.get("product_price")) or NOT_AVAILABLE,
        link=link,
        image=_text(record.get("product_photo")) or NOT_AVAILABLE,
        shipping=_text(record.get("delivery")) or NOT_AVAILABLE,
        rating=format_rating(record.get("product_star_rating"), record.get("product_num_ratings")),
        reason=TOP_MATCH_REASON,
        asin=_text(record.get("asin")) or NOT_AVAILABLE,
    )


def normalize_products(
    products: Any,
    limit: int,
    search_url: str = DEFAULT_SEARCH_URL,
) -> List[Product]:
    """
    Select the first ``limit`` raw products and normalize them.

    Order is preserved as returned by the search capability; rank is the
    output position.

    Args:
        products: Raw product list from the search capability
        limit: Maximum number of products to keep
        search_url: Prefix for synthesized links

    Returns:
        List of min(len(products), limit) Products

    Raises:
        InvalidProductDataError: products is not a list
        NoProductsAvailableError: products is empty
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    if not isinstance(products, (list, tuple)):
        raise InvalidProductDataError("Invalid products data structure")
    if not products:
        raise NoProductsAvailableError("No products available")

    return [
        normalize_product(raw, rank, search_url)
        for rank, raw in enumerate(products[:limit], 1)
    ]
