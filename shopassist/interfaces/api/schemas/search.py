"""Catalog search and product offer schemas."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, StrictStr

from shopassist.application.models import Product


class SearchProductsRequest(BaseModel):
    """Catalog search request schema."""
    query: Optional[StrictStr] = None


class ProductList(BaseModel):
    products: List[Product] = Field(default_factory=list)


class SearchProductsResponse(BaseModel):
    """Catalog search response schema."""
    success: bool = True
    data: ProductList


class ProductOffersResponse(BaseModel):
    """Product offers passthrough schema."""
    success: bool = True
    data: Dict[str, Any]
