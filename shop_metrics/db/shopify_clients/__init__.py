"""
Shopify REST clients organized by responsibility.

This module contains specialized REST clients for different Shopify resources,
following the single responsibility principle.
"""

from .base_client import BaseShopifyRestClient, ShopifyResponse
from .inventory_client import ShopifyInventoryClient
from .order_client import ShopifyOrderClient
from .paginated_fetcher import PaginatedFetcher
from .product_client import ShopifyProductClient
from .unified_client import ShopifyRestClient

__all__ = [
    "BaseShopifyRestClient",
    "ShopifyResponse",
    "PaginatedFetcher",
    "ShopifyOrderClient",
    "ShopifyProductClient",
    "ShopifyInventoryClient",
    "ShopifyRestClient",
]
