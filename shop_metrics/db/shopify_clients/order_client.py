"""
Order client for the Shopify REST API.

Fetches every order created inside a date range, regardless of status.
"""

import logging
from typing import List

from shop_metrics.domain.models import Order
from shop_metrics.domain.value_objects import DateRange

from .base_client import BaseShopifyRestClient
from .paginated_fetcher import PaginatedFetcher

logger = logging.getLogger(__name__)


class ShopifyOrderClient(BaseShopifyRestClient):
    """
    Specialized client for ``orders.json``.
    """

    def build_order_params(self, date_range: DateRange) -> dict:
        """First-page query: page size, UTC day boundaries and every status."""
        return {
            "limit": self.config.page_size,
            **date_range.to_query_params(),
            "status": "any",
        }

    async def fetch_orders(self, date_range: DateRange) -> List[Order]:
        """
        Fetch all orders created within ``date_range``.

        Args:
            date_range: Inclusive day range (UTC)

        Returns:
            List[Order]: Orders in the order Shopify returned them

        Raises:
            ShopifyAPIException: If any page fails
        """
        fetcher = PaginatedFetcher(self)
        raw_orders = await fetcher.fetch_all(
            self.config.resource_url("orders.json"),
            self.build_order_params(date_range),
            collection_key="orders",
        )
        return [Order.from_shopify(raw) for raw in raw_orders]
