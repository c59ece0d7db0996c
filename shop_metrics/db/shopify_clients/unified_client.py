"""
Unified Shopify REST client that combines all specialized clients.

This module provides a single interface whose specialized clients share
one HTTP session and one retry handler.
"""

import logging
from typing import List, Optional, Sequence

import aiohttp

from shop_metrics.core.config import ShopifyConfig
from shop_metrics.domain.models import InventoryItem, Order, Product
from shop_metrics.domain.value_objects import DateRange
from shop_metrics.utils.retry_handler import RetryHandler

from .base_client import BaseShopifyRestClient
from .inventory_client import ShopifyInventoryClient
from .order_client import ShopifyOrderClient
from .product_client import ShopifyProductClient

logger = logging.getLogger(__name__)


class ShopifyRestClient(BaseShopifyRestClient):
    """
    Unified Shopify REST client.

    Usage:
        async with ShopifyRestClient(config) as client:
            orders = await client.fetch_orders(date_range)
    """

    def __init__(
        self,
        config: ShopifyConfig,
        session: Optional[aiohttp.ClientSession] = None,
        retry_handler: Optional[RetryHandler] = None,
    ):
        """Initialize the unified client with all specialized clients."""
        super().__init__(config, session=session, retry_handler=retry_handler)

        self.orders = ShopifyOrderClient(config, session=session, retry_handler=self.retry_handler)
        self.products = ShopifyProductClient(config, session=session, retry_handler=self.retry_handler)
        self.inventory = ShopifyInventoryClient(config, session=session, retry_handler=self.retry_handler)

    async def initialize(self):
        """Open the shared session and hand it to the specialized clients."""
        await super().initialize()
        self._share_session()

    def _share_session(self):
        for client in (self.orders, self.products, self.inventory):
            client.session = self.session

    async def close(self):
        """Close the unified client and all specialized clients."""
        # The specialized clients share the same session, so we only need to close once
        await super().close()

        for client in (self.orders, self.products, self.inventory):
            client.session = None

    # =============================================================================
    # DELEGATES
    # =============================================================================

    async def fetch_orders(self, date_range: DateRange) -> List[Order]:
        """Delegate to order client."""
        return await self.orders.fetch_orders(date_range)

    async def get_product(self, product_id: int) -> Product:
        """Delegate to product client."""
        return await self.products.get_product(product_id)

    async def get_inventory_items(self, inventory_item_ids: Sequence[int]) -> List[InventoryItem]:
        """Delegate to inventory client."""
        return await self.inventory.get_inventory_items(inventory_item_ids)
