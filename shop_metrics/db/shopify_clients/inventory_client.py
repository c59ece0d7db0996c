"""
Inventory client for the Shopify REST API.

Inventory items are looked up by id list; Shopify rejects more than
100 ids per request, so callers pass pre-sized batches.
"""

import logging
from typing import List, Sequence

from shop_metrics.domain.models import InventoryItem
from shop_metrics.utils.error_handler import ValidationException

from .base_client import BaseShopifyRestClient

logger = logging.getLogger(__name__)

MAX_INVENTORY_IDS_PER_REQUEST = 100


class ShopifyInventoryClient(BaseShopifyRestClient):
    """
    Specialized client for ``inventory_items.json``.
    """

    async def get_inventory_items(self, inventory_item_ids: Sequence[int]) -> List[InventoryItem]:
        """
        Fetch one batch of inventory items.

        Args:
            inventory_item_ids: At most 100 inventory item IDs

        Returns:
            List[InventoryItem]: Items Shopify returned (missing ids are simply absent)

        Raises:
            ValidationException: If the batch exceeds the API limit
            ShopifyAPIException: If the request fails after retries
        """
        if not inventory_item_ids:
            return []

        if len(inventory_item_ids) > MAX_INVENTORY_IDS_PER_REQUEST:
            raise ValidationException(
                message=f"At most {MAX_INVENTORY_IDS_PER_REQUEST} inventory item ids per request",
                field="ids",
                invalid_value=len(inventory_item_ids),
            )

        ids_param = ",".join(str(item_id) for item_id in inventory_item_ids)
        response = await self.get(
            self.config.resource_url("inventory_items.json"),
            params={"ids": ids_param},
        )

        items = [InventoryItem.from_shopify(raw) for raw in response.data.get("inventory_items") or []]
        logger.debug(f"Fetched {len(items)}/{len(inventory_item_ids)} inventory items")
        return items
