"""
Product and inventory item domain models.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from shop_metrics.utils.shopify_utils import split_tags, to_decimal


@dataclass(frozen=True)
class Product:
    """
    Product reduced to its tags.

    Attributes:
        id: Shopify product ID
        tags: Trimmed, non-empty tags in the order Shopify lists them
    """

    id: int
    tags: tuple[str, ...] = ()

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "Product":
        return cls(id=data.get("id"), tags=tuple(split_tags(data.get("tags"))))


@dataclass(frozen=True)
class InventoryItem:
    """
    Stock-tracking record of a variant.

    Attributes:
        id: Inventory item ID
        cost: Cost per unit (0 when Shopify has none)
    """

    id: int
    cost: Decimal = Decimal("0")

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "InventoryItem":
        return cls(id=data.get("id"), cost=to_decimal(data.get("cost")))
