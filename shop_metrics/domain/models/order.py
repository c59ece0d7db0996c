"""
Order domain model.

Read-only view of a Shopify REST order, reduced to the fields the
reports need. Monetary amounts are parsed into Decimal; absent values
become zero so aggregations never fail on partial records.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from shop_metrics.utils.shopify_utils import to_decimal, to_int


@dataclass(frozen=True)
class Transaction:
    """
    A refund transaction.

    Attributes:
        amount: Transaction amount (negative for reversals)
    """

    amount: Decimal = Decimal("0")

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "Transaction":
        return cls(amount=to_decimal(data.get("amount")))


@dataclass(frozen=True)
class Refund:
    """A refund with its transactions."""

    transactions: tuple[Transaction, ...] = ()

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "Refund":
        return cls(transactions=tuple(Transaction.from_shopify(tx) for tx in data.get("transactions") or []))

    @property
    def total(self) -> Decimal:
        return sum((tx.amount for tx in self.transactions), Decimal("0"))


@dataclass(frozen=True)
class LineItem:
    """
    One purchased variant within an order.

    Attributes:
        variant_id: Shopify variant ID (None for some custom items)
        product_id: Shopify product ID (None for custom items)
        inventory_item_id: Inventory item ID, when present on the line item
        title: Product title
        variant_title: Variant title ("" when absent)
        quantity: Units purchased
        price: Unit price
    """

    variant_id: int | None
    product_id: int | None = None
    inventory_item_id: int | None = None
    title: str = ""
    variant_title: str = ""
    quantity: int = 0
    price: Decimal = Decimal("0")

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            variant_id=data.get("variant_id"),
            product_id=data.get("product_id"),
            inventory_item_id=data.get("inventory_item_id"),
            title=data.get("title") or "",
            variant_title=data.get("variant_title") or "",
            quantity=to_int(data.get("quantity")),
            price=to_decimal(data.get("price")),
        )

    @property
    def revenue(self) -> Decimal:
        """Unit price times quantity."""
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    """
    Domain model representing a Shopify order.

    Attributes:
        id: Shopify order ID
        subtotal: subtotal_price (net sales contribution)
        shipping: total shipping price in presentment currency
        tax: total_tax
        duties: total_duties
        tips: total_tip_received
        discounts: total_discounts
        line_items: Ordered line items
        refunds: Ordered refunds
    """

    id: int | None
    subtotal: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    duties: Decimal = Decimal("0")
    tips: Decimal = Decimal("0")
    discounts: Decimal = Decimal("0")
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    refunds: tuple[Refund, ...] = field(default_factory=tuple)

    @classmethod
    def from_shopify(cls, data: dict[str, Any]) -> "Order":
        """Build an order from an ``orders.json`` record."""
        shipping_set = data.get("total_shipping_price_set") or {}
        presentment = shipping_set.get("presentment_money") or {}

        return cls(
            id=data.get("id"),
            subtotal=to_decimal(data.get("subtotal_price")),
            shipping=to_decimal(presentment.get("amount")),
            tax=to_decimal(data.get("total_tax")),
            duties=to_decimal(data.get("total_duties")),
            tips=to_decimal(data.get("total_tip_received")),
            discounts=to_decimal(data.get("total_discounts")),
            line_items=tuple(LineItem.from_shopify(item) for item in data.get("line_items") or []),
            refunds=tuple(Refund.from_shopify(refund) for refund in data.get("refunds") or []),
        )

    @property
    def refund_total(self) -> Decimal:
        """Sum of every transaction amount across all refunds."""
        return sum((refund.total for refund in self.refunds), Decimal("0"))
