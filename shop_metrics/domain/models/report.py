"""
Report domain models.

Output-only records recomputed on every call. ``to_dict`` produces the
camelCase JSON shape consumed by the dashboard.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


def _money(value: Decimal) -> float:
    return float(value)


@dataclass(frozen=True)
class FinancialSummary:
    """
    Store-wide totals for a date range.

    ``total_sales`` adds refunds rather than subtracting them; refund
    transactions carry their own sign.
    """

    total_orders: int
    total_sales: Decimal
    avg_order_value: Decimal
    total_net_sales: Decimal
    total_returns: Decimal
    total_shipping: Decimal
    total_taxes: Decimal
    total_duties: Decimal
    total_tips: Decimal
    total_discounts: Decimal = Decimal("0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalOrders": self.total_orders,
            "totalSales": _money(self.total_sales),
            "avgOrderValue": _money(self.avg_order_value),
            "totalNetSales": _money(self.total_net_sales),
            "totalReturns": _money(self.total_returns),
            "totalShipping": _money(self.total_shipping),
            "totalTaxes": _money(self.total_taxes),
            "totalDuties": _money(self.total_duties),
            "totalTips": _money(self.total_tips),
            "totalDiscounts": _money(self.total_discounts),
        }


@dataclass(frozen=True)
class ProductStat:
    """Per-variant sales and margin."""

    variant_id: int | None
    title: str
    variant_title: str
    total_sold: int
    cost_per_unit: Decimal
    margin: Decimal

    @property
    def total_cost(self) -> Decimal:
        return self.cost_per_unit * self.total_sold

    def to_dict(self) -> dict[str, Any]:
        return {
            "variantId": self.variant_id,
            "title": self.title,
            "variantTitle": self.variant_title,
            "totalSold": self.total_sold,
            "costPerUnit": _money(self.cost_per_unit),
            "margin": _money(self.margin),
        }


@dataclass(frozen=True)
class CollectionStat:
    """Sales credited to one product tag."""

    title: str
    total_sold: int
    total_revenue: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "totalSold": self.total_sold,
            "totalRevenue": _money(self.total_revenue),
        }
