"""
Financial summary for a date range.

Reduces the full order collection into store-wide totals: net sales,
returns, shipping, taxes, duties, tips, discounts, order count and
average order value.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from functools import reduce
from typing import Iterable, Sequence

from shop_metrics.db.shopify_clients import ShopifyRestClient
from shop_metrics.domain.models import FinancialSummary, Order
from shop_metrics.domain.value_objects import DateRange

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class FinancialTotals:
    """Running totals accumulated over orders."""

    order_count: int = 0
    net_sales: Decimal = ZERO
    returns: Decimal = ZERO
    shipping: Decimal = ZERO
    taxes: Decimal = ZERO
    duties: Decimal = ZERO
    tips: Decimal = ZERO
    discounts: Decimal = ZERO

    def add(self, order: Order) -> "FinancialTotals":
        return replace(
            self,
            order_count=self.order_count + 1,
            net_sales=self.net_sales + order.subtotal,
            returns=self.returns + order.refund_total,
            shipping=self.shipping + order.shipping,
            taxes=self.taxes + order.tax,
            duties=self.duties + order.duties,
            tips=self.tips + order.tips,
            discounts=self.discounts + order.discounts,
        )

    def to_summary(self) -> FinancialSummary:
        # Refunds are added, not subtracted: refund transactions carry their own sign
        total_sales = self.net_sales + self.returns + self.taxes + self.duties + self.tips
        # Floor of 1 keeps the average defined for an empty range
        total_orders = self.order_count or 1

        return FinancialSummary(
            total_orders=total_orders,
            total_sales=total_sales,
            avg_order_value=(total_sales - self.shipping) / total_orders,
            total_net_sales=self.net_sales,
            total_returns=self.returns,
            total_shipping=self.shipping,
            total_taxes=self.taxes,
            total_duties=self.duties,
            total_tips=self.tips,
            total_discounts=self.discounts,
        )


def summarize_orders(orders: Iterable[Order]) -> FinancialSummary:
    """
    Reduce orders into a FinancialSummary.

    Args:
        orders: Complete order collection for the range

    Returns:
        FinancialSummary: Totals; absent amounts count as zero
    """
    totals = reduce(FinancialTotals.add, orders, FinancialTotals())
    return totals.to_summary()


async def build_financial_summary_from_orders(orders: Sequence[Order]) -> FinancialSummary:
    """Async adapter so the dashboard can gather all reports uniformly."""
    summary = summarize_orders(orders)
    logger.info(
        f"📊 Financial summary: {len(orders)} orders, total sales {summary.total_sales}, "
        f"avg order value {summary.avg_order_value:.2f}"
    )
    return summary


async def build_financial_summary(client: ShopifyRestClient, date_range: DateRange) -> FinancialSummary:
    """
    Fetch every order in the range and summarize it.

    Raises:
        ShopifyAPIException: If fetching orders fails
    """
    orders = await client.fetch_orders(date_range)
    return await build_financial_summary_from_orders(orders)
