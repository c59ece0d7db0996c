"""
Report Service Module

Public entry points for the store reports. Each function takes a date
range plus explicit Shopify configuration and returns JSON-ready data.
Fatal failures are logged with their remote detail and re-raised as a
single generic ReportGenerationException.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from shop_metrics.core.config import ShopifyConfig
from shop_metrics.db.shopify_clients import ShopifyRestClient
from shop_metrics.domain.value_objects import DateRange
from shop_metrics.utils.error_handler import (
    AppException,
    ReportGenerationException,
    ValidationException,
    log_exception,
)

from .collection_aggregator import build_collection_stats, build_collection_stats_from_orders
from .financial_aggregator import build_financial_summary, build_financial_summary_from_orders
from .product_aggregator import build_product_stats, build_product_stats_from_orders

logger = logging.getLogger(__name__)

ORDERS_ERROR_MESSAGE = "Something went wrong while contacting Shopify."
PRODUCTS_ERROR_MESSAGE = "Could not fetch product data."
COLLECTIONS_ERROR_MESSAGE = "Could not fetch collections."
DASHBOARD_ERROR_MESSAGE = "Could not build the dashboard report."


@asynccontextmanager
async def _shopify_client(
    config: ShopifyConfig, client: Optional[ShopifyRestClient] = None
) -> AsyncIterator[ShopifyRestClient]:
    """Yield the injected client, or open (and close) one for this call."""
    if client is not None:
        yield client
        return

    async with ShopifyRestClient(config) as owned_client:
        yield owned_client


@asynccontextmanager
async def _report_errors(report: str, message: str, date_range: DateRange) -> AsyncIterator[None]:
    try:
        yield
    except ValidationException:
        raise
    except AppException as e:
        log_exception(e, {"report": report, "from": date_range.start, "to": date_range.end}, level=logging.ERROR)
        raise ReportGenerationException(message, report=report, cause=e) from e


async def get_financial_summary(
    date_range: DateRange,
    config: ShopifyConfig,
    client: Optional[ShopifyRestClient] = None,
) -> Dict[str, Any]:
    """
    Generates the store-wide financial summary.

    Args:
        date_range: Inclusive day range (UTC)
        config: Shopify connection settings
        client: Optional already-open client (tests, shared sessions)

    Returns:
        Dict: totalOrders, totalSales, avgOrderValue and the individual totals

    Raises:
        ReportGenerationException: If any Shopify request fails
    """
    async with _report_errors("orders", ORDERS_ERROR_MESSAGE, date_range):
        async with _shopify_client(config, client) as shopify:
            summary = await build_financial_summary(shopify, date_range)
    return summary.to_dict()


async def get_product_stats(
    date_range: DateRange,
    config: ShopifyConfig,
    client: Optional[ShopifyRestClient] = None,
) -> Dict[str, Any]:
    """
    Generates per-variant sales and margin.

    Returns:
        Dict: {"products": [...]} one entry per variant

    Raises:
        ReportGenerationException: If fetching orders or any cost batch fails
    """
    async with _report_errors("products", PRODUCTS_ERROR_MESSAGE, date_range):
        async with _shopify_client(config, client) as shopify:
            stats = await build_product_stats(shopify, date_range)
    return {"products": [stat.to_dict() for stat in stats]}


async def get_collection_stats(
    date_range: DateRange,
    config: ShopifyConfig,
    client: Optional[ShopifyRestClient] = None,
) -> Dict[str, Any]:
    """
    Generates sales per product tag.

    Returns:
        Dict: {"collections": [...]} one entry per tag

    Raises:
        ReportGenerationException: If fetching orders fails
    """
    async with _report_errors("collections", COLLECTIONS_ERROR_MESSAGE, date_range):
        async with _shopify_client(config, client) as shopify:
            stats = await build_collection_stats(shopify, date_range)
    return {"collections": [stat.to_dict() for stat in stats]}


async def get_dashboard_report(
    date_range: DateRange,
    config: ShopifyConfig,
    client: Optional[ShopifyRestClient] = None,
) -> Dict[str, Any]:
    """
    Generates all three reports from a single order fetch.

    The reductions share the fetched orders but keep independent
    accumulators, so they run concurrently. The first fatal failure
    cancels the other reports and waits for them to unwind.

    Returns:
        Dict: {"summary": {...}, "products": [...], "collections": [...]}

    Raises:
        ReportGenerationException: If any fatal Shopify request fails
    """
    async with _report_errors("dashboard", DASHBOARD_ERROR_MESSAGE, date_range):
        async with _shopify_client(config, client) as shopify:
            orders = await shopify.fetch_orders(date_range)
            tasks = [
                asyncio.create_task(build_financial_summary_from_orders(orders)),
                asyncio.create_task(build_product_stats_from_orders(shopify, orders)),
                asyncio.create_task(build_collection_stats_from_orders(shopify, orders)),
            ]
            try:
                summary, products, collections = await asyncio.gather(*tasks)
            except Exception:
                # Siblings must stop before the session closes
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

    return {
        "summary": summary.to_dict(),
        "products": [stat.to_dict() for stat in products],
        "collections": [stat.to_dict() for stat in collections],
    }
