"""
Per-tag collection report.

Product tags stand in for collection membership. Each referenced product
is looked up individually; a failed lookup only removes that product from
the tag index. Every line item credits its full quantity and revenue to
every tag its product carries.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from shop_metrics.db.shopify_clients import ShopifyRestClient
from shop_metrics.domain.models import CollectionStat, Order
from shop_metrics.domain.value_objects import DateRange
from shop_metrics.utils.error_handler import AppException

logger = logging.getLogger(__name__)


@dataclass
class TagTally:
    """Accumulated sales for one tag."""

    total_sold: int = 0
    total_revenue: Decimal = field(default_factory=Decimal)


def collect_product_ids(orders: Iterable[Order]) -> List[int]:
    """Distinct non-null product ids across all line items, in first-seen order."""
    product_ids: Dict[int, None] = {}
    for order in orders:
        for item in order.line_items:
            if item.product_id:
                product_ids[item.product_id] = None
    return list(product_ids)


async def fetch_product_tags(
    client: ShopifyRestClient,
    product_ids: Sequence[int],
    max_concurrency: int = 4,
) -> Dict[int, Tuple[str, ...]]:
    """
    Look up tags for each product, absorbing per-product failures.

    Returns:
        Dict[int, Tuple[str, ...]]: product id -> tags, only for products
        whose lookup succeeded, in ``product_ids`` order
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_one(product_id: int) -> Optional[Tuple[str, ...]]:
        async with semaphore:
            try:
                product = await client.get_product(product_id)
            except AppException as e:
                logger.warning(f"⚠️ Could not fetch product {product_id}, skipping its tags: {e}")
                return None
            return product.tags

    logger.info(f"🏷️ Fetching tags for {len(product_ids)} products")
    results = await asyncio.gather(*(fetch_one(product_id) for product_id in product_ids))

    return {product_id: tags for product_id, tags in zip(product_ids, results) if tags is not None}


def aggregate_collections(
    orders: Iterable[Order],
    product_tags: Dict[int, Tuple[str, ...]],
) -> List[CollectionStat]:
    """
    Credit every line item to each tag of its product.

    Line items are not divided between tags: a product with three tags
    contributes its full quantity and revenue to all three.

    Returns:
        List[CollectionStat]: One record per tag, in first-credited order
    """
    tallies: Dict[str, TagTally] = {}

    for order in orders:
        for item in order.line_items:
            for tag in product_tags.get(item.product_id, ()):
                tally = tallies.setdefault(tag, TagTally())
                tally.total_sold += item.quantity
                tally.total_revenue += item.revenue

    return [
        CollectionStat(title=tag, total_sold=tally.total_sold, total_revenue=tally.total_revenue)
        for tag, tally in tallies.items()
    ]


async def build_collection_stats_from_orders(
    client: ShopifyRestClient,
    orders: Sequence[Order],
) -> List[CollectionStat]:
    """Run the product discovery, tag lookup and aggregation over fetched orders."""
    product_ids = collect_product_ids(orders)
    product_tags = await fetch_product_tags(client, product_ids, max_concurrency=client.config.max_concurrency)

    skipped = len(product_ids) - len(product_tags)
    if skipped:
        logger.warning(f"{skipped}/{len(product_ids)} products excluded from tag membership")

    stats = aggregate_collections(orders, product_tags)
    logger.info(f"🗂️ Collection stats: {len(stats)} tags from {len(product_tags)} products")
    return stats


async def build_collection_stats(client: ShopifyRestClient, date_range: DateRange) -> List[CollectionStat]:
    """
    Fetch every order in the range and aggregate sales per product tag.

    Raises:
        ShopifyAPIException: If fetching orders fails (product lookups never raise)
    """
    orders = await client.fetch_orders(date_range)
    return await build_collection_stats_from_orders(client, orders)
