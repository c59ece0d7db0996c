"""
Per-variant margin report.

Phase 1 tallies quantity and revenue per variant, phase 2 looks up unit
cost for every referenced inventory item in batches of at most 100 ids,
phase 3 composes one ProductStat per variant.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from shop_metrics.db.shopify_clients import ShopifyRestClient
from shop_metrics.db.shopify_clients.inventory_client import MAX_INVENTORY_IDS_PER_REQUEST
from shop_metrics.domain.models import Order, ProductStat
from shop_metrics.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


@dataclass
class VariantTally:
    """Accumulated sales for one variant."""

    title: str
    variant_title: str
    inventory_item_id: Optional[int]
    total_sold: int = 0
    total_revenue: Decimal = field(default_factory=Decimal)


def tally_variants(orders: Iterable[Order]) -> Tuple[Dict[Optional[int], VariantTally], List[int]]:
    """
    Accumulate quantity and revenue per variant id.

    Title, variant title and inventory item id are taken from the first
    line item seen for each variant.

    Returns:
        Tuple of (variant id -> tally in first-seen order,
        distinct non-null inventory item ids in first-seen order)
    """
    tallies: Dict[Optional[int], VariantTally] = {}
    inventory_item_ids: Dict[int, None] = {}

    for order in orders:
        for item in order.line_items:
            tally = tallies.get(item.variant_id)
            if tally is None:
                tally = VariantTally(
                    title=item.title,
                    variant_title=item.variant_title,
                    inventory_item_id=item.inventory_item_id,
                )
                tallies[item.variant_id] = tally

            tally.total_sold += item.quantity
            tally.total_revenue += item.revenue

            if item.inventory_item_id:
                inventory_item_ids[item.inventory_item_id] = None

    return tallies, list(inventory_item_ids)


def chunk_ids(ids: Sequence[int], size: int = MAX_INVENTORY_IDS_PER_REQUEST) -> List[List[int]]:
    """Split ids into consecutive batches of at most ``size``."""
    size = max(1, min(size, MAX_INVENTORY_IDS_PER_REQUEST))
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


async def fetch_inventory_costs(
    client: ShopifyRestClient,
    inventory_item_ids: Sequence[int],
    batch_size: int = MAX_INVENTORY_IDS_PER_REQUEST,
    max_concurrency: int = 4,
) -> Dict[int, Decimal]:
    """
    Look up cost per unit for every inventory item id.

    Batches run concurrently up to ``max_concurrency``. Any failed batch
    cancels the rest and propagates: costs are complete or not returned.

    Returns:
        Dict[int, Decimal]: inventory item id -> cost per unit

    Raises:
        ShopifyAPIException: If any batch fails after retries
    """
    batches = chunk_ids(inventory_item_ids, batch_size)
    if not batches:
        return {}

    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_batch(batch: List[int]):
        async with semaphore:
            return await client.get_inventory_items(batch)

    logger.info(f"🚀 Fetching costs for {len(inventory_item_ids)} inventory items in {len(batches)} batch(es)")

    tasks = [asyncio.create_task(fetch_batch(batch)) for batch in batches]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    cost_map: Dict[int, Decimal] = {}
    for items in results:
        for item in items:
            cost_map[item.id] = item.cost

    return cost_map


def compose_product_stats(
    tallies: Dict[Optional[int], VariantTally],
    cost_map: Dict[int, Decimal],
) -> List[ProductStat]:
    """
    Build one ProductStat per tallied variant.

    A variant whose inventory item has no known cost uses cost 0.
    """
    stats = []
    for variant_id, tally in tallies.items():
        cost = cost_map.get(tally.inventory_item_id, Decimal("0"))
        stats.append(
            ProductStat(
                variant_id=variant_id,
                title=tally.title,
                variant_title=tally.variant_title,
                total_sold=tally.total_sold,
                cost_per_unit=cost,
                margin=tally.total_revenue - cost * tally.total_sold,
            )
        )
    return stats


async def build_product_stats_from_orders(
    client: ShopifyRestClient,
    orders: Sequence[Order],
) -> List[ProductStat]:
    """Run the tally, cost enrichment and composition over fetched orders."""
    tallies, inventory_item_ids = tally_variants(orders)
    cost_map = await fetch_inventory_costs(
        client,
        inventory_item_ids,
        batch_size=client.config.inventory_batch_size,
        max_concurrency=client.config.max_concurrency,
    )

    stats = compose_product_stats(tallies, cost_map)
    logger.info(f"📦 Product stats: {len(stats)} variants, {len(cost_map)} costs found")
    return stats


async def build_product_stats(client: ShopifyRestClient, date_range: DateRange) -> List[ProductStat]:
    """
    Fetch every order in the range and compute per-variant margin.

    Raises:
        ShopifyAPIException: If fetching orders or any cost batch fails
    """
    orders = await client.fetch_orders(date_range)
    return await build_product_stats_from_orders(client, orders)
