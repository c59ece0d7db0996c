"""Tests unitarios para el reporte de ventas por tag."""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from shop_metrics.domain.models import Product
from shop_metrics.services.reports.collection_aggregator import (
    aggregate_collections,
    build_collection_stats,
    build_collection_stats_from_orders,
    collect_product_ids,
    fetch_product_tags,
)
from shop_metrics.utils.error_handler import ShopifyAPIException


def _mock_client(config, products, orders=None):
    """Cliente cuyo get_product responde desde un dict; un valor Exception se lanza."""

    async def get_product(product_id):
        result = products[product_id]
        if isinstance(result, Exception):
            raise result
        return result

    client = MagicMock()
    client.config = config
    client.fetch_orders = AsyncMock(return_value=orders or [])
    client.get_product = AsyncMock(side_effect=get_product)
    return client


class TestAggregateCollections:
    def test_item_credited_to_every_tag(self, make_order, make_line_item):
        """Un producto con dos tags suma su venta completa en ambos."""
        orders = [make_order(line_items=(make_line_item(product_id=1, quantity=2, price="50"),))]

        stats = aggregate_collections(orders, {1: ("Summer", "Sale")})

        assert [stat.to_dict() for stat in stats] == [
            {"title": "Summer", "totalSold": 2, "totalRevenue": 100.0},
            {"title": "Sale", "totalSold": 2, "totalRevenue": 100.0},
        ]

    def test_untagged_product_contributes_nothing(self, make_order, make_line_item):
        orders = [make_order(line_items=(make_line_item(product_id=1, quantity=1, price="5"),))]

        assert aggregate_collections(orders, {1: ()}) == []

    def test_distinct_product_ids_in_first_seen_order(self, make_order, make_line_item):
        orders = [
            make_order(
                line_items=(
                    make_line_item(product_id=1),
                    make_line_item(product_id=None),
                    make_line_item(product_id=2),
                    make_line_item(product_id=1),
                )
            )
        ]

        assert collect_product_ids(orders) == [1, 2]


class TestBuildCollectionStats:
    """Tests para el flujo completo por tag."""

    @pytest.mark.asyncio
    async def test_single_product_scenario(self, shopify_config, date_range, make_order, make_line_item):
        """Producto 1 con tag New, cantidad 2 a 50."""
        orders = [make_order(line_items=(make_line_item(product_id=1, variant_id=10, quantity=2, price="50"),))]
        client = _mock_client(shopify_config, {1: Product(id=1, tags=("New",))}, orders=orders)

        stats = await build_collection_stats(client, date_range)

        assert [stat.to_dict() for stat in stats] == [{"title": "New", "totalSold": 2, "totalRevenue": 100.0}]

    @pytest.mark.asyncio
    async def test_failed_lookup_excludes_product(self, shopify_config, make_order, make_line_item):
        """Si falla el producto 2, sus ventas no aparecen y el reporte sigue."""
        orders = [
            make_order(
                line_items=(
                    make_line_item(product_id=1, quantity=1, price="10"),
                    make_line_item(product_id=2, variant_id=20, quantity=5, price="99"),
                )
            )
        ]
        client = _mock_client(
            shopify_config,
            {
                1: Product(id=1, tags=("Sale",)),
                2: ShopifyAPIException("Not Found", api_response_code=404),
            },
        )

        stats = await build_collection_stats_from_orders(client, orders)

        assert len(stats) == 1
        assert stats[0].title == "Sale"
        assert stats[0].total_sold == 1
        assert stats[0].total_revenue == Decimal("10")

    @pytest.mark.asyncio
    async def test_one_lookup_per_product(self, shopify_config, make_order, make_line_item):
        orders = [
            make_order(line_items=(make_line_item(product_id=1),)),
            make_order(line_items=(make_line_item(product_id=1), make_line_item(product_id=3))),
        ]
        client = _mock_client(shopify_config, {1: Product(id=1), 3: Product(id=3)})

        await build_collection_stats_from_orders(client, orders)

        assert sorted(call.args[0] for call in client.get_product.await_args_list) == [1, 3]

    @pytest.mark.asyncio
    async def test_order_independent_of_lookup_completion(self, shopify_config, make_order, make_line_item):
        """Las consultas terminan en orden inverso y los tags salen en orden de aparición."""
        tags = {1: ("Summer",), 2: ("Sale",), 3: ("New",)}
        finished = []

        async def get_product(product_id):
            await asyncio.sleep(0.01 * (4 - product_id))
            finished.append(product_id)
            return Product(id=product_id, tags=tags[product_id])

        orders = [
            make_order(
                line_items=(
                    make_line_item(product_id=1, variant_id=10),
                    make_line_item(product_id=2, variant_id=20),
                    make_line_item(product_id=3, variant_id=30),
                )
            )
        ]
        client = _mock_client(shopify_config, {})
        client.get_product = AsyncMock(side_effect=get_product)

        product_tags = await fetch_product_tags(client, [1, 2, 3], max_concurrency=shopify_config.max_concurrency)
        stats = await build_collection_stats_from_orders(client, orders)

        assert finished[:3] == [3, 2, 1]
        assert list(product_tags) == [1, 2, 3]
        assert [stat.title for stat in stats] == ["Summer", "Sale", "New"]
