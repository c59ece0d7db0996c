"""Tests unitarios para los clientes REST de Shopify sobre una sesión falsa."""

import aiohttp
import pytest

from shop_metrics.db.shopify_clients import BaseShopifyRestClient, ShopifyRestClient, ShopifyResponse
from shop_metrics.utils.error_handler import ErrorCode, ShopifyAPIException, ValidationException

ORDERS_URL = "https://test-shop.myshopify.com/admin/api/2025-04/orders.json"


class TestShopifyResponse:
    def test_links_from_header(self):
        response = ShopifyResponse(data={}, headers={"Link": '<https://s/next>; rel="next"'})

        assert response.links == {"next": "https://s/next"}

    def test_no_link_header(self):
        assert ShopifyResponse(data={}).links == {}


class TestBaseClientGet:
    """Tests para la traducción de respuestas HTTP."""

    @pytest.mark.asyncio
    async def test_sends_auth_headers(self, shopify_config, fake_session, fake_response):
        """Cada request lleva el token de acceso."""
        session = fake_session([fake_response(body={"ok": True})])
        client = BaseShopifyRestClient(shopify_config, session=session)

        response = await client.get(ORDERS_URL, params={"limit": 1})

        assert response.data == {"ok": True}
        assert session.calls[0]["headers"]["X-Shopify-Access-Token"] == "shpat_test"
        assert session.calls[0]["params"] == {"limit": 1}

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self, shopify_config, fake_session, fake_response):
        """Un 429 se reintenta respetando Retry-After."""
        session = fake_session(
            [
                fake_response(status=429, headers={"Retry-After": "0"}),
                fake_response(body={"orders": []}),
            ]
        )
        client = BaseShopifyRestClient(shopify_config, session=session)

        response = await client.get(ORDERS_URL)

        assert response.data == {"orders": []}
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_client_error_fails_immediately(self, shopify_config, fake_session, fake_response):
        """Un 404 no se reintenta y el body queda en details."""
        session = fake_session([fake_response(status=404, text='{"errors":"Not Found"}')])
        client = BaseShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ShopifyAPIException) as exc_info:
            await client.get(ORDERS_URL)

        assert exc_info.value.api_response_code == 404
        assert exc_info.value.details["body"] == '{"errors":"Not Found"}'
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_error_body_is_truncated(self, shopify_config, fake_session, fake_response):
        session = fake_session([fake_response(status=400, text="x" * 2000)])
        client = BaseShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ShopifyAPIException) as exc_info:
            await client.get(ORDERS_URL)

        assert len(exc_info.value.details["body"]) == 500

    @pytest.mark.asyncio
    async def test_network_errors_exhaust_retries(self, shopify_config, fake_session):
        """Errores de red se reintentan hasta max_retries."""
        session = fake_session([aiohttp.ClientConnectionError("reset")] * 3)
        client = BaseShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ShopifyAPIException) as exc_info:
            await client.get(ORDERS_URL)

        assert "Network error" in exc_info.value.message
        assert exc_info.value.error_code == ErrorCode.SHOPIFY_CONNECTION_FAILED
        assert len(session.calls) == 3

    @pytest.mark.asyncio
    async def test_invalid_json_not_retried(self, shopify_config, fake_session, fake_response):
        session = fake_session([fake_response(status=200, body=None)])
        client = BaseShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ShopifyAPIException):
            await client.get(ORDERS_URL)

        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_requires_session(self, shopify_config):
        client = BaseShopifyRestClient(shopify_config)

        with pytest.raises(ShopifyAPIException):
            await client.get(ORDERS_URL)


class TestPaginatedOrders:
    """Tests para la paginación por cursor en fetch_orders."""

    @pytest.mark.asyncio
    async def test_walks_all_pages(self, shopify_config, date_range, fake_session, fake_response):
        """N páginas generan N requests; solo la primera lleva parámetros."""
        page2 = f"{ORDERS_URL}?limit=250&page_info=cursor2"
        page3 = f"{ORDERS_URL}?limit=250&page_info=cursor3"
        session = fake_session(
            [
                fake_response(body={"orders": [{"id": 1}, {"id": 2}]}, headers={"Link": f'<{page2}>; rel="next"'}),
                # Una página vacía con next no corta la paginación
                fake_response(body={"orders": []}, headers={"Link": f'<{page3}>; rel="next"'}),
                fake_response(body={"orders": [{"id": 3}]}, headers={"Link": f'<{page2}>; rel="previous"'}),
            ]
        )
        client = ShopifyRestClient(shopify_config, session=session)

        orders = await client.fetch_orders(date_range)

        assert [order.id for order in orders] == [1, 2, 3]
        assert len(session.calls) == 3
        assert session.calls[0]["url"] == ORDERS_URL
        assert session.calls[0]["params"] == {
            "limit": 250,
            "created_at_min": "2025-01-01T00:00:00Z",
            "created_at_max": "2025-01-31T23:59:59Z",
            "status": "any",
        }
        assert [call["url"] for call in session.calls[1:]] == [page2, page3]
        assert [call["params"] for call in session.calls[1:]] == [None, None]

    @pytest.mark.asyncio
    async def test_malformed_link_ends_pagination(self, shopify_config, date_range, fake_session, fake_response):
        session = fake_session([fake_response(body={"orders": [{"id": 1}]}, headers={"Link": 'rel="next"'})])
        client = ShopifyRestClient(shopify_config, session=session)

        orders = await client.fetch_orders(date_range)

        assert len(orders) == 1
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_repeated_cursor_stops(self, shopify_config, date_range, fake_session, fake_response):
        """Un next que repite una URL ya visitada no genera un ciclo."""
        page2 = f"{ORDERS_URL}?page_info=same"
        link = {"Link": f'<{page2}>; rel="next"'}
        session = fake_session(
            [
                fake_response(body={"orders": [{"id": 1}]}, headers=link),
                fake_response(body={"orders": [{"id": 2}]}, headers=link),
            ]
        )
        client = ShopifyRestClient(shopify_config, session=session)

        orders = await client.fetch_orders(date_range)

        assert [order.id for order in orders] == [1, 2]
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_failed_page_returns_nothing(self, shopify_config, date_range, fake_session, fake_response):
        """Si una página falla no hay resultado parcial."""
        page2 = f"{ORDERS_URL}?page_info=cursor2"
        session = fake_session(
            [
                fake_response(body={"orders": [{"id": 1}]}, headers={"Link": f'<{page2}>; rel="next"'}),
                fake_response(status=403, text="Forbidden"),
            ]
        )
        client = ShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ShopifyAPIException):
            await client.fetch_orders(date_range)


class TestResourceClients:
    """Tests para productos e inventario."""

    @pytest.mark.asyncio
    async def test_get_product_tags(self, shopify_config, fake_session, fake_response):
        session = fake_session([fake_response(body={"product": {"id": 1, "tags": "Summer, Sale"}})])
        client = ShopifyRestClient(shopify_config, session=session)

        product = await client.get_product(1)

        assert product.tags == ("Summer", "Sale")
        assert session.calls[0]["url"].endswith("/products/1.json")

    @pytest.mark.asyncio
    async def test_get_product_empty_body(self, shopify_config, fake_session, fake_response):
        """Un body sin producto equivale a un producto sin tags."""
        session = fake_session([fake_response(body={})])
        client = ShopifyRestClient(shopify_config, session=session)

        product = await client.get_product(7)

        assert product.id == 7
        assert product.tags == ()

    @pytest.mark.asyncio
    async def test_get_product_list_tags(self, shopify_config, fake_session, fake_response):
        """Tags en formato no string no hacen fallar la consulta."""
        session = fake_session([fake_response(body={"product": {"id": 3, "tags": ["Summer"]}})])
        client = ShopifyRestClient(shopify_config, session=session)

        product = await client.get_product(3)

        assert product.tags == ()

    @pytest.mark.asyncio
    async def test_inventory_ids_joined(self, shopify_config, fake_session, fake_response):
        session = fake_session(
            [fake_response(body={"inventory_items": [{"id": 100, "cost": "12.50"}, {"id": 101, "cost": None}]})]
        )
        client = ShopifyRestClient(shopify_config, session=session)

        items = await client.get_inventory_items([100, 101])

        assert session.calls[0]["params"] == {"ids": "100,101"}
        assert [str(item.cost) for item in items] == ["12.50", "0"]

    @pytest.mark.asyncio
    async def test_inventory_batch_limit(self, shopify_config, fake_session):
        session = fake_session([])
        client = ShopifyRestClient(shopify_config, session=session)

        with pytest.raises(ValidationException):
            await client.get_inventory_items(list(range(101)))

        assert await client.get_inventory_items([]) == []
        assert session.calls == []
