"""Fixtures compartidos: configuración de prueba, órdenes y sesión HTTP falsa."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from shop_metrics.core.config import ShopifyConfig
from shop_metrics.domain.models import LineItem, Order, Refund, Transaction
from shop_metrics.domain.value_objects import DateRange


class FakeResponse:
    """Respuesta mínima compatible con el uso de aiohttp en los clientes."""

    def __init__(
        self,
        status: int = 200,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        text: str = "",
    ):
        self.status = status
        self._body = body
        self.headers = headers or {}
        self._text = text

    async def json(self, content_type=None):
        if self._body is None:
            raise ValueError("Expecting value")
        return self._body

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Sesión que entrega respuestas en orden y registra cada GET."""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, headers=None):
        self.calls.append({"url": str(url), "params": params, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        pass


@pytest.fixture
def shopify_config() -> ShopifyConfig:
    """Configuración sin esperas entre reintentos."""
    return ShopifyConfig(
        shop_url="test-shop.myshopify.com",
        access_token="shpat_test",
        api_version="2025-04",
        request_timeout=5.0,
        max_retries=3,
        max_concurrency=4,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
    )


@pytest.fixture
def date_range() -> DateRange:
    return DateRange.parse("2025-01-01", "2025-01-31")


@pytest.fixture
def make_order():
    """Fábrica de órdenes del dominio con valores por defecto en cero."""

    def _make(
        order_id: int = 1,
        subtotal: str = "0",
        shipping: str = "0",
        tax: str = "0",
        duties: str = "0",
        tips: str = "0",
        discounts: str = "0",
        line_items: tuple = (),
        refunds: tuple = (),
    ) -> Order:
        return Order(
            id=order_id,
            subtotal=Decimal(subtotal),
            shipping=Decimal(shipping),
            tax=Decimal(tax),
            duties=Decimal(duties),
            tips=Decimal(tips),
            discounts=Decimal(discounts),
            line_items=tuple(line_items),
            refunds=tuple(refunds),
        )

    return _make


@pytest.fixture
def make_line_item():
    def _make(
        variant_id: Optional[int] = 10,
        product_id: Optional[int] = 1,
        inventory_item_id: Optional[int] = 100,
        title: str = "T-Shirt",
        variant_title: str = "M",
        quantity: int = 1,
        price: str = "0",
    ) -> LineItem:
        return LineItem(
            variant_id=variant_id,
            product_id=product_id,
            inventory_item_id=inventory_item_id,
            title=title,
            variant_title=variant_title,
            quantity=quantity,
            price=Decimal(price),
        )

    return _make


@pytest.fixture
def make_refund():
    def _make(*amounts: str) -> Refund:
        return Refund(transactions=tuple(Transaction(amount=Decimal(a)) for a in amounts))

    return _make


@pytest.fixture
def fake_session():
    """Construye una FakeSession a partir de una lista de respuestas."""
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
