"""Tests unitarios para las utilidades de Shopify."""

from decimal import Decimal

from shop_metrics.utils.shopify_utils import parse_link_header, split_tags, to_decimal, to_int


class TestParseLinkHeader:
    """Tests para parse_link_header."""

    def test_next_only(self):
        """Debe extraer la relación next."""
        header = '<https://shop.myshopify.com/admin/api/2025-04/orders.json?limit=250&page_info=abc>; rel="next"'

        links = parse_link_header(header)

        assert links == {"next": "https://shop.myshopify.com/admin/api/2025-04/orders.json?limit=250&page_info=abc"}

    def test_previous_and_next(self):
        """Debe distinguir previous y next en el mismo header."""
        header = '<https://s/orders.json?page_info=prev>; rel="previous", <https://s/orders.json?page_info=nxt>; rel="next"'

        links = parse_link_header(header)

        assert links["previous"] == "https://s/orders.json?page_info=prev"
        assert links["next"] == "https://s/orders.json?page_info=nxt"

    def test_previous_only_has_no_next(self):
        """La última página solo trae previous."""
        links = parse_link_header('<https://s/orders.json?page_info=prev>; rel="previous"')

        assert "next" not in links

    def test_empty_or_missing_header(self):
        """Header vacío o None no produce relaciones."""
        assert parse_link_header(None) == {}
        assert parse_link_header("") == {}

    def test_malformed_entry_without_url(self):
        """Una entrada sin URL entre <> se descarta."""
        assert parse_link_header('rel="next"') == {}
        assert parse_link_header('<>; rel="next"') == {}

    def test_unquoted_rel(self):
        """Acepta rel sin comillas."""
        assert parse_link_header("<https://s/a>; rel=next") == {"next": "https://s/a"}


class TestAmounts:
    """Tests para conversión de montos y cantidades."""

    def test_to_decimal_from_string(self):
        assert to_decimal("19.99") == Decimal("19.99")

    def test_to_decimal_absent_or_invalid(self):
        """Montos ausentes o inválidos cuentan como cero."""
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("") == Decimal("0")
        assert to_decimal("n/a") == Decimal("0")

    def test_to_int(self):
        assert to_int("3") == 3
        assert to_int(None) == 0
        assert to_int("x") == 0


class TestSplitTags:
    """Tests para split_tags."""

    def test_trims_and_drops_empty(self):
        """Debe recortar espacios y omitir tags vacíos."""
        assert split_tags(" Summer ,Sale,, ") == ["Summer", "Sale"]

    def test_deduplicates_preserving_order(self):
        assert split_tags("Sale, New, Sale") == ["Sale", "New"]

    def test_empty(self):
        assert split_tags("") == []
        assert split_tags(None) == []

    def test_non_string_means_no_tags(self):
        """Tags que no vienen como string no rompen el parseo."""
        assert split_tags(["Summer", "Sale"]) == []
        assert split_tags(42) == []
