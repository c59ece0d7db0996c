"""
API endpoints para los reportes de ventas de la tienda.

Cada endpoint recibe un rango de fechas (from/to, YYYY-MM-DD) y devuelve
el reporte correspondiente como JSON.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from shop_metrics.core.config import ShopifyConfig, get_settings
from shop_metrics.domain.value_objects import DateRange
from shop_metrics.services.reports import (
    get_collection_stats,
    get_dashboard_report,
    get_financial_summary,
    get_product_stats,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_shopify_config() -> ShopifyConfig:
    """Dependencia: configuración de Shopify construida desde Settings."""
    return ShopifyConfig.from_settings(get_settings())


def get_date_range(
    from_date: str = Query(..., alias="from", description="Fecha inicial (YYYY-MM-DD)"),
    to_date: str = Query(..., alias="to", description="Fecha final inclusiva (YYYY-MM-DD)"),
) -> DateRange:
    """Dependencia: valida y construye el rango de fechas."""
    return DateRange.parse(from_date, to_date)


@router.get("/orders", summary="Resumen financiero")
async def orders_report(
    date_range: DateRange = Depends(get_date_range),
    config: ShopifyConfig = Depends(get_shopify_config),
) -> Dict[str, Any]:
    """
    Totales de ventas, devoluciones, envío, impuestos, aranceles y propinas.

    Returns:
        Resumen con totalOrders, totalSales, avgOrderValue y los totales individuales
    """
    logger.info(f"📊 Reporte de órdenes {date_range.start} → {date_range.end}")
    return await get_financial_summary(date_range, config)


@router.get("/products", summary="Margen por variante")
async def products_report(
    date_range: DateRange = Depends(get_date_range),
    config: ShopifyConfig = Depends(get_shopify_config),
) -> Dict[str, Any]:
    """
    Unidades vendidas, costo unitario y margen por variante.

    Returns:
        {"products": [...]}
    """
    logger.info(f"📦 Reporte de productos {date_range.start} → {date_range.end}")
    return await get_product_stats(date_range, config)


@router.get("/collections", summary="Ventas por tag")
async def collections_report(
    date_range: DateRange = Depends(get_date_range),
    config: ShopifyConfig = Depends(get_shopify_config),
) -> Dict[str, Any]:
    """
    Unidades e ingresos por tag de producto.

    Returns:
        {"collections": [...]}
    """
    logger.info(f"🗂️ Reporte de colecciones {date_range.start} → {date_range.end}")
    return await get_collection_stats(date_range, config)


@router.get("/dashboard", summary="Los tres reportes")
async def dashboard_report(
    date_range: DateRange = Depends(get_date_range),
    config: ShopifyConfig = Depends(get_shopify_config),
) -> Dict[str, Any]:
    """
    Resumen, productos y colecciones en una sola llamada.

    Returns:
        {"summary": {...}, "products": [...], "collections": [...]}
    """
    logger.info(f"📈 Reporte completo {date_range.start} → {date_range.end}")
    return await get_dashboard_report(date_range, config)
