"""
Reportes de ventas, margen y colecciones.

Cada reporte obtiene la colección completa de órdenes del rango y luego
ejecuta su propia fase de enriquecimiento y reducción.
"""

from .report_service import (
    get_collection_stats,
    get_dashboard_report,
    get_financial_summary,
    get_product_stats,
)

__all__ = [
    "get_financial_summary",
    "get_product_stats",
    "get_collection_stats",
    "get_dashboard_report",
]
