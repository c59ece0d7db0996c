"""
Módulo de acceso a datos remotos para Shop Metrics.

Toda la información proviene de la API REST de Shopify; no hay
persistencia local.
"""

from shop_metrics.db.shopify_clients import ShopifyRestClient

__all__ = ["ShopifyRestClient"]
