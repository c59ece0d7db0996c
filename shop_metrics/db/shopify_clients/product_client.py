"""
Product client for the Shopify REST API.
"""

import logging

from shop_metrics.domain.models import Product

from .base_client import BaseShopifyRestClient

logger = logging.getLogger(__name__)


class ShopifyProductClient(BaseShopifyRestClient):
    """
    Specialized client for ``products/{id}.json``.
    """

    async def get_product(self, product_id: int) -> Product:
        """
        Fetch one product and its tags.

        Args:
            product_id: Shopify product ID

        Returns:
            Product: The product; a body without a product yields no tags

        Raises:
            ShopifyAPIException: If the request fails after retries
        """
        response = await self.get(self.config.resource_url(f"products/{product_id}.json"))
        product_data = response.data.get("product") or {}

        if not product_data:
            logger.debug(f"Product {product_id} returned an empty body")
            return Product(id=product_id)

        product = Product.from_shopify(product_data)
        if product.id is None:
            product = Product(id=product_id, tags=product.tags)
        return product
