"""
Cursor-based pagination over Shopify REST collections.

Shopify links pages through the ``Link`` response header. Only the first
request carries the caller's query parameters; every following request
uses the ``next`` URL verbatim because it already encodes the cursor.
"""

import logging
from typing import Any, Dict, List

from .base_client import BaseShopifyRestClient

logger = logging.getLogger(__name__)


class PaginatedFetcher:
    """
    Walks a cursor-linked result set until no ``next`` relation remains.
    """

    def __init__(self, client: BaseShopifyRestClient):
        """
        Args:
            client: Initialized REST client used for every page request
        """
        self.client = client

    async def fetch_all(self, url: str, params: Dict[str, Any], collection_key: str) -> List[Dict[str, Any]]:
        """
        Fetch every page and concatenate the records in arrival order.

        Args:
            url: Resource URL of the first page
            params: Query parameters for the first page only
            collection_key: Key of the record array in each body (e.g. "orders")

        Returns:
            List of raw records across all pages

        Raises:
            ShopifyAPIException: If any page request fails; no partial result is returned
        """
        records: List[Dict[str, Any]] = []
        next_url = url
        next_params = dict(params)
        seen_urls = set()
        pages = 0

        logger.info(f"🔄 Fetching {collection_key} from {url} with {params}")

        while next_url:
            seen_urls.add(next_url)
            response = await self.client.get(next_url, params=next_params)
            pages += 1

            page_records = response.data.get(collection_key) or []
            records.extend(page_records)
            logger.debug(f"Page {pages}: {len(page_records)} {collection_key}")

            next_url = response.links.get("next")
            next_params = None

            if next_url in seen_urls:
                logger.warning(f"Pagination cursor repeated on page {pages}, stopping: {next_url}")
                break

        logger.info(f"✅ Fetched {len(records)} {collection_key} in {pages} page(s)")
        return records
