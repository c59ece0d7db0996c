"""
Base Shopify REST client with common functionality.

This module provides the foundation for all Shopify Admin REST clients,
including session management, authentication headers, retries with
backoff on throttling, and a deadline per outbound call.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp
from aiohttp import ClientTimeout
from yarl import URL

from shop_metrics.core.config import ShopifyConfig
from shop_metrics.utils.error_handler import ErrorCode, RateLimitException, ShopifyAPIException
from shop_metrics.utils.retry_handler import RetryHandler, create_shopify_retry_handler
from shop_metrics.utils.shopify_utils import parse_link_header

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 500


@dataclass
class ShopifyResponse:
    """Decoded JSON body plus the response headers."""

    data: Dict[str, Any]
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def links(self) -> Dict[str, str]:
        """Relations parsed from the ``Link`` header."""
        header = self.headers.get("Link") or self.headers.get("link")
        return parse_link_header(header)


class BaseShopifyRestClient:
    """
    Base client for Shopify Admin REST API operations.

    Provides connection management, error translation and retry handling
    that all specialized clients inherit.
    """

    def __init__(
        self,
        config: ShopifyConfig,
        session: Optional[aiohttp.ClientSession] = None,
        retry_handler: Optional[RetryHandler] = None,
    ):
        """
        Initialize the base Shopify REST client.

        Args:
            config: Store URL, API version, token and limits
            session: Existing HTTP session to reuse (not closed by this client)
            retry_handler: Retry handler; built from ``config`` when omitted
        """
        self.config = config
        self.session = session
        self.retry_handler = retry_handler or create_shopify_retry_handler(config)
        self._owns_session = False

        logger.debug(f"Initialized Shopify REST client for {self.config.shop_url}")

    async def initialize(self):
        """Create the HTTP session if none was injected."""
        if self.session is None:
            timeout = ClientTimeout(total=self.config.request_timeout, connect=10)
            connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)

            self.session = aiohttp.ClientSession(timeout=timeout, connector=connector)
            self._owns_session = True
            logger.info(f"✅ Shopify REST session opened for {self.config.shop_url}")

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session and self._owns_session:
            await self.session.close()
            logger.info("Shopify REST session closed")
        self.session = None
        self._owns_session = False

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> ShopifyResponse:
        """
        Issue a GET request with retries.

        Args:
            url: Absolute resource URL
            params: Query parameters; ``None`` sends the URL exactly as given

        Returns:
            ShopifyResponse: Decoded body and headers

        Raises:
            ShopifyAPIException: If the request fails after retries
        """
        if not self.session:
            raise ShopifyAPIException("Client not initialized. Call initialize() first.", endpoint=url)

        return await self.retry_handler.execute(self._send_get, url, params, context={"url": url})

    async def _send_get(self, url: str, params: Optional[Dict[str, Any]]) -> ShopifyResponse:
        """Single GET attempt, translating failures into ShopifyAPIException."""
        # encoded=True keeps Shopify's page_info cursor byte-for-byte
        target = URL(url, encoded=True) if params is None else url

        try:
            async with self.session.get(target, params=params, headers=self.config.headers()) as response:
                if response.status == 429:
                    retry_after = _parse_retry_after(response.headers.get("Retry-After"))
                    logger.warning(f"Rate limit exceeded on {url}, retry after {retry_after}s")
                    raise RateLimitException(
                        f"Shopify rate limit exceeded for {url}",
                        endpoint=url,
                        retry_after=retry_after,
                    )

                if response.status >= 400:
                    body = await response.text()
                    logger.error(f"Shopify HTTP {response.status} on {url}: {body[:_ERROR_BODY_LIMIT]}")
                    raise ShopifyAPIException(
                        f"HTTP {response.status} from Shopify",
                        api_response_code=response.status,
                        endpoint=url,
                        details={"body": body[:_ERROR_BODY_LIMIT]},
                    )

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise ShopifyAPIException(
                        f"Invalid JSON body from Shopify: {e}",
                        api_response_code=response.status,
                        endpoint=url,
                        is_retryable=False,
                    ) from e

                return ShopifyResponse(data=data or {}, headers=response.headers)

        except aiohttp.ClientError as e:
            raise ShopifyAPIException(
                f"Network error: {str(e)}",
                endpoint=url,
                error_code=ErrorCode.SHOPIFY_CONNECTION_FAILED,
            ) from e

    def __str__(self):
        return f"{self.__class__.__name__}(shop={self.config.shop_url}, api_version={self.config.api_version})"

    def __repr__(self):
        return (
            f"{self.__class__.__name__}("
            f"shop_url='{self.config.shop_url}', "
            f"api_version='{self.config.api_version}', "
            f"initialized={self.session is not None})"
        )


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None
