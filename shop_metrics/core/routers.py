"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo registra los endpoints base (raíz, ping, health) y los
routers de la API v1.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI

from shop_metrics.api.v1.endpoints.reports import router as reports_router
from shop_metrics.core.config import get_settings

logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.

        Returns:
            Dict con información de la API
        """
        return {
            "message": settings.APP_NAME,
            "description": "Reportes de ventas, márgenes y colecciones de una tienda Shopify",
            "version": settings.APP_VERSION,
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "orders": "/api/v1/reports/orders",
                "products": "/api/v1/reports/products",
                "collections": "/api/v1/reports/collections",
                "dashboard": "/api/v1/reports/dashboard",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        """
        Endpoint simple para verificar que la API responde.

        Returns:
            Dict con pong y timestamp
        """
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea el endpoint de health check.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check():
        """
        Health check liviano: no contacta a Shopify.

        Returns:
            Dict con estado y versión
        """
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "shopify_configured": bool(settings.SHOPIFY_ACCESS_TOKEN),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la API v1.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers de API v1...")

    app.include_router(
        reports_router,
        prefix="/api/v1",
        responses={
            422: {"description": "Invalid date range"},
            500: {"description": "Report generation error"},
            503: {"description": "Shopify unavailable or rate limited"},
        },
    )
    logger.info("✅ Router de reportes configurado")


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers y endpoints de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    create_root_endpoints(app)
    create_health_endpoints(app)
    configure_api_v1_routers(app)
