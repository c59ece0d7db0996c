"""
Shop Metrics - FastAPI Application Entry Point

API de reportes para una tienda Shopify: resumen financiero, márgenes
por variante y ventas por tag de producto sobre un rango de fechas.
"""

import logging

import uvicorn
from fastapi import FastAPI

from shop_metrics.core.config import get_settings
from shop_metrics.core.exception_handlers import configure_exception_handlers
from shop_metrics.core.lifespan import lifespan
from shop_metrics.core.routers import configure_all_routers

settings = get_settings()
logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    logger.info("🏗️ Creando aplicación FastAPI...")

    docs_enabled = settings.DEBUG or settings.ENABLE_DOCS
    app = FastAPI(
        title=settings.APP_NAME,
        description="Reportes de ventas de una tienda Shopify",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # 1. Manejadores de excepciones
    configure_exception_handlers(app)

    # 2. Routers y endpoints
    configure_all_routers(app)

    logger.info("✅ Aplicación FastAPI creada y configurada")
    return app


app = create_application()


if __name__ == "__main__":
    """
    Ejecutar la aplicación directamente para desarrollo.

    Para producción:
    uvicorn shop_metrics.main:app --host 0.0.0.0 --port 8080
    """
    logger.info("🚀 Iniciando aplicación desde main.py...")

    uvicorn.run(
        "shop_metrics.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
