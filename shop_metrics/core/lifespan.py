"""
Gestión del ciclo de vida de la aplicación FastAPI.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shop_metrics.core.config import get_settings, validate_required_settings
from shop_metrics.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    # === STARTUP ===
    setup_logging(settings)
    logger.info(f"🚀 Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    try:
        validate_required_settings(settings)
        logger.info("✅ Configuración de Shopify verificada")
    except ValueError as e:
        # En producción no tiene sentido levantar sin credenciales
        if settings.is_production:
            logger.error(f"❌ {e}")
            raise
        logger.warning(f"⚠️ {e} - los reportes fallarán hasta configurarlas")

    yield

    # === SHUTDOWN ===
    logger.info(f"👋 {settings.APP_NAME} cerrado correctamente")
