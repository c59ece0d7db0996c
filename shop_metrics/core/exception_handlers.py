"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Este módulo define los manejadores de excepciones personalizados y globales.
Los errores fatales de reportes se devuelven con un mensaje genérico:
el detalle remoto de Shopify solo queda en el log.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shop_metrics.core.config import get_settings
from shop_metrics.utils.error_handler import (
    AppException,
    ReportGenerationException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def _error_body(request: Request, message: str, **extra) -> dict:
    return {
        "error": message,
        **extra,
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def report_exception_handler(request: Request, exc: ReportGenerationException) -> JSONResponse:
    """
    Manejador para fallas fatales al generar un reporte.

    Args:
        request: Request de FastAPI
        exc: Excepción de reporte

    Returns:
        JSONResponse: Error genérico sin datos parciales
    """
    logger.error(
        f"Report Exception: {exc.report} - "
        f"Cause: {exc.details.get('cause')} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.message, error_code=exc.error_code.value),
    )


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Manejador para errores de validación de datos.

    Args:
        request: Request de FastAPI
        exc: Excepción de validación

    Returns:
        JSONResponse: Respuesta JSON con detalles de validación
    """
    logger.warning(
        f"Validation Exception: {exc.message} - "
        f"Field: {exc.field} - "
        f"Value: {exc.invalid_value} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=422,
        content=_error_body(
            request,
            exc.message,
            error_code=exc.error_code.value,
            field=exc.field,
            expected_format=exc.expected_format,
        ),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para el resto de excepciones de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    logger.error(f"App Exception: {exc.message} - Code: {exc.error_code} - URL: {request.url} - Details: {exc.details}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            request,
            exc.message,
            error_code=exc.error_code.value,
            details=exc.details if get_settings().DEBUG else None,
        ),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    logger.error(f"Unhandled Exception: {type(exc).__name__}: {exc} - URL: {request.url}", exc_info=exc)

    # Respuesta genérica (sin exponer detalles internos)
    error_message = "Internal server error occurred"
    if get_settings().DEBUG:
        error_message = f"{type(exc).__name__}: {str(exc)}"

    return JSONResponse(status_code=500, content=_error_body(request, error_message))


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando manejadores de excepciones...")

    # Manejadores específicos (orden de especificidad)
    app.add_exception_handler(ReportGenerationException, report_exception_handler)
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    # Manejador global (debe ser el último)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("✅ Manejadores de excepciones configurados correctamente")
