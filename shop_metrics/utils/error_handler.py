"""
Sistema de manejo de errores personalizado.

Este módulo define todas las excepciones personalizadas de la aplicación
y proporciona utilidades para manejo consistente de errores.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Errores de conexión
    SHOPIFY_CONNECTION_FAILED = "SHOPIFY_CONNECTION_FAILED"
    SHOPIFY_API_ERROR = "SHOPIFY_API_ERROR"
    SHOPIFY_TIMEOUT = "SHOPIFY_TIMEOUT"

    # Errores de API
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Errores de reportes
    REPORT_FAILED = "REPORT_FAILED"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            status_code: Código HTTP asociado
            severity: Severidad del error
            is_retryable: Si la operación puede reintentarse
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de datos de entrada.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            expected_format: Formato esperado
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class ShopifyAPIException(AppException):
    """
    Excepción para errores de la API de Shopify.

    Solo los errores transitorios (429, 5xx, red, timeout) son reintentables;
    un 4xx distinto de 429 indica una petición inválida y falla de inmediato.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        rate_limited: bool = False,
        retry_after: Optional[float] = None,
        error_code: Optional[ErrorCode] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de Shopify API.

        Args:
            message: Mensaje de error
            api_response_code: Código de respuesta de Shopify (None para errores de red)
            endpoint: Endpoint que falló
            rate_limited: Si es por rate limiting
            retry_after: Segundos para reintentar
            error_code: Código explícito (por defecto se deriva de la respuesta)
            **kwargs: Argumentos adicionales para AppException
        """
        severity = ErrorSeverity.MEDIUM
        is_retryable = True

        if rate_limited:
            error_code = error_code or ErrorCode.RATE_LIMIT_EXCEEDED
            severity = ErrorSeverity.LOW
        elif api_response_code is not None and api_response_code >= 500:
            severity = ErrorSeverity.HIGH
        elif api_response_code is not None and api_response_code >= 400:
            is_retryable = False

        kwargs.setdefault("is_retryable", is_retryable)
        super().__init__(
            message=message,
            error_code=error_code or ErrorCode.SHOPIFY_API_ERROR,
            status_code=503,
            severity=severity,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint
        self.rate_limited = rate_limited
        self.retry_after = retry_after

        self.details.update(
            {
                "api_response_code": api_response_code,
                "endpoint": endpoint,
                "rate_limited": rate_limited,
                "retry_after": retry_after,
            }
        )


class RateLimitException(ShopifyAPIException):
    """
    Excepción para throttling de Shopify que persiste tras agotar los reintentos.
    """

    def __init__(self, message: str, endpoint: Optional[str] = None, retry_after: Optional[float] = None, **kwargs):
        super().__init__(
            message=message,
            api_response_code=429,
            endpoint=endpoint,
            rate_limited=True,
            retry_after=retry_after,
            **kwargs,
        )


class ReportGenerationException(AppException):
    """
    Excepción fatal durante la generación de un reporte.

    El mensaje es genérico y apto para el usuario final; la causa
    remota queda en ``details`` y en el log.
    """

    def __init__(self, message: str, report: str, cause: Optional[Exception] = None, **kwargs):
        """
        Inicializa la excepción de reporte.

        Args:
            message: Mensaje genérico para el usuario
            report: Nombre del reporte (orders, products, collections)
            cause: Excepción original
            **kwargs: Argumentos adicionales para AppException
        """
        status_code = 500
        if isinstance(cause, ShopifyAPIException) and cause.rate_limited:
            status_code = 503

        super().__init__(
            message=message,
            error_code=ErrorCode.REPORT_FAILED,
            status_code=status_code,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.report = report
        self.cause = cause

        self.details.update(
            {
                "report": report,
                "cause": str(cause) if cause is not None else None,
            }
        )


def log_exception(
    exc: Exception, context: Optional[Dict[str, Any]] = None, level: Optional[int] = None
) -> None:
    """
    Registra una excepción con el nivel acorde a su severidad.

    Args:
        exc: Excepción a registrar
        context: Contexto adicional para el log
        level: Nivel fijo que reemplaza al derivado de la severidad
    """
    context = context or {}

    if isinstance(exc, AppException):
        level = level or {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[exc.severity]
        logger.log(level, f"{exc} - details={exc.details} - context={context}")
    else:
        logger.error(f"Unexpected {type(exc).__name__}: {exc} - context={context}", exc_info=exc)
