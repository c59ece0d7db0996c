"""
Sistema de manejo de reintentos.

Este módulo implementa reintentos con backoff exponencial, respeto del
header Retry-After de Shopify y un deadline por intento.
"""

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from shop_metrics.core.config import ShopifyConfig
from shop_metrics.utils.error_handler import (
    AppException,
    ErrorCode,
    ShopifyAPIException,
)

logger = logging.getLogger(__name__)


class RetryPolicy:
    """
    Política de reintentos configurable.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        retry_on: Optional[List[Type[Exception]]] = None,
    ):
        """
        Inicializa la política de reintentos.

        Args:
            max_attempts: Número máximo de intentos
            base_delay: Delay base en segundos
            max_delay: Delay máximo en segundos
            exponential_base: Base para backoff exponencial
            jitter: Si agregar jitter aleatorio
            retry_on: Excepciones (no AppException) en las que reintentar
        """
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.retry_on = retry_on or []

    def should_retry(self, exception: Exception, attempt: int) -> bool:
        """
        Determina si debe reintentar la operación.

        Args:
            exception: Excepción que ocurrió
            attempt: Número de intento actual (1-based)

        Returns:
            bool: True si debe reintentar
        """
        if attempt >= self.max_attempts:
            return False

        if isinstance(exception, AppException):
            return exception.is_retryable

        return any(isinstance(exception, retry_exc) for retry_exc in self.retry_on)

    def calculate_delay(self, attempt: int, exception: Optional[Exception] = None) -> float:
        """
        Calcula el delay antes del siguiente intento.

        Args:
            attempt: Número de intento
            exception: Excepción que causó el retry (opcional)

        Returns:
            float: Segundos a esperar
        """
        # Retry-After de Shopify tiene prioridad
        if isinstance(exception, ShopifyAPIException) and exception.retry_after:
            return min(exception.retry_after, self.max_delay)

        delay = self.base_delay * (self.exponential_base ** (attempt - 1))

        if self.jitter:
            jitter_range = delay * 0.1
            delay += random.uniform(-jitter_range, jitter_range)

        delay = min(delay, self.max_delay)

        return max(delay, 0)


class RetryHandler:
    """
    Manejador de reintentos con deadline por intento.
    """

    def __init__(
        self,
        name: str,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
    ):
        """
        Inicializa el manejador de reintentos.

        Args:
            name: Nombre identificativo del handler
            retry_policy: Política de reintentos
            timeout: Deadline en segundos para cada intento (None = sin límite)
        """
        self.name = name
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout = timeout

        self.metrics = {
            "total_attempts": 0,
            "total_successes": 0,
            "total_failures": 0,
            "total_retries": 0,
        }

    async def execute(
        self,
        func: Callable[..., Awaitable[Any]],
        *args,
        context: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> Any:
        """
        Ejecuta una corrutina con reintentos.

        Args:
            func: Función async a ejecutar
            *args: Argumentos posicionales
            context: Contexto adicional para logging
            **kwargs: Argumentos con nombre

        Returns:
            Any: Resultado de la función

        Raises:
            Exception: La última excepción si todos los reintentos fallan
        """
        context = context or {}
        start_time = time.monotonic()
        last_exception: Optional[Exception] = None

        for attempt in range(1, self.retry_policy.max_attempts + 1):
            self.metrics["total_attempts"] += 1

            try:
                logger.debug(f"Executing {self.name} - Attempt {attempt}/{self.retry_policy.max_attempts} {context}")

                if self.timeout:
                    result = await asyncio.wait_for(func(*args, **kwargs), timeout=self.timeout)
                else:
                    result = await func(*args, **kwargs)

                self.metrics["total_successes"] += 1
                logger.debug(f"Successfully executed {self.name} in {time.monotonic() - start_time:.2f}s")
                return result

            except asyncio.TimeoutError:
                last_exception = ShopifyAPIException(
                    message=f"Operation {self.name} timed out after {self.timeout}s",
                    endpoint=context.get("url"),
                    error_code=ErrorCode.SHOPIFY_TIMEOUT,
                )
            except Exception as e:
                last_exception = e

            self.metrics["total_failures"] += 1

            if not self.retry_policy.should_retry(last_exception, attempt):
                if attempt < self.retry_policy.max_attempts:
                    logger.warning(
                        f"Not retrying {self.name} - {type(last_exception).__name__}: {last_exception} {context}"
                    )
                break

            delay = self.retry_policy.calculate_delay(attempt, last_exception)
            self.metrics["total_retries"] += 1

            logger.info(
                f"Retrying {self.name} in {delay:.2f}s - "
                f"Attempt {attempt + 1}/{self.retry_policy.max_attempts} - {last_exception}"
            )

            await asyncio.sleep(delay)

        logger.error(f"All retry attempts failed for {self.name}: {last_exception} {context}")

        raise last_exception  # type: ignore[misc]

    def get_metrics(self) -> Dict[str, Any]:
        """
        Obtiene métricas del handler.

        Returns:
            Dict: Métricas actuales
        """
        total = self.metrics["total_attempts"]
        success_rate = (self.metrics["total_successes"] / total * 100) if total > 0 else 0

        return {
            **self.metrics,
            "success_rate": round(success_rate, 2),
            "handler_name": self.name,
        }


def create_shopify_retry_handler(config: ShopifyConfig) -> RetryHandler:
    """
    Crea un handler específico para operaciones de Shopify.

    Args:
        config: Configuración de conexión con Shopify

    Returns:
        RetryHandler: Handler configurado para Shopify
    """
    retry_policy = RetryPolicy(
        max_attempts=config.max_retries,
        base_delay=config.retry_base_delay,
        max_delay=config.retry_max_delay,
        exponential_base=config.retry_backoff_factor,
        jitter=True,
    )

    return RetryHandler(
        name="shopify_api",
        retry_policy=retry_policy,
        timeout=config.request_timeout,
    )
