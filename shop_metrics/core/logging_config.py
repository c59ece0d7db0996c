"""
Configuración del sistema de logging.

Consola con colores en modo debug, y archivos rotativos (general y
errores) cuando LOG_FILE_PATH está configurado.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from shop_metrics.core.config import Settings, get_settings


class ColoredFormatter(logging.Formatter):
    """
    Formatter personalizado que agrega colores a los logs en consola.
    """

    # Códigos de color ANSI
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Verde
        "WARNING": "\033[33m",  # Amarillo
        "ERROR": "\033[31m",  # Rojo
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, fmt=None, datefmt=None, use_color=False):
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record):
        """
        Formatea el record con colores si el stream del handler es una terminal.

        Args:
            record: LogRecord a formatear

        Returns:
            str: Mensaje formateado con colores
        """
        formatted = super().format(record)

        if self.use_color:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]

            # Colorear solo el nivel de log
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}")

        return formatted


def _stream_isatty(stream: str) -> bool:
    """Indica si el destino ext://sys.* de la consola es una terminal."""
    if not stream.startswith("ext://sys."):
        return False
    target = getattr(sys, stream[len("ext://sys.") :], None)
    return bool(target is not None and hasattr(target, "isatty") and target.isatty())


def get_logging_configuration(
    settings: Optional[Settings] = None, stream: str = "ext://sys.stdout"
) -> Dict[str, Any]:
    """
    Genera la configuración de logging para dictConfig.

    Args:
        settings: Configuración a usar (por defecto get_settings())
        stream: Destino de la consola (stdout para el servidor, stderr para la CLI)

    Returns:
        Dict: Configuración de logging
    """
    settings = settings or get_settings()

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_color": _stream_isatty(stream),
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "colored" if settings.DEBUG else "standard",
                "stream": stream,
            }
        },
        "loggers": {
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": ["console"]},
    }

    if settings.LOG_FILE_PATH:
        max_bytes = settings.LOG_MAX_SIZE_MB * 1024 * 1024

        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": max_bytes,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        # Handler de errores separado
        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH.replace(".log", "_errors.log"),
            "maxBytes": max_bytes,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        config["root"]["handlers"].extend(["file", "error_file"])

    return config


def setup_logging(settings: Optional[Settings] = None, stream: str = "ext://sys.stdout") -> None:
    """
    Configura el sistema de logging completo de la aplicación.
    """
    settings = settings or get_settings()

    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(settings, stream))

    # Reducir verbosidad de librerías externas
    for logger_name in ["aiohttp.access", "aiohttp.client", "httpx"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Sistema de logging configurado - Nivel: {settings.LOG_LEVEL}")
    if settings.LOG_FILE_PATH:
        logger.info(f"Logs guardándose en: {settings.LOG_FILE_PATH}")
