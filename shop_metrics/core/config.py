"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación usando Pydantic Settings para validación automática,
y expone ShopifyConfig, el valor explícito que reciben los clientes
y los agregadores de reportes.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Shop Metrics"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    ENABLE_DOCS: bool = Field(default=True)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === CONFIGURACIÓN DE SHOPIFY ===
    SHOPIFY_SHOP_URL: str = Field(default="your-shop.myshopify.com")
    SHOPIFY_ACCESS_TOKEN: str = Field(default="")
    SHOPIFY_API_VERSION: str = Field(default="2025-04")
    SHOPIFY_MAX_RETRIES: int = Field(default=3)
    # Deadline por llamada saliente, en segundos
    SHOPIFY_REQUEST_TIMEOUT: float = Field(default=30.0)
    SHOPIFY_MAX_CONCURRENT_REQUESTS: int = Field(default=4)

    # === CONFIGURACIÓN DE REPORTES ===
    ORDERS_PAGE_SIZE: int = Field(default=250)
    INVENTORY_BATCH_SIZE: int = Field(default=100)

    # === CONFIGURACIÓN DE RETRIES ===
    RETRY_DELAY_SECONDS: float = Field(default=1.0)
    RETRY_BACKOFF_FACTOR: float = Field(default=2.0)
    RETRY_MAX_DELAY_SECONDS: float = Field(default=30.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @field_validator("ORDERS_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Shopify acepta como máximo 250 registros por página."""
        if not 1 <= v <= 250:
            raise ValueError("ORDERS_PAGE_SIZE debe estar entre 1 y 250")
        return v

    @field_validator("INVENTORY_BATCH_SIZE")
    @classmethod
    def validate_inventory_batch_size(cls, v):
        """Shopify rechaza listas de más de 100 ids en inventory_items."""
        if not 1 <= v <= 100:
            raise ValueError("INVENTORY_BATCH_SIZE debe estar entre 1 y 100")
        return v

    @field_validator("SHOPIFY_MAX_CONCURRENT_REQUESTS", "SHOPIFY_MAX_RETRIES")
    @classmethod
    def validate_positive(cls, v):
        """Valida que el valor sea al menos 1."""
        if v < 1:
            raise ValueError("El valor debe ser mayor o igual a 1")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        """Verifica si está en entorno de desarrollo."""
        return self.ENVIRONMENT == "development"


@dataclass(frozen=True)
class ShopifyConfig:
    """
    Immutable connection settings for the Shopify Admin REST API.

    Passed explicitly into every client and report function so callers
    (and tests) control which store is queried.
    """

    shop_url: str
    access_token: str
    api_version: str = "2025-04"
    request_timeout: float = 30.0
    max_retries: int = 3
    max_concurrency: int = 4
    page_size: int = 250
    inventory_batch_size: int = 100
    retry_base_delay: float = 1.0
    retry_backoff_factor: float = 2.0
    retry_max_delay: float = 30.0
    user_agent: str = "Shop-Metrics/0.1.0"

    def __post_init__(self) -> None:
        if not self.shop_url.startswith(("http://", "https://")):
            object.__setattr__(self, "shop_url", f"https://{self.shop_url}")
        object.__setattr__(self, "shop_url", self.shop_url.rstrip("/"))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ShopifyConfig":
        """Build the value from application settings."""
        settings = settings or get_settings()
        return cls(
            shop_url=settings.SHOPIFY_SHOP_URL,
            access_token=settings.SHOPIFY_ACCESS_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
            request_timeout=settings.SHOPIFY_REQUEST_TIMEOUT,
            max_retries=settings.SHOPIFY_MAX_RETRIES,
            max_concurrency=settings.SHOPIFY_MAX_CONCURRENT_REQUESTS,
            page_size=settings.ORDERS_PAGE_SIZE,
            inventory_batch_size=settings.INVENTORY_BATCH_SIZE,
            retry_base_delay=settings.RETRY_DELAY_SECONDS,
            retry_backoff_factor=settings.RETRY_BACKOFF_FACTOR,
            retry_max_delay=settings.RETRY_MAX_DELAY_SECONDS,
            user_agent=f"{settings.APP_NAME.replace(' ', '-')}/{settings.APP_VERSION}",
        )

    @property
    def base_url(self) -> str:
        """Admin REST base URL, e.g. https://shop.myshopify.com/admin/api/2025-04"""
        return f"{self.shop_url}/admin/api/{self.api_version}"

    def resource_url(self, path: str) -> str:
        """Absolute URL for a resource path such as ``orders.json``."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> Dict[str, str]:
        """Authentication headers sent with every request."""
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def validate_required_settings(settings: Optional[Settings] = None) -> bool:
    """
    Valida que las credenciales de Shopify estén presentes.

    Returns:
        bool: True si todas las configuraciones están presentes

    Raises:
        ValueError: Si alguna configuración requerida falta
    """
    settings = settings or get_settings()

    required_fields = ["SHOPIFY_SHOP_URL", "SHOPIFY_ACCESS_TOKEN", "SHOPIFY_API_VERSION"]

    missing_fields = []
    for field in required_fields:
        value = getattr(settings, field, None)
        if not value or (isinstance(value, str) and not value.strip()):
            missing_fields.append(field)

    if missing_fields:
        raise ValueError(f"Configuraciones requeridas faltantes: {missing_fields}")

    return True
