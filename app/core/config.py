"""
Configuración centralizada del cliente.

Este módulo maneja todas las variables de entorno y configuraciones
del cliente usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from app.version import VERSION


class Settings(BaseSettings):
    """
    Configuración del cliente usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA ===
    APP_NAME: str = "Poynt-Orders-Client"
    APP_VERSION: str = VERSION
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # === CONFIGURACIÓN DE POYNT ===
    POYNT_API_URL: str = Field(default="https://services.poynt.net")
    POYNT_API_VERSION: str = Field(default="1.2")
    POYNT_ACCESS_TOKEN: Optional[str] = Field(default=None)
    POYNT_REQUEST_TIMEOUT: int = Field(default=30)
    POYNT_CONNECT_TIMEOUT: int = Field(default=10)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("POYNT_API_URL")
    @classmethod
    def validate_poynt_url(cls, v):
        """Normaliza la URL base de Poynt (esquema y barra final)."""
        v = v.strip()
        if not v:
            raise ValueError("POYNT_API_URL no puede estar vacío")
        if not v.startswith("https://") and not v.startswith("http://"):
            v = f"https://{v}"
        return v.rstrip("/")

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

    @field_validator("POYNT_REQUEST_TIMEOUT", "POYNT_CONNECT_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v):
        """Valida que los timeouts sean positivos."""
        if v <= 0:
            raise ValueError("Los timeouts deben ser mayores que 0")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    def get_poynt_headers(self) -> dict:
        """
        Obtiene headers estáticos para requests a Poynt.

        Returns:
            dict: Headers de versión y autenticación
        """
        headers = {
            "api-version": self.POYNT_API_VERSION,
            "Content-Type": "application/json",
            "User-Agent": f"{self.APP_NAME}/{self.APP_VERSION}",
        }
        if self.POYNT_ACCESS_TOKEN:
            headers["Authorization"] = f"Bearer {self.POYNT_ACCESS_TOKEN}"
        return headers


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
