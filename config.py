"""
Configuración de la calculadora científica.

Los valores se leen de variables de entorno con prefijo ``CALC_`` o de un
archivo ``.env``; sin ellos se usan los valores por defecto.
"""

import logging
from typing import Literal

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ajustes de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="CALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Calculadora Científica"
    log_level: str = "WARNING"

    # Proveedor numérico del evaluador
    numeric_backend: Literal["mpmath", "python"] = "mpmath"
    angle_mode: Literal["rad", "deg"] = "rad"

    # Ventana
    window_geometry: str = "420x640"


def configure_logging(level: str) -> None:
    """Configura structlog para emitir solo a partir de ``level``."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Nivel de log desconocido: {level}")

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )


# Instancia global de ajustes
settings = Settings()
