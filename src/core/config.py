"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/codec) lean config de forma consistente.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTFUL_OBJECTS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://api.restful-api.dev",
        min_length=8,
        description="Base URL del API REST (sin la ruta de la colección).",
    )
    objects_route: str = Field(
        default="objects",
        min_length=1,
        description="Ruta de la colección de recursos.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="restful-objects/0.1",
        min_length=1,
        description="User-Agent para las peticiones.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("objects_route")
    @classmethod
    def _strip_route_slashes(cls, value: str) -> str:
        return value.strip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
