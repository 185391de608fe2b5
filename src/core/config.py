"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El traductor y la vista previa leen idioma y rutas de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "govuk-forms"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "govuk-forms"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "govuk-forms"
    return Path.home() / ".config" / "govuk-forms"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# govuk-forms user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars).
    - Un único contrato de configuración para traductor, plantillas y CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="GOVUK_FORMS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma con el que se resuelven etiquetas, pistas y errores.",
    )
    fallback_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma usado cuando una clave no existe en el idioma activo.",
    )
    locale_paths: list[Path] = Field(
        default_factory=list,
        description="Ficheros YAML o directorios con traducciones adicionales (se aplican en orden).",
    )
    templates_dir: Path | None = Field(
        default=None,
        description="Directorio de plantillas Jinja2 que sustituye al de la vista previa.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging para la CLI.",
    )
