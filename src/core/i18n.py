"""Traducciones (lookup por scope + clave con default).

Por qué un módulo propio:
- Los helpers de formulario necesitan resolver etiquetas, pistas, leyendas y
  mensajes de error por `scope.modelo.atributo` con un valor por defecto.
- Los textos viven en YAML (`{locale: {claves anidadas}}`) para que equipos de
  contenido puedan editarlos sin tocar código.

Orden de carga:
1) `core/locales/*.yml` (mensajes de error por defecto)
2) `AppSettings.locale_paths`
3) `load_path` del constructor
Los ficheros posteriores se fusionan en profundidad sobre los anteriores.
"""

from __future__ import annotations

import copy
import logging
import re
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

import yaml

from core.config import AppSettings
from core.domain.errors import TranslationError
from core.domain.language import Language, locale_code


logger = logging.getLogger(__name__)

_LOCALES_DIR = Path(__file__).resolve().parent / "locales"
_INTERPOLATION = re.compile(r"%\{(\w+)\}")


def _yaml_key(key: Any) -> str:
    """PyYAML lee `yes:`/`no:` sin comillas como booleanos; se devuelven a texto."""

    if key is True:
        return "yes"
    if key is False:
        return "no"
    return str(key)


def _deep_merge(target: dict[str, Any], data: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in data.items():
        key = _yaml_key(key)
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        elif isinstance(value, Mapping):
            target[key] = _deep_merge({}, value)
        else:
            target[key] = value
    return target


def _expand_paths(paths: Iterable[Path | str]) -> list[Path]:
    out: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            out.extend(sorted(path.glob("*.yml")) + sorted(path.glob("*.yaml")))
        else:
            out.append(path)
    return out


def interpolate(text: str, values: Mapping[str, Any]) -> str:
    """Sustituye `%{nombre}`; los huecos sin valor se dejan tal cual."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        logger.debug("Missing interpolation value %r in %r", name, text)
        return match.group(0)

    return _INTERPOLATION.sub(_replace, text)


class Translator:
    """Almacén de traducciones en memoria con fallback de idioma."""

    def __init__(
        self,
        language: Language | str = Language.ENGLISH,
        *,
        fallback: Language | str | None = Language.ENGLISH,
        load_path: Sequence[Path | str] = (),
    ) -> None:
        self.locale = locale_code(language)
        self.fallback = locale_code(fallback) if fallback is not None else None
        self._store: dict[str, dict[str, Any]] = {}
        self.loaded_files: list[Path] = []

        for path in _expand_paths([_LOCALES_DIR, *load_path]):
            self.load_file(path)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        load_path: Sequence[Path | str] = (),
    ) -> "Translator":
        settings = settings or AppSettings()
        return cls(
            settings.default_language,
            fallback=settings.fallback_language,
            load_path=[*settings.locale_paths, *load_path],
        )

    def load_file(self, path: Path | str) -> None:
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise TranslationError(f"invalid YAML ({exc})", path=str(path)) from exc

        if data is None:
            return
        if not isinstance(data, Mapping):
            raise TranslationError("root must be a mapping of locale -> translations", path=str(path))

        for locale, tree in data.items():
            if not isinstance(tree, Mapping):
                raise TranslationError(f"translations for {locale!r} must be a mapping", path=str(path))
            self.store_translations(str(locale), tree)

        self.loaded_files.append(path)
        logger.debug("Loaded translations from %s", path)

    def store_translations(self, locale: Language | str, data: Mapping[str, Any]) -> None:
        tree = self._store.setdefault(locale_code(locale), {})
        _deep_merge(tree, data)

    def available_locales(self) -> list[str]:
        return sorted(self._store)

    def keys(self, locale: Language | str | None = None) -> list[str]:
        """Claves hoja (con puntos) de un idioma, ordenadas."""

        out: list[str] = []

        def _walk(prefix: str, node: Mapping[str, Any]) -> None:
            for key, value in node.items():
                path = f"{prefix}.{key}" if prefix else str(key)
                if isinstance(value, Mapping):
                    _walk(path, value)
                else:
                    out.append(path)

        _walk("", self._store.get(locale_code(locale or self.locale), {}))
        return sorted(out)

    def lookup(
        self,
        key: str,
        *,
        scope: str | None = None,
        locale: Language | str | None = None,
    ) -> Any:
        """Valor crudo (hoja o rama) o `None` si no existe."""

        full_key = f"{scope}.{key}" if scope else str(key)
        node: Any = self._store.get(locale_code(locale or self.locale))
        for part in full_key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def _resolve_leaf(self, key: str, scope: str | None, locale: str) -> str | None:
        locales = [locale]
        if self.fallback and self.fallback != locale:
            locales.append(self.fallback)

        for candidate in locales:
            value = self.lookup(key, scope=scope, locale=candidate)
            if value is None:
                continue
            if isinstance(value, Mapping):
                logger.debug("Translation %s.%s is a namespace, not a string", scope or "", key)
                return None
            return str(value)
        return None

    def exists(
        self,
        key: str,
        *,
        scope: str | None = None,
        locale: Language | str | None = None,
    ) -> bool:
        return self._resolve_leaf(key, scope, locale_code(locale or self.locale)) is not None

    def translate(
        self,
        key: str,
        *,
        scope: str | None = None,
        default: str | None = None,
        fallbacks: Sequence[str] = (),
        locale: Language | str | None = None,
        **values: Any,
    ) -> str | None:
        """Resuelve una clave.

        Orden: `scope.key`, cada clave de `fallbacks` (absolutas), `default`.
        Devuelve `None` si nada resuelve y no hay `default`.
        """

        active = locale_code(locale or self.locale)
        result = self._resolve_leaf(key, scope, active)
        if result is None:
            for fallback_key in fallbacks:
                result = self._resolve_leaf(fallback_key, None, active)
                if result is not None:
                    break
        if result is None:
            if default is None:
                logger.debug("Missing translation [%s] %s%s", active, f"{scope}." if scope else "", key)
                return None
            result = default
        return interpolate(result, values) if values else result

    @contextmanager
    def override(self, locale: Language | str, data: Mapping[str, Any]) -> Iterator["Translator"]:
        """Sustituye por completo el árbol de un idioma y lo restaura al salir."""

        code = locale_code(locale)
        saved = copy.deepcopy(self._store.get(code))
        self._store[code] = _deep_merge({}, data)
        try:
            yield self
        finally:
            if saved is None:
                self._store.pop(code, None)
            else:
                self._store[code] = saved


@lru_cache(maxsize=1)
def get_translator() -> Translator:
    """Traductor de proceso construido desde `AppSettings`."""

    return Translator.from_settings()
