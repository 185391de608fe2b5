"""Primitivas de render HTML.

Por qué existe:
- Es la pieza "base" sobre la que se construyen los helpers de formulario:
  convierte una descripción de elemento (nombre + atributos + contenido) en
  markup.
- Usa `markupsafe.Markup` (el mismo tipo que Jinja2) para distinguir texto
  seguro de texto que debe escaparse.

Nota:
- El orden de los atributos es el orden de inserción del dict. Los tests
  dependen de ello.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from markupsafe import Markup, escape


BOOLEAN_ATTRIBUTES = frozenset(
    {
        "autofocus",
        "checked",
        "disabled",
        "multiple",
        "novalidate",
        "readonly",
        "required",
        "selected",
    }
)


def attribute_name(key: str) -> str:
    """`class_` -> `class`, `aria_describedby` -> `aria-describedby`."""

    return str(key).rstrip("_").replace("_", "-")


def normalize_attributes(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Copia las opciones renombrando `class_` a `class` sin alterar el orden."""

    if not options:
        return {}
    return {("class" if key == "class_" else key): value for key, value in options.items()}


def tag_options(attrs: Mapping[str, Any] | None) -> str:
    if not attrs:
        return ""

    parts: list[str] = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        name = attribute_name(key)
        if name in BOOLEAN_ATTRIBUTES or value is True:
            parts.append(f'{name}="{name}"')
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value if v not in (None, ""))
        parts.append(f'{name}="{escape(value)}"')

    if not parts:
        return ""
    return " " + " ".join(parts)


def tag(name: str, attrs: Mapping[str, Any] | None = None) -> Markup:
    """Elemento vacío (`<input ... />`)."""

    return Markup(f"<{name}{tag_options(attrs)} />")


def content_tag(name: str, content: Any = None, attrs: Mapping[str, Any] | None = None) -> Markup:
    """Elemento con contenido. El texto plano se escapa; `Markup` se respeta."""

    body = escape(content) if content is not None else Markup("")
    return Markup(f"<{name}{tag_options(attrs)}>{body}</{name}>")


def _flatten(items: Iterable[Any]) -> Iterable[Any]:
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        elif item is not None:
            yield item


def safe_join(items: Iterable[Any], separator: str = "") -> Markup:
    return Markup(escape(separator)).join(_flatten(items))
