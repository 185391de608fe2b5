"""Contratos de los colaboradores del form builder.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- `core.i18n.Translator` y `core.domain.models.FieldErrors` los cumplen, pero
  cualquier objeto con la misma forma sirve.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class TranslationLookup(Protocol):
    """Resuelve textos por scope + clave con un valor por defecto."""

    def translate(
        self,
        key: str,
        *,
        scope: str | None = None,
        default: str | None = None,
        fallbacks: Sequence[str] = (),
        **values: Any,
    ) -> str | None:
        """Devuelve el texto traducido, `default` o `None`."""

        ...


@runtime_checkable
class ErrorLookup(Protocol):
    """Errores de validación indexados por atributo."""

    def include(self, attribute: str) -> bool:
        ...

    def full_messages_for(self, attribute: str, translator: TranslationLookup) -> list[str]:
        """Mensajes completos ("Nombre es obligatorio") del atributo."""

        ...
