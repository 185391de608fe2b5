"""Excepciones del dominio."""

from __future__ import annotations


class FormBuilderError(Exception):
    """Uso incorrecto de los helpers de formulario."""


class TranslationError(FormBuilderError):
    """Un fichero de traducciones no tiene la forma `{locale: {claves...}}`."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
