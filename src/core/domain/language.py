"""Language utilities for the form builder.

This module centralizes the locales shipped with the package. Keeping it in
the domain layer lets the translator, the settings and the CLI share a single
source of truth without creating circular imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported locales for user-facing form text."""

    ENGLISH = "en"
    WELSH = "cy"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "Welsh" if self is Language.WELSH else "English"


def locale_code(value: "Language | str") -> str:
    """Plain locale string for either a `Language` or a raw code."""

    if isinstance(value, Language):
        return value.value
    return str(value)
