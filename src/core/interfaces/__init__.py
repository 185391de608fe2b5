"""Interfaces/abstracciones del Core.

Por qué:
- Define los contratos (Protocol) de los colaboradores que el form builder
  consume: traducciones y errores de validación.
- Permite enchufar otro backend (gettext, errores de otro ORM) sin tocar los
  helpers.
"""

from core.interfaces.collaborators import ErrorLookup, TranslationLookup

__all__ = ["ErrorLookup", "TranslationLookup"]
