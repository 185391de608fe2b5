"""Servicios del Core: builders de formulario con estilo propio."""

from core.services.elements_form_builder import ElementsFormBuilder

__all__ = ["ElementsFormBuilder"]
