"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los registros de formulario, el mapa de errores por campo y los
  idiomas soportados (Pydantic v2).
- El dominio no conoce HTML, plantillas ni CLI: solo conceptos del problema.
"""
