"""Integración con Jinja2.

Por qué está en adapters:
- Las plantillas son un detalle de infraestructura; el Core solo sabe
  generar markup desde un builder.
- Expone `form_for` como global para usarlo con bloques `call`:

    {% call(f) form_for("person", person, action="/people") %}
      {{ f.text_field("name") }}
      {% call(a) f.fields_for("address") %}{{ a.text_field("postcode") }}{% endcall %}
    {% endcall %}
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.form_builder import FormBuilder, form_for
from core.interfaces.collaborators import TranslationLookup
from core.services.elements_form_builder import ElementsFormBuilder


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def build_environment(
    *,
    translator: TranslationLookup | None = None,
    templates_dir: Path | None = None,
    builder: type[FormBuilder] = ElementsFormBuilder,
) -> Environment:
    """Entorno Jinja2 con `form_for` ligado al builder y al traductor."""

    env = Environment(
        loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.globals["form_for"] = partial(form_for, builder=builder, translator=translator)
    return env
