"""Exportación de la vista previa del formulario.

Por qué está en adapters:
- HTML/plantillas son detalles de infraestructura (Jinja2).
- Sirve para revisar de un vistazo cómo queda cada helper GOV.UK, con y sin
  errores, en cada idioma.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel

from adapters.jinja_forms import build_environment
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import FormRecord
from core.i18n import Translator


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_PREVIEW_LOCALES_DIR = _TEMPLATES_DIR / "locales"


class PreviewAddress(FormRecord):
    i18n_name: ClassVar[str | None] = "address"
    presence_of: ClassVar[tuple[str, ...]] = ("postcode",)

    postcode: str | None = None


class PreviewWasteTransport(FormRecord):
    i18n_name: ClassVar[str | None] = "waste_transport"

    animal_carcasses: bool = False
    mines_quarries: bool = False
    farm_agricultural: bool = False


class PreviewPerson(FormRecord):
    i18n_name: ClassVar[str | None] = "person"
    presence_of: ClassVar[tuple[str, ...]] = ("name", "gender", "email")
    nested_attributes: ClassVar[tuple[str, ...]] = ("address", "waste_transport")

    name: str | None = None
    ni_number: str | None = None
    email: str | None = None
    telephone: str | None = None
    description: str | None = None
    gender: str | None = None
    location: str | None = None
    has_user_account: str | None = None
    address: PreviewAddress | None = None
    waste_transport: PreviewWasteTransport | None = None


class Option(BaseModel):
    value: str
    label: str


LOCATIONS = ("ni", "isle_of_man_channel_islands", "british_abroad")


def _sample_person(invalid: bool) -> PreviewPerson:
    person = PreviewPerson(
        address=PreviewAddress(),
        waste_transport=PreviewWasteTransport(mines_quarries=True),
    )
    if invalid:
        person.valid()
        person.address.valid()
    else:
        person.name = "Jane Doe"
        person.email = "jane@example.com"
        person.gender = "female"
        person.location = "ni"
        person.address.postcode = "SW1A 1AA"
    return person


def _genders(translator: Translator) -> list[Option]:
    return [
        Option(
            value=value,
            label=translator.translate(f"person.gender.{value}", scope="helpers.label", default=value) or value,
        )
        for value in ("female", "male")
    ]


def render_preview_html(
    *,
    language: Language | None = None,
    invalid: bool = False,
    settings: AppSettings | None = None,
) -> str:
    """Renderiza la vista previa como HTML autocontenido."""

    settings = settings or AppSettings()
    translator = Translator.from_settings(settings, load_path=[_PREVIEW_LOCALES_DIR])
    if language is not None:
        translator.locale = language.value

    env = build_environment(translator=translator, templates_dir=settings.templates_dir or _TEMPLATES_DIR)
    template = env.get_template("preview.html")
    return template.render(
        language=translator.locale,
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        invalid=invalid,
        person=_sample_person(invalid),
        locations=LOCATIONS,
        genders=_genders(translator),
    )


def export_preview_html(
    *,
    output_path: Path,
    language: Language | None = None,
    invalid: bool = False,
    settings: AppSettings | None = None,
) -> Path:
    """Exporta la vista previa a un fichero HTML."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_preview_html(language=language, invalid=invalid, settings=settings)
    output_path.write_text(html, encoding="utf-8")
    return output_path
