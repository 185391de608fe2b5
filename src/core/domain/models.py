"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los registros de formulario son modelos Pydantic: el mismo tipo sirve para
  parsear lo que llega de un POST y para alimentar al form builder.
- `FieldErrors` es el mapa "atributo -> errores" que consultan los helpers;
  guarda tipos simbólicos (`blank`, `too_short`...) y los traduce al pintar.

Nota:
- Estos modelos describen *qué* es un error, no *cómo* se pinta.
"""

from __future__ import annotations

import re
import types
from typing import Any, ClassVar, Iterable, Mapping, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from core.interfaces.collaborators import TranslationLookup


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

# Tipos de error de pydantic -> tipos simbólicos de mensaje.
_PYDANTIC_ERROR_TYPES: dict[str, str] = {
    "missing": "blank",
    "string_too_short": "too_short",
    "string_too_long": "too_long",
    "too_short": "too_short",
    "too_long": "too_long",
    "int_parsing": "not_a_number",
    "float_parsing": "not_a_number",
    "decimal_parsing": "not_a_number",
    "int_from_float": "not_an_integer",
    "literal_error": "inclusion",
    "enum": "inclusion",
    "greater_than": "greater_than",
    "greater_than_equal": "greater_than_or_equal_to",
    "less_than": "less_than",
    "less_than_equal": "less_than_or_equal_to",
}

# Claves de ctx de pydantic que se exponen como `%{count}`.
_COUNT_CONTEXT_KEYS = ("min_length", "max_length", "gt", "ge", "lt", "le")


def humanize(text: str) -> str:
    """`ni_number` -> `Ni number`, `country_id` -> `Country`."""

    value = str(text)
    if value.endswith("_id"):
        value = value[:-3]
    return value.replace("_", " ").strip().capitalize()


def underscore(name: str) -> str:
    """`WasteTransport` -> `waste_transport`."""

    return _CAMEL_BOUNDARY.sub("_", name).lower()


def human_attribute_name(model_key: str, attribute: str, translator: TranslationLookup) -> str:
    """Nombre legible de un atributo.

    `activemodel.attributes.<modelo>.<atributo>`; por defecto el último
    segmento humanizado (`location.ni` -> `Ni`).
    """

    attribute = str(attribute)
    default = humanize(attribute.rpartition(".")[2])
    if not model_key:
        return default
    return translator.translate(
        f"{model_key}.{attribute}",
        scope="activemodel.attributes",
        default=default,
    ) or default


class ErrorDetail(BaseModel):
    """Un error sobre un atributo."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(
        ...,
        min_length=1,
        description="Tipo simbólico (p.ej. 'blank', 'too_short') usado como clave de traducción.",
    )
    message: str | None = Field(
        default=None,
        description="Mensaje literal cuando no existe traducción para el tipo.",
    )
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Valores de interpolación (p.ej. count).",
    )


class FieldErrors(BaseModel):
    """Errores de validación indexados por atributo.

    Por qué no guarda texto:
    - El idioma se decide al renderizar; el mismo registro puede pintarse en
      inglés o en galés.
    """

    model_key: str = Field(
        default="",
        description="Clave i18n del modelo dueño de los errores (p.ej. 'person').",
    )
    details: dict[str, list[ErrorDetail]] = Field(
        default_factory=dict,
        description="Errores por atributo, en orden de inserción.",
    )

    def add(self, attribute: str, type: str = "invalid", *, message: str | None = None, **options: Any) -> None:
        self.details.setdefault(str(attribute), []).append(
            ErrorDetail(type=type, message=message, options=options)
        )

    def include(self, attribute: str) -> bool:
        return bool(self.details.get(str(attribute)))

    def __contains__(self, attribute: object) -> bool:
        return self.include(str(attribute))

    def __len__(self) -> int:
        return sum(len(items) for items in self.details.values())

    def clear(self) -> None:
        self.details.clear()

    def attributes(self) -> list[str]:
        return [name for name, items in self.details.items() if items]

    def generate_message(self, attribute: str, detail: ErrorDetail, translator: TranslationLookup) -> str:
        attribute = str(attribute)
        model = self.model_key
        fallbacks: list[str] = []
        if model:
            fallbacks += [
                f"activemodel.errors.models.{model}.attributes.{attribute}.{detail.type}",
                f"activemodel.errors.models.{model}.{detail.type}",
            ]
        fallbacks += [
            f"activemodel.errors.messages.{detail.type}",
            f"errors.attributes.{attribute}.{detail.type}",
            f"errors.messages.{detail.type}",
        ]

        values = {
            "attribute": human_attribute_name(model, attribute, translator),
            "model": humanize(model),
            **detail.options,
        }
        first, rest = fallbacks[0], fallbacks[1:]
        message = translator.translate(
            first,
            fallbacks=rest,
            default=detail.message or detail.type,
            **values,
        )
        return message or detail.type

    def messages_for(self, attribute: str, translator: TranslationLookup) -> list[str]:
        return [
            self.generate_message(attribute, detail, translator)
            for detail in self.details.get(str(attribute), [])
        ]

    def full_message(self, attribute: str, message: str, translator: TranslationLookup) -> str:
        attr_name = human_attribute_name(self.model_key, attribute, translator)
        return translator.translate(
            "errors.format",
            default="%{attribute} %{message}",
            attribute=attr_name,
            message=message,
        ) or f"{attr_name} {message}"

    def full_messages_for(self, attribute: str, translator: TranslationLookup) -> list[str]:
        return [
            self.full_message(attribute, message, translator)
            for message in self.messages_for(attribute, translator)
        ]

    def merge(self, other: "FieldErrors") -> None:
        for attribute, items in other.details.items():
            self.details.setdefault(attribute, []).extend(items)

    def merge_validation_error(self, exc: ValidationError, *, skip: Iterable[str] = ()) -> None:
        """Importa los errores de un `pydantic.ValidationError`.

        `skip`: atributos anidados cuyos errores internos (`address.postcode`)
        pertenecen al registro hijo.
        """

        skipped = set(skip)
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ()) if part != "__root__"]
            if len(loc) > 1 and loc[0] in skipped:
                continue
            attribute = ".".join(loc) if loc else "base"
            ctx = error.get("ctx") or {}
            pydantic_type = error.get("type", "")
            symbolic = _PYDANTIC_ERROR_TYPES.get(pydantic_type)

            if symbolic == "too_short" and ctx.get("min_length") == 1:
                symbolic = "blank"

            options: dict[str, Any] = {}
            for key in _COUNT_CONTEXT_KEYS:
                if key in ctx:
                    options["count"] = ctx[key]
                    break

            if symbolic is None:
                self.add(attribute, pydantic_type or "invalid", message=error.get("msg"))
            else:
                self.add(attribute, symbolic, **options)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return not value
    return False


class FormRecord(BaseModel):
    """Registro que respalda un formulario.

    Por qué permisivo:
    - Un formulario inválido también hay que volver a pintarlo con lo que el
      usuario escribió, así que la asignación no se valida.

    Reglas:
    - `presence_of`: atributos obligatorios (error `blank`).
    - `nested_attributes`: atributos anidados que se envían como
      `<nombre>_attributes` (ver `FormBuilder.fields_for`).
    - `i18n_name`: clave i18n explícita; por defecto el nombre de la clase en
      snake_case.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=False)

    presence_of: ClassVar[tuple[str, ...]] = ()
    nested_attributes: ClassVar[tuple[str, ...]] = ()
    i18n_name: ClassVar[str | None] = None

    _errors: FieldErrors | None = PrivateAttr(default=None)
    _form_errors: FieldErrors | None = PrivateAttr(default=None)

    @classmethod
    def i18n_key(cls) -> str:
        return cls.i18n_name or underscore(cls.__name__)

    @classmethod
    def human_attribute_name(cls, attribute: str, translator: TranslationLookup) -> str:
        return human_attribute_name(cls.i18n_key(), attribute, translator)

    @property
    def errors(self) -> FieldErrors:
        if self._errors is None:
            self._errors = FieldErrors(model_key=self.i18n_key())
        return self._errors

    def validate_record(self) -> None:
        """Hook para reglas propias; añadir con `self.errors.add(...)`."""

    def valid(self) -> bool:
        """Revalida el registro.

        Los errores de tipo importados por `from_form` se conservan: el valor
        rechazado sigue en el registro tal como se escribió.
        """

        self.errors.clear()
        if self._form_errors is not None:
            self.errors.merge(self._form_errors)
        for attribute in self.presence_of:
            if self.errors.include(attribute):
                continue
            if _is_blank(getattr(self, attribute, None)):
                self.errors.add(attribute, "blank")
        self.validate_record()
        return len(self.errors) == 0

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "FormRecord":
        """Construye el registro desde datos enviados.

        Si pydantic rechaza los datos, el registro se construye sin validar
        (conservando lo escrito) y los errores quedan en `errors`. Los
        registros anidados se construyen con su propio `from_form`, así que
        sus errores viven en el hijo y no en el padre.
        """

        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            known: dict[str, Any] = {}
            children: list[str] = []
            for key, value in data.items():
                if key not in cls.model_fields:
                    continue
                child_cls = _record_type(cls.model_fields[key].annotation)
                if child_cls is not None and isinstance(value, Mapping):
                    value = child_cls.from_form(value)
                    children.append(key)
                known[key] = value

            record = cls.model_construct(**known)
            form_errors = FieldErrors(model_key=cls.i18n_key())
            form_errors.merge_validation_error(exc, skip=children)
            record._form_errors = form_errors
            record.errors.merge(form_errors)
            return record


def _record_type(annotation: Any) -> type[FormRecord] | None:
    """`Address | None` -> `Address`; cualquier otra anotación -> `None`."""

    candidates = (annotation,)
    if get_origin(annotation) in (Union, types.UnionType):
        candidates = get_args(annotation)
    for candidate in candidates:
        if isinstance(candidate, type) and issubclass(candidate, FormRecord):
            return candidate
    return None
