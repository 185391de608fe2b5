"""Helpers de formulario estándar.

Por qué existe:
- Es la capa "host" que el builder GOV.UK decora: genera nombres e ids de
  campo, etiquetas traducidas, inputs, selects y formularios anidados.
- Cada tag generado para un atributo con errores pasa por
  `field_error_proc`, el punto de extensión que sobrescriben los builders.

Convenciones de nombres:
- name: `persona[atributo]`, anidado `persona[direccion_attributes][cp]`
- id:   `persona_atributo`, anidado `persona_direccion_attributes_cp`
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping

from markupsafe import Markup, escape

from core.domain.errors import FormBuilderError
from core.domain.models import humanize
from core.html import content_tag, normalize_attributes, tag
from core.i18n import get_translator
from core.interfaces.collaborators import ErrorLookup, TranslationLookup


logger = logging.getLogger(__name__)

_ID_UNSAFE = re.compile(r"\]\[|[^-a-zA-Z0-9:.]")
_VALUE_SPACES = re.compile(r"[\s.]")
_VALUE_UNSAFE = re.compile(r"[^-\w]")


def sanitized_object_name(object_name: str) -> str:
    """`person[address_attributes]` -> `person_address_attributes`."""

    name = _ID_UNSAFE.sub("_", str(object_name))
    return name[:-1] if name.endswith("_") else name


def sanitized_value(value: Any) -> str:
    return _VALUE_UNSAFE.sub("", _VALUE_SPACES.sub("_", str(value))).lower()


def choice_value(value: Any) -> Any:
    """Valor de una opción; los Enum se reducen a su `.value`."""

    return getattr(value, "value", value)


def _read(item: Any, method: Callable[[Any], Any] | str) -> Any:
    if callable(method):
        return method(item)
    attr = getattr(item, method)
    return attr() if callable(attr) else attr


def _is_checked(value: Any, checked_value: Any) -> bool:
    if value is None or value is False:
        return False
    if value is True:
        return True
    if isinstance(value, (list, tuple, set, frozenset)):
        return str(checked_value) in {str(choice_value(v)) for v in value}
    return str(choice_value(value)) == str(checked_value)


class FormBuilder:
    """Builder de formularios ligado a un registro (o a ninguno)."""

    def __init__(
        self,
        object_name: str,
        record: Any = None,
        *,
        translator: TranslationLookup | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.object_name = str(object_name)
        self.object = record
        self.translator = translator or get_translator()
        self.options = dict(options or {})

    # --- contexto -----------------------------------------------------

    @property
    def i18n_key(self) -> str:
        key = getattr(self.object, "i18n_key", None)
        if callable(key):
            return key()
        return self.object_name

    @property
    def attribute_prefix(self) -> str:
        return sanitized_object_name(self.object_name)

    @property
    def errors(self) -> ErrorLookup | None:
        return getattr(self.object, "errors", None)

    def has_errors(self, method: str) -> bool:
        errors = self.errors
        return errors is not None and errors.include(method)

    def field_name(self, method: str) -> str:
        return f"{self.object_name}[{method}]"

    def field_id(self, method: str, value: Any = None) -> str:
        field = f"{self.attribute_prefix}_{method}"
        if value is not None:
            field = f"{field}_{sanitized_value(choice_value(value))}"
        return field

    def value(self, method: str) -> Any:
        if self.object is None:
            return None
        return getattr(self.object, method, None)

    def human_attribute_name(self, attribute: str) -> str:
        human = getattr(self.object, "human_attribute_name", None)
        if callable(human):
            return human(attribute, self.translator)
        return humanize(str(attribute).rpartition(".")[2])

    # --- errores ------------------------------------------------------

    def field_error_proc(self, html_tag: Markup, method: str) -> Markup:
        """Envuelve los tags de atributos con errores."""

        return content_tag("div", html_tag, {"class": "field_with_errors"})

    def _wrap_errors(self, html_tag: Markup, method: str) -> Markup:
        if not self.has_errors(method):
            return html_tag
        return Markup(self.field_error_proc(html_tag, method))

    # --- inputs -------------------------------------------------------

    def _input(self, field_type: str, method: str, options: Mapping[str, Any]) -> Markup:
        attrs = normalize_attributes(options)
        attrs.setdefault("type", field_type)
        if "value" not in attrs:
            value = self.value(method)
            if value is not None:
                attrs["value"] = choice_value(value)
        attrs.setdefault("name", self.field_name(method))
        attrs.setdefault("id", self.field_id(method))
        html = tag("input", attrs)
        if field_type == "hidden":
            return html
        return self._wrap_errors(html, method)

    def text_field(self, method: str, **options: Any) -> Markup:
        return self._input("text", method, options)

    def password_field(self, method: str, **options: Any) -> Markup:
        return self._input("password", method, {"value": None, **options})

    def hidden_field(self, method: str, **options: Any) -> Markup:
        return self._input("hidden", method, options)

    def email_field(self, method: str, **options: Any) -> Markup:
        return self._input("email", method, options)

    def number_field(self, method: str, **options: Any) -> Markup:
        return self._input("number", method, options)

    def telephone_field(self, method: str, **options: Any) -> Markup:
        return self._input("tel", method, options)

    phone_field = telephone_field

    def range_field(self, method: str, **options: Any) -> Markup:
        return self._input("range", method, options)

    def search_field(self, method: str, **options: Any) -> Markup:
        return self._input("search", method, options)

    def url_field(self, method: str, **options: Any) -> Markup:
        return self._input("url", method, options)

    def text_area(self, method: str, **options: Any) -> Markup:
        attrs = normalize_attributes(options)
        size = attrs.pop("size", None)
        if isinstance(size, str) and "x" in size:
            attrs["cols"], attrs["rows"] = size.split("x", 1)
        value = attrs.pop("value") if "value" in attrs else self.value(method)
        attrs.setdefault("name", self.field_name(method))
        attrs.setdefault("id", self.field_id(method))
        body = Markup("\n") + escape(value if value is not None else "")
        return self._wrap_errors(content_tag("textarea", body, attrs), method)

    def check_box(
        self,
        method: str,
        checked_value: Any = "1",
        unchecked_value: Any = "0",
        **options: Any,
    ) -> Markup:
        attrs = normalize_attributes(options)
        attrs.setdefault("type", "checkbox")
        attrs.setdefault("value", checked_value)
        if _is_checked(self.value(method), checked_value):
            attrs["checked"] = True
        attrs.setdefault("name", self.field_name(method))
        attrs.setdefault("id", self.field_id(method))
        checkbox = self._wrap_errors(tag("input", attrs), method)

        if unchecked_value is None or unchecked_value is False:
            return checkbox
        hidden = tag("input", {"name": attrs["name"], "type": "hidden", "value": unchecked_value})
        return hidden + checkbox

    def radio_button(self, method: str, tag_value: Any, **options: Any) -> Markup:
        tag_value = choice_value(tag_value)
        attrs = normalize_attributes(options)
        attrs["type"] = "radio"
        attrs["value"] = tag_value
        if _is_checked(self.value(method), tag_value):
            attrs["checked"] = True
        attrs.setdefault("name", self.field_name(method))
        attrs.setdefault("id", self.field_id(method, tag_value))
        return self._wrap_errors(tag("input", attrs), method)

    # --- labels -------------------------------------------------------

    def label_text(self, method: str, value: Any = None) -> str:
        method_and_value = str(method)
        if value is not None:
            method_and_value = f"{method}.{sanitized_value(choice_value(value))}"
        text = self.translator.translate(
            f"{self.i18n_key}.{method_and_value}",
            scope="helpers.label",
            default="",
        )
        return text or self.human_attribute_name(method_and_value)

    def label(
        self,
        method: str,
        text: str | None = None,
        *,
        value: Any = None,
        caller: Callable[[], Any] | None = None,
        **options: Any,
    ) -> Markup:
        attrs = normalize_attributes(options)
        attrs.setdefault("for", self.field_id(method, value))
        if caller is not None:
            content: Any = Markup(caller())
        else:
            content = text if text is not None else self.label_text(method, value)
        return self._wrap_errors(content_tag("label", content, attrs), method)

    # --- selects ------------------------------------------------------

    def collection_select(
        self,
        method: str,
        collection: Iterable[Any],
        value_method: Callable[[Any], Any] | str,
        text_method: Callable[[Any], Any] | str,
        options: Mapping[str, Any] | None = None,
        html_options: Mapping[str, Any] | None = None,
    ) -> Markup:
        options = dict(options or {})
        attrs = normalize_attributes(html_options)
        attrs.setdefault("name", self.field_name(method))
        attrs.setdefault("id", self.field_id(method))

        selected = options["selected"] if "selected" in options else self.value(method)
        selected = choice_value(selected)

        option_tags: list[Markup] = []
        include_blank = options.get("include_blank")
        prompt = options.get("prompt")
        if include_blank:
            blank_text = include_blank if isinstance(include_blank, str) else None
            option_tags.append(content_tag("option", blank_text, {"value": ""}))
        elif prompt and (selected is None or selected == ""):
            prompt_text = prompt if isinstance(prompt, str) else self.translator.translate(
                "prompt", scope="helpers.select", default="Please select"
            )
            option_tags.append(content_tag("option", prompt_text, {"value": ""}))

        for item in collection:
            item_value = choice_value(_read(item, value_method))
            item_text = _read(item, text_method)
            option_attrs: dict[str, Any] = {"value": item_value}
            if selected is not None and str(item_value) == str(selected):
                option_attrs["selected"] = True
            option_tags.append(content_tag("option", item_text, option_attrs))

        html = content_tag("select", Markup("\n").join(option_tags), attrs)
        return self._wrap_errors(html, method)

    # --- anidados -----------------------------------------------------

    def nested_builder(
        self,
        record_name: str,
        record_object: Any = None,
        *,
        builder: type["FormBuilder"] | None = None,
        **options: Any,
    ) -> "FormBuilder":
        name = str(record_name)
        nested = getattr(type(self.object), "nested_attributes", ()) if self.object is not None else ()
        if name in nested:
            child_name = f"{self.object_name}[{name}_attributes]"
        else:
            child_name = f"{self.object_name}[{name}]"

        if record_object is None and self.object is not None:
            record_object = getattr(self.object, name, None)

        logger.debug("Nested builder %s (%s)", child_name, type(record_object).__name__)
        builder_cls = builder or type(self)
        return builder_cls(
            child_name,
            record_object,
            translator=self.translator,
            options={**self.options, **options},
        )

    def fields_for(
        self,
        record_name: str,
        record_object: Any = None,
        *,
        caller: Callable[["FormBuilder"], Any] | None = None,
        builder: type["FormBuilder"] | None = None,
        **options: Any,
    ) -> Markup:
        """Campos de un registro anidado; `caller` recibe el builder hijo."""

        if caller is None:
            raise FormBuilderError("fields_for requires a caller that renders the nested fields")
        child = self.nested_builder(record_name, record_object, builder=builder, **options)
        return Markup(caller(child))


def form_for(
    record_name: str,
    record: Any = None,
    *,
    action: str = "",
    method: str = "post",
    builder: type[FormBuilder] = FormBuilder,
    translator: TranslationLookup | None = None,
    caller: Callable[[FormBuilder], Any] | None = None,
    **html_options: Any,
) -> Markup:
    """`<form>` con el contenido que genera `caller(builder)`."""

    form = builder(record_name, record, translator=translator)
    verb = method.lower()
    attrs = normalize_attributes(html_options)
    attrs["action"] = action
    attrs["accept-charset"] = "UTF-8"
    attrs["method"] = verb if verb in ("get", "post") else "post"

    parts: list[Markup] = []
    if verb not in ("get", "post"):
        parts.append(tag("input", {"type": "hidden", "name": "_method", "value": verb}))
    if caller is not None:
        parts.append(Markup(caller(form)))
    return content_tag("form", Markup("").join(parts), attrs)
