"""GOV.UK Elements form builder.

Decorates the standard helpers in `core.form_builder` so every field renders
the markup the GOV.UK Elements stylesheet expects:

    <div class="form-group error" id="error_person_name">
      <label class="form-label" for="person_name">Full name
        <span class="error-message" id="error_message_person_name">...</span>
        <span class="form-hint">...</span>
      </label>
      <input aria-describedby="error_message_person_name" class="form-control" ...>
    </div>

Error markup is patched into the already rendered `<label>`, `<input>`,
`<textarea>` and `<select>` tags through `field_error_proc`, which the base
builder calls for every tag whose attribute has errors.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping, Sequence

from markupsafe import Markup, escape

from core.domain.errors import FormBuilderError
from core.domain.models import humanize
from core.form_builder import FormBuilder, choice_value, sanitized_value
from core.html import content_tag, normalize_attributes, safe_join


logger = logging.getLogger(__name__)

_LABEL_TAG = re.compile(r"^<label\b")
_CONTROL_TAG = re.compile(r"^<(input|textarea|select)\b")
_FOR_ATTR = re.compile(r'for="([^"]+)"')
_OPENING_TAG = re.compile(r"^<[^>]*>")

FIELD_CLASS = "form-control"
DEFAULT_CHOICES = ("yes", "no")


class ElementsFormBuilder(FormBuilder):
    """Form builder emitting GOV.UK Elements markup."""

    # --- text-like fields ---------------------------------------------

    def email_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().email_field, attribute, options)

    def password_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().password_field, attribute, options)

    def number_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().number_field, attribute, options)

    def phone_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().phone_field, attribute, options)

    def range_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().range_field, attribute, options)

    def search_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().search_field, attribute, options)

    def telephone_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().telephone_field, attribute, options)

    def text_area(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().text_area, attribute, options)

    def text_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().text_field, attribute, options)

    def url_field(self, attribute: str, **options: Any) -> Markup:
        return self._form_group_field(super().url_field, attribute, options)

    def _form_group_field(
        self,
        render: Callable[..., Markup],
        attribute: str,
        options: Mapping[str, Any],
    ) -> Markup:
        options = self._set_field_classes(normalize_attributes(options))
        label_text = options.pop("label", None)
        label = self._label_with_hint(attribute, label_text)
        return self._form_group(attribute, label + render(attribute, **options))

    # --- fieldsets ----------------------------------------------------

    def radio_button_fieldset(
        self,
        attribute: str,
        *,
        choices: Sequence[Any] | None = None,
        inline: bool = False,
    ) -> Markup:
        fieldset = content_tag(
            "fieldset",
            safe_join([self._fieldset_legend(attribute), self._radio_inputs(attribute, choices)], "\n"),
            self._fieldset_options(inline),
        )
        return self._form_group(attribute, fieldset)

    def check_box_fieldset(
        self,
        legend_key: str,
        attributes: Sequence[str],
        *,
        inline: bool = False,
    ) -> Markup:
        attributes = list(attributes)
        if not attributes:
            raise FormBuilderError("check_box_fieldset needs at least one attribute")
        fieldset = content_tag(
            "fieldset",
            safe_join([self._fieldset_legend(legend_key), self._check_box_inputs(attributes)], "\n"),
            self._fieldset_options(inline),
        )
        return self._form_group(attributes, fieldset)

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
        attrs = self._set_field_classes(normalize_attributes(html_options))
        label = self._label_with_hint(method)
        select = super().collection_select(method, collection, value_method, text_method, options, attrs)
        return self._form_group(method, label + select)

    # --- error hook ---------------------------------------------------

    def field_error_proc(self, html_tag: Markup, method: str) -> Markup:
        return self.add_error_to_html_tag(html_tag, method)

    def add_error_to_html_tag(self, html_tag: Markup, attribute: str) -> Markup:
        source = str(html_tag)
        if _LABEL_TAG.match(source):
            return self._add_error_to_label(source, html_tag)
        match = _CONTROL_TAG.match(source)
        if match:
            return self._add_error_to_input(source, match.group(1), attribute)
        return html_tag

    def _add_error_to_label(self, source: str, html_tag: Markup) -> Markup:
        found = _FOR_ATTR.search(source)
        if not found:
            return html_tag
        field = found.group(1)
        message = self._error_full_message_for(self._object_attribute_for(field))
        if not message:
            return html_tag
        span = content_tag("span", message, {"class": "error-message", "id": f"error_message_{field}"})
        logger.debug("Error message attached to label for %s", field)
        return Markup(source.replace("</label", f"{span}</label", 1))

    def _add_error_to_input(self, source: str, element: str, attribute: str) -> Markup:
        opening = _OPENING_TAG.match(source)
        if opening and "aria-describedby=" in opening.group(0):
            return Markup(source)
        described_by = escape(self._error_message_id(attribute))
        return Markup(source.replace(element, f'{element} aria-describedby="{described_by}"', 1))

    # --- helpers ------------------------------------------------------

    def _set_field_classes(self, options: dict[str, Any]) -> dict[str, Any]:
        current = options.get("class")
        if isinstance(current, str):
            options["class"] = [FIELD_CLASS, current]
        elif isinstance(current, (list, tuple)):
            options["class"] = [FIELD_CLASS, *current]
        else:
            options["class"] = FIELD_CLASS
        return options

    def _label_with_hint(self, attribute: str, text: str | None = None) -> Markup:
        label = self.label(attribute, text, class_="form-label")
        return self._add_hint("label", label, attribute)

    def _radio_inputs(self, attribute: str, choices: Sequence[Any] | None) -> list[Markup]:
        labels: list[Markup] = []
        for choice in DEFAULT_CHOICES if choices is None else choices:
            value = choice_value(choice)
            text = self._localized_label(f"{attribute}.{sanitized_value(value)}")
            labels.append(
                self.label(
                    attribute,
                    class_="block-label",
                    value=value,
                    caller=lambda value=value, text=text: self.radio_button(attribute, value) + text,
                )
            )
        return labels

    def _check_box_inputs(self, attributes: Sequence[str]) -> list[Markup]:
        return [
            self.label(
                attribute,
                class_="block-label",
                caller=lambda attribute=attribute: self.check_box(attribute) + self._localized_label(attribute),
            )
            for attribute in attributes
        ]

    def _fieldset_legend(self, attribute: str) -> Markup:
        tags = [content_tag("span", self._fieldset_text(attribute), {"class": "form-label-bold"})]

        if self._error_for(attribute):
            tags.append(
                content_tag(
                    "span",
                    self._error_full_message_for(attribute),
                    {"class": "error-message", "id": self._error_message_id(attribute)},
                )
            )

        hint = self._hint_text(attribute)
        if hint:
            tags.append(content_tag("span", hint, {"class": "form-hint"}))

        return content_tag("legend", safe_join(tags))

    def _fieldset_options(self, inline: bool) -> dict[str, Any]:
        return {"class": "inline"} if inline is True else {}

    def _form_group(self, attributes: str | Sequence[str], content: Markup) -> Markup:
        return content_tag(
            "div",
            content,
            {"class": self._form_group_classes(attributes), "id": self._form_group_id(attributes)},
        )

    def _form_group_classes(self, attributes: str | Sequence[str]) -> str:
        classes = "form-group"
        if any(self._error_for(a) for a in self._as_list(attributes)):
            classes += " error"
        return classes

    def _form_group_id(self, attributes: str | Sequence[str]) -> str | None:
        for attribute in self._as_list(attributes):
            if self._error_for(attribute):
                return f"error_{self.attribute_prefix}_{attribute}"
        return None

    @staticmethod
    def _as_list(attributes: str | Sequence[str]) -> list[str]:
        if isinstance(attributes, str):
            return [attributes]
        return [str(a) for a in attributes]

    def _error_message_id(self, attribute: str) -> str:
        return f"error_message_{self.attribute_prefix}_{attribute}"

    def _object_attribute_for(self, field: str) -> str:
        return field.replace(f"{self.attribute_prefix}_", "", 1)

    def _error_for(self, attribute: str) -> bool:
        return self.has_errors(attribute)

    def _error_full_message_for(self, attribute: str) -> str | None:
        errors = self.errors
        if errors is None:
            return None
        messages = errors.full_messages_for(attribute, self.translator)
        if not messages:
            return None
        return messages[0].replace(self._default_label(attribute), self._localized_label(attribute), 1)

    def _add_hint(self, tag_name: str, element: Markup, name: str) -> Markup:
        hint = self._hint_text(name)
        if not hint:
            return element
        hint_span = content_tag("span", hint, {"class": "form-hint"})
        return Markup(str(element).replace(f"</{tag_name}>", f"{hint_span}</{tag_name}>", 1))

    def _fieldset_text(self, attribute: str) -> str:
        return self._localized("helpers.fieldset", attribute, self._default_label(attribute)) or self._default_label(attribute)

    def _hint_text(self, attribute: str) -> str | None:
        return self._localized("helpers.hint", attribute, "")

    @staticmethod
    def _default_label(attribute: str) -> str:
        return humanize(str(attribute).split(".")[-1])

    def _localized_label(self, attribute: str) -> str:
        return self._localized("helpers.label", attribute, self._default_label(attribute)) or self._default_label(attribute)

    def _localized(self, scope: str, attribute: str, default: str) -> str | None:
        value = self.translator.translate(f"{self.i18n_key}.{attribute}", scope=scope, default=default)
        return value or None
