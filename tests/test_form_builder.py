"""Tests for the standard form helpers."""

from enum import Enum

import pytest

from core.domain.errors import FormBuilderError
from core.form_builder import FormBuilder, form_for, sanitized_object_name, sanitized_value
from support import Address, Person


class Colour(str, Enum):
    RED = "red"
    DARK_BLUE = "dark blue"


@pytest.fixture
def form(resource, translator) -> FormBuilder:
    return FormBuilder("person", resource, translator=translator)


class TestNaming:
    def test_sanitized_object_name(self):
        assert sanitized_object_name("person") == "person"
        assert sanitized_object_name("person[address_attributes]") == "person_address_attributes"
        assert sanitized_object_name("a[b][c]") == "a_b_c"

    def test_sanitized_value(self):
        assert sanitized_value("Isle of Man") == "isle_of_man"
        assert sanitized_value("v1.2") == "v1_2"
        assert sanitized_value("a/b?") == "ab"

    def test_field_name_and_id(self, form):
        assert form.field_name("name") == "person[name]"
        assert form.field_id("name") == "person_name"
        assert form.field_id("colour", Colour.DARK_BLUE) == "person_colour_dark_blue"


class TestInputs:
    def test_text_field_without_value(self, form):
        assert form.text_field("name") == '<input type="text" name="person[name]" id="person_name" />'

    def test_text_field_with_value_and_options(self, translator):
        form = FormBuilder("person", Person(name="Ann"), translator=translator)

        output = form.text_field("name", maxlength=30, data_role="name")

        assert output == (
            '<input maxlength="30" data-role="name" type="text" value="Ann" name="person[name]" id="person_name" />'
        )

    def test_explicit_id_and_name_win(self, form):
        output = form.email_field("name", id="custom", name="other")

        assert output == '<input id="custom" name="other" type="email" />'

    def test_hidden_field_skips_error_wrapping(self, form, resource):
        resource.valid()

        assert form.hidden_field("name") == '<input type="hidden" name="person[name]" id="person_name" />'

    def test_phone_field_is_telephone(self, form):
        assert form.phone_field("name") == form.telephone_field("name")
        assert 'type="tel"' in form.phone_field("name")

    def test_text_area_size_string_becomes_cols_rows(self, translator):
        form = FormBuilder("person", Person(name="a & b"), translator=translator)

        output = form.text_area("name", size="40x10")

        assert output == '<textarea cols="40" rows="10" name="person[name]" id="person_name">\na &amp; b</textarea>'

    def test_check_box(self, form):
        assert form.check_box("accepted") == (
            '<input name="person[accepted]" type="hidden" value="0" />'
            '<input type="checkbox" value="1" name="person[accepted]" id="person_accepted" />'
        )

    def test_check_box_without_hidden_and_checked(self, translator):
        form = FormBuilder("person", Person(has_user_account="yes"), translator=translator)

        output = form.check_box("has_user_account", "yes", None)

        assert output == (
            '<input type="checkbox" value="yes" checked="checked" '
            'name="person[has_user_account]" id="person_has_user_account" />'
        )

    def test_radio_button_accepts_enum(self, translator):
        form = FormBuilder("person", Person(location="red"), translator=translator)

        output = form.radio_button("location", Colour.RED)

        assert output == (
            '<input type="radio" value="red" checked="checked" name="person[location]" id="person_location_red" />'
        )


class TestLabel:
    def test_label_uses_translation(self, form):
        assert form.label("name") == '<label for="person_name">Full name</label>'

    def test_label_falls_back_to_human_attribute_name(self, form):
        assert form.label("has_user_account") == '<label for="person_has_user_account">Has user account</label>'

    def test_label_with_value_translation(self, form):
        output = form.label("location", value="ni", class_="block-label")

        assert output == '<label class="block-label" for="person_location_ni">Northern Ireland</label>'

    def test_label_with_caller(self, form):
        output = form.label("name", caller=lambda: form.text_field("name"))

        assert output == (
            '<label for="person_name"><input type="text" name="person[name]" id="person_name" /></label>'
        )

    def test_label_text_is_escaped(self, form):
        assert form.label("name", "<em>") == '<label for="person_name">&lt;em&gt;</label>'

    def test_label_without_record_uses_object_name_key(self, translator):
        form = FormBuilder("search", None, translator=translator)

        assert form.label("query_id") == '<label for="search_query_id">Query</label>'


class TestCollectionSelect:
    def test_attribute_names_as_methods(self, translator):
        form = FormBuilder("person", Person(gender="f"), translator=translator)
        genders = [Address(postcode="m"), Address(postcode="f")]

        output = form.collection_select("gender", genders, "postcode", "postcode")

        assert output == (
            '<select name="person[gender]" id="person_gender">'
            '<option value="m">m</option>\n'
            '<option value="f" selected="selected">f</option>'
            "</select>"
        )

    def test_prompt_only_without_value(self, form, translator):
        output = form.collection_select("gender", ["m"], str, str, {"prompt": True})

        assert output.startswith('<select name="person[gender]" id="person_gender"><option value="">Please select</option>')

        chosen = FormBuilder("person", Person(gender="m"), translator=translator)
        assert "Please select" not in chosen.collection_select("gender", ["m"], str, str, {"prompt": True})

    def test_include_blank_true(self, form):
        output = form.collection_select("gender", ["m"], str, str, {"include_blank": True})

        assert '<option value=""></option>\n<option value="m">m</option>' in output


class TestErrors:
    def test_default_error_proc_wraps_tags(self, form, resource):
        resource.valid()

        assert form.text_field("name") == (
            '<div class="field_with_errors"><input type="text" name="person[name]" id="person_name" /></div>'
        )
        assert form.label("name").startswith('<div class="field_with_errors"><label')

    def test_attributes_without_errors_are_untouched(self, form, resource):
        resource.valid()

        assert form.text_field("ni_number").startswith("<input")


class TestNested:
    def test_nested_attributes_name(self, form):
        child = form.nested_builder("address")

        assert child.object_name == "person[address_attributes]"
        assert isinstance(child, FormBuilder)
        assert child.translator is form.translator

    def test_plain_nested_name(self, form):
        child = form.nested_builder("settings", object())

        assert child.object_name == "person[settings]"

    def test_nested_record_defaults_to_parent_attribute(self, translator):
        address = Address(postcode="SW1A 1AA")
        form = FormBuilder("person", Person(address=address), translator=translator)

        output = form.fields_for("address", caller=lambda f: f.text_field("postcode"))

        assert 'value="SW1A 1AA"' in output
        assert 'name="person[address_attributes][postcode]"' in output

    def test_fields_for_requires_caller(self, form):
        with pytest.raises(FormBuilderError):
            form.fields_for("address")


class TestFormFor:
    def test_wraps_content(self, resource, translator):
        output = form_for(
            "person",
            resource,
            action="/people",
            translator=translator,
            caller=lambda f: f.text_field("name"),
        )

        assert output == (
            '<form action="/people" accept-charset="UTF-8" method="post">'
            '<input type="text" name="person[name]" id="person_name" />'
            "</form>"
        )

    def test_non_post_method_uses_hidden_field(self, translator):
        output = form_for("person", None, action="/people/1", method="PATCH", translator=translator, class_="edit")

        assert output == (
            '<form class="edit" action="/people/1" accept-charset="UTF-8" method="post">'
            '<input type="hidden" name="_method" value="patch" />'
            "</form>"
        )
