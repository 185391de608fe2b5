"""Tests for form records and their error collections."""

from typing import ClassVar

from pydantic import Field

from core.domain.models import FieldErrors, FormRecord, humanize, underscore
from core.i18n import Translator
from support import Address, Case, Household, Person, Plot, WasteTransport


class Applicant(FormRecord):
    presence_of: ClassVar[tuple[str, ...]] = ()

    name: str = Field(min_length=1)
    age: int
    nickname: str = Field(default="", min_length=3)


def test_humanize_and_underscore():
    assert humanize("ni_number") == "Ni number"
    assert humanize("country_id") == "Country"
    assert underscore("WasteTransport") == "waste_transport"
    assert underscore("HTTPServer") == "http_server"


def test_i18n_key():
    assert Person.i18n_key() == "person"
    assert WasteTransport.i18n_key() == "waste_transport"


def test_errors_are_created_lazily():
    person = Person()

    assert len(person.errors) == 0
    assert person.errors.model_key == "person"
    assert person.errors is person.errors


def test_presence_validation():
    person = Person(name="  ")

    assert not person.valid()
    assert person.errors.attributes() == ["name", "gender"]

    person.name = "Ann"
    person.gender = "f"
    assert person.valid()
    assert not person.errors.include("name")


def test_full_messages_use_attribute_translation(translator):
    person = Person()
    person.valid()

    assert person.errors.full_messages_for("name", translator) == ["Name is required"]


def test_model_specific_message_wins(translator):
    translator.store_translations(
        "en",
        {"activemodel": {"errors": {"models": {"person": {"attributes": {"name": {"blank": "needs a name"}}}}}}},
    )
    person = Person()
    person.valid()

    assert person.errors.messages_for("name", translator) == ["needs a name"]
    assert person.errors.messages_for("gender", translator) == ["is required"]


def test_literal_message_when_type_is_unknown(translator):
    errors = FieldErrors(model_key="person")
    errors.add("base", "odd_state", message="Something odd")

    assert errors.messages_for("base", translator) == ["Something odd"]
    assert "base" in errors


def test_interpolation_options(translator):
    errors = FieldErrors(model_key="person")
    errors.add("name", "too_short", count=2)

    assert errors.full_messages_for("name", translator) == ["Name is too short (minimum is 2 characters)"]


def test_welsh_attribute_name():
    translator = Translator("cy")
    translator.store_translations("cy", {"activemodel": {"attributes": {"person": {"name": "Enw"}}}})

    assert Person.human_attribute_name("name", translator) == "Enw"
    assert Person.human_attribute_name("gender", translator) == "Gender"


def test_from_form_valid_data():
    record = Applicant.from_form({"name": "Ann", "age": "31", "ignored": "x"})

    assert record.age == 31
    assert len(record.errors) == 0


def test_from_form_maps_pydantic_errors():
    record = Applicant.from_form({"name": "", "age": "abc", "nickname": "ab"})
    translator = Translator()

    assert record.age == "abc"
    assert record.errors.full_messages_for("name", translator) == ["Name can't be blank"]
    assert record.errors.full_messages_for("age", translator) == ["Age is not a number"]
    assert record.errors.full_messages_for("nickname", translator) == [
        "Nickname is too short (minimum is 3 characters)"
    ]


def test_from_form_missing_fields_are_blank():
    record = Applicant.from_form({})

    assert [detail.type for detail in record.errors.details["name"]] == ["blank"]
    assert [detail.type for detail in record.errors.details["age"]] == ["blank"]


def test_custom_validation_hook():
    case = Case(name="parent", subcases=[Case(name="ok"), Case()])

    assert not case.valid()
    assert case.errors.attributes() == ["subcases"]
    assert case.subcases[1].errors.attributes() == ["name"]


def test_nested_records_keep_their_own_errors(translator):
    address = Address()
    person = Person(name="Ann", gender="f", address=address)

    assert person.valid()
    assert not address.valid()
    assert address.errors.full_messages_for("postcode", translator) == ["Postcode is required"]


def test_from_form_builds_nested_records_with_their_own_errors():
    record = Household.from_form({"name": "Ann", "age": "x", "plot": {"postcode": "SW1", "number": "abc"}})

    assert isinstance(record.plot, Plot)
    assert record.plot.postcode == "SW1"
    assert record.plot.number == "abc"
    assert record.errors.attributes() == ["age"]
    assert record.plot.errors.attributes() == ["number"]
    assert [detail.type for detail in record.plot.errors.details["number"]] == ["not_a_number"]


def test_from_form_keeps_valid_nested_record_when_parent_fails():
    record = Household.from_form({"age": "x", "plot": {"postcode": "SW1"}})

    assert isinstance(record.plot, Plot)
    assert len(record.plot.errors) == 0


def test_valid_keeps_errors_imported_from_form():
    record = Household.from_form({"age": "x"})

    assert record.errors.attributes() == ["age"]
    assert not record.valid()
    assert record.errors.attributes() == ["age", "name"]
    assert not record.valid()
    assert len(record.errors) == 2
