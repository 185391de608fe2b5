"""Records used across the test-suite."""

from __future__ import annotations

from typing import ClassVar

from core.domain.models import FormRecord


class Country(FormRecord):
    presence_of: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = None


class Address(FormRecord):
    presence_of: ClassVar[tuple[str, ...]] = ("postcode",)
    nested_attributes: ClassVar[tuple[str, ...]] = ("country",)

    postcode: str | None = None
    country: Country | None = None


class WasteTransport(FormRecord):
    animal_carcasses: bool = False
    mines_quarries: bool = False
    farm_agricultural: bool = False


class Person(FormRecord):
    presence_of: ClassVar[tuple[str, ...]] = ("name", "gender")
    nested_attributes: ClassVar[tuple[str, ...]] = ("address", "waste_transport")

    name: str | None = None
    ni_number: str | None = None
    gender: str | None = None
    location: str | None = None
    has_user_account: str | None = None
    address: Address | None = None
    waste_transport: WasteTransport | None = None


class Case(FormRecord):
    """Record with a custom validation hook over its sub-records."""

    presence_of: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = None
    state_machine: str | None = None
    subcases: list["Case"] | None = None

    def validate_record(self) -> None:
        for subcase in self.subcases or []:
            if not subcase.valid():
                self.errors.add("subcases", "invalid")


class Plot(FormRecord):
    postcode: str | None = None
    number: int | None = None


class Household(FormRecord):
    """Record with typed fields, for submitted data pydantic rejects."""

    presence_of: ClassVar[tuple[str, ...]] = ("name",)
    nested_attributes: ClassVar[tuple[str, ...]] = ("plot",)

    name: str | None = None
    age: int | None = None
    plot: Plot | None = None
