"""Pytest fixtures for the form builder tests."""

from pathlib import Path

import pytest

from core.i18n import Translator
from core.services.elements_form_builder import ElementsFormBuilder
from support import Person

FIXTURE_LOCALES = Path(__file__).parent / "fixtures" / "locales"


@pytest.fixture
def translator() -> Translator:
    """Translator with the built-in defaults plus the fixture locales."""
    return Translator("en", load_path=[FIXTURE_LOCALES])


@pytest.fixture
def resource() -> Person:
    return Person()


@pytest.fixture
def builder(resource: Person, translator: Translator) -> ElementsFormBuilder:
    return ElementsFormBuilder("person", resource, translator=translator)
