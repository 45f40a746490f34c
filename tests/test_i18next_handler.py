#!/usr/bin/env python3
"""
Tests for the i18next JSON handler.
"""

import pytest

from localekit.formats import I18nextJsonHandler


@pytest.fixture
def handler():
    """Fixture to create I18nextJsonHandler instance."""
    return I18nextJsonHandler()


def test_can_handle(handler):
    """Test 1: Marker names and translation.json are accepted; plain JSON is not."""
    assert handler.can_handle("common.en.i18n.json")
    assert handler.can_handle("locales/tr/translation.json")
    assert handler.can_handle("i18next-resources.json")
    assert not handler.can_handle("en.json")


def test_culture_from_directory(handler):
    """Test 2: The culture comes from the locale directory."""
    file = handler.parse('{"nav": {"home": "Anasayfa"}}', "locales/tr/translation.json")
    assert file.culture == "tr"
    assert file.format_id == "i18next"
    assert file.get_value("nav.home") == "Anasayfa"


def test_culture_from_marker(handler):
    """Test 3: The culture is read before the .i18n marker."""
    file = handler.parse('{"a": "b"}', "common.de.i18n.json")
    assert file.culture == "de"


def test_interpolation_kept(handler):
    """Test 4: {{name}} interpolation survives a round trip."""
    file = handler.parse('{"greeting": "Hello {{name}}"}', "en.i18n.json")
    assert handler.parse(handler.render(file)).get_value("greeting") == "Hello {{name}}"
