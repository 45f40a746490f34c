#!/usr/bin/env python3
"""
Tests for YAML format handler.
Tests parsing, array handling, scalars, and reconstruction.
"""

import pytest
import yaml

from localekit.errors import MalformedContentError
from localekit.formats import YamlHandler
from localekit.models import LocalizationEntry


@pytest.fixture
def handler():
    """Fixture to create YamlHandler instance."""
    return YamlHandler()


def test_parse_nested_and_arrays(handler):
    """Test 1: Nested maps and sequences flatten like JSON."""
    content = """home:
  title: Welcome
  items:
    - First
    - Second
enabled: true
count: 3
"""
    file = handler.parse(content, "config/locales/en.yml")
    assert file.culture == "en"
    assert [(e.key, e.value) for e in file.entries] == [
        ("home.title", "Welcome"),
        ("home.items[0]", "First"),
        ("home.items[1]", "Second"),
        ("enabled", "true"),
        ("count", "3"),
    ]


def test_render_nested(handler):
    """Test 2: Dot keys become nested YAML maps in entry order."""
    file = handler.create_file([
        LocalizationEntry("home.title", "Hoş geldiniz"),
        LocalizationEntry("home.body", "Metin"),
    ])
    output = handler.render(file)
    assert "Hoş geldiniz" in output
    assert yaml.safe_load(output) == {"home": {"title": "Hoş geldiniz", "body": "Metin"}}
    assert output.index("title") < output.index("body")


def test_round_trip(handler):
    """Test 3: Rendered YAML parses back to the same pairs."""
    original = handler.create_file([
        LocalizationEntry("a.b", "1 and: colon"),
        LocalizationEntry("c", "multi\nline"),
    ])
    parsed = handler.parse(handler.render(original))
    assert [(e.key, e.value) for e in parsed.entries] == [("a.b", "1 and: colon"), ("c", "multi\nline")]


def test_empty_document(handler):
    """Test 4: Empty YAML has no entries and an empty file renders as ""."""
    assert handler.parse("").count == 0
    assert handler.render(handler.create_file([])) == ""


def test_invalid_yaml(handler):
    """Test 5: Syntax errors raise MalformedContentError."""
    with pytest.raises(MalformedContentError):
        handler.parse("a: [unclosed")


def test_duplicate_keys_are_kept(handler):
    """Test 6: Repeated mapping keys stay as separate entries."""
    file = handler.parse("a: one\na: two\n")
    assert [(e.key, e.value) for e in file.entries] == [("a", "one"), ("a", "two")]


def test_merge_keys_override(handler):
    """Test 7: Keys merged with << are overridden by local keys, not duplicated."""
    content = """base: &base
  title: Base
  body: Text
page:
  <<: *base
  title: Page
"""
    file = handler.parse(content)
    assert [(e.key, e.value) for e in file.entries] == [
        ("base.title", "Base"),
        ("base.body", "Text"),
        ("page.title", "Page"),
        ("page.body", "Text"),
    ]
