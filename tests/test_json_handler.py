#!/usr/bin/env python3
"""
Tests for the JSON handler and the shared flatten/unflatten helpers.

Covers nested objects, array notation, scalars, nulls and error handling.
"""

import json

import pytest

from localekit.errors import MalformedContentError, PathNotFoundError
from localekit.formats.json_handler import JsonHandler, flatten_tree, set_nested, unflatten_entries
from localekit.models import LocalizationEntry


@pytest.fixture
def handler():
    """Fixture to create JsonHandler instance."""
    return JsonHandler()


def test_parse_nested(handler):
    """Test 1: Nested objects flatten to dot notation in document order."""
    content = json.dumps({
        "welcome": "Welcome",
        "user": {"greeting": "Hello {name}", "tags": ["new", "vip"]},
        "enabled": True,
        "count": 3,
        "missing": None,
    })
    file = handler.parse(content, "locales/en.json")

    assert file.culture == "en"
    assert file.format_id == "json"
    assert [(e.key, e.value) for e in file.entries] == [
        ("welcome", "Welcome"),
        ("user.greeting", "Hello {name}"),
        ("user.tags[0]", "new"),
        ("user.tags[1]", "vip"),
        ("enabled", "true"),
        ("count", "3"),
        ("missing", None),
    ]


def test_render_nested(handler):
    """Test 2: Dot keys are rebuilt as nested objects; None becomes ""."""
    file = handler.create_file([
        LocalizationEntry("home.title", "Welcome"),
        LocalizationEntry("home.subtitle", None),
        LocalizationEntry("footer", "Bye"),
    ])
    data = json.loads(handler.render(file))
    assert data == {"home": {"title": "Welcome", "subtitle": ""}, "footer": "Bye"}


def test_render_keeps_unicode(handler):
    """Test 3: Non-ASCII text is written as-is."""
    file = handler.create_file([LocalizationEntry("greeting", "Merhaba dünya")])
    assert "Merhaba dünya" in handler.render(file)


def test_round_trip(handler):
    """Test 4: Parsing rendered output yields the same pairs."""
    original = handler.create_file([
        LocalizationEntry("a.b", "1"),
        LocalizationEntry("a.c", "2"),
        LocalizationEntry("list[0]", "x"),
        LocalizationEntry("d", "quote \" and \\ backslash"),
    ])
    parsed = handler.parse(handler.render(original))
    assert set((e.key, e.value) for e in parsed.entries) == set((e.key, e.value) for e in original.entries)


def test_flatten_unflatten_inverse():
    """Test 5: Flattening then unflattening reproduces the tree."""
    tree = {"a": {"b": "x", "c": {"d": "y"}}, "e": "z"}
    entries = []
    flatten_tree(tree, "", entries, json.dumps)
    assert unflatten_entries(tuple(entries)) == tree


def test_set_nested_replaces_leaf_parent():
    """Test 6: A leaf standing where a parent is needed becomes a dict."""
    tree = {"a": "leaf"}
    set_nested(tree, "a.b", "x")
    assert tree == {"a": {"b": "x"}}


def test_empty_and_scalar_documents(handler):
    """Test 7: Empty content and bare scalars produce no entries."""
    assert handler.parse("").count == 0
    assert handler.parse("   \n").count == 0
    assert handler.parse("42").count == 0


def test_invalid_json(handler):
    """Test 8: Syntax errors raise MalformedContentError."""
    with pytest.raises(MalformedContentError):
        handler.parse('{"a": ')


def test_parse_bytes_handles_bom_and_bad_utf8(handler):
    """Test 9: A UTF-8 BOM is accepted; invalid UTF-8 is malformed."""
    file = handler.parse_bytes(b'\xef\xbb\xbf{"a": "b"}')
    assert file.get_value("a") == "b"
    with pytest.raises(MalformedContentError):
        handler.parse_bytes(b'{"a": "\xff"}')


def test_parse_file_and_write_file(handler, tmp_path):
    """Test 10: Files are read from and written to disk."""
    target = tmp_path / "out" / "tr.json"
    handler.write_file(handler.create_file([LocalizationEntry("k", "v")]), target)
    assert target.exists()

    file = handler.parse_file(target)
    assert file.culture == "tr"
    assert file.get_value("k") == "v"

    with pytest.raises(PathNotFoundError):
        handler.parse_file(tmp_path / "missing.json")


def test_duplicate_keys_are_kept(handler):
    """Test 11: Repeated object keys stay as separate entries in document order."""
    file = handler.parse('{"a": "1", "a": "2", "b": {"c": "x", "c": "y"}}')
    assert [(e.key, e.value) for e in file.entries] == [
        ("a", "1"),
        ("a", "2"),
        ("b.c", "x"),
        ("b.c", "y"),
    ]
    assert file.get_value("a") == "2"
