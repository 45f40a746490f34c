#!/usr/bin/env python3
"""
Tests for placeholder extraction and presets.
"""

import pytest

from localekit.placeholders import (
    DEFAULT_PLACEHOLDER_PATTERN,
    PLACEHOLDER_PATTERNS,
    compile_pattern,
    extract_placeholders,
    placeholders_match,
    resolve_pattern,
)


def test_extract_sorted():
    """Test 1: Placeholders come back sorted."""
    assert extract_placeholders("Hello {name}, you have {count} messages") == ["{count}", "{name}"]


def test_double_braces_match_default_pattern():
    """Test 2: The default pattern also accepts {{name}}."""
    assert extract_placeholders("Hi {{user}}") == ["{{user}}"]


def test_empty_values_have_no_placeholders():
    """Test 3: None and "" yield an empty list."""
    assert extract_placeholders(None) == []
    assert extract_placeholders("") == []


def test_order_insensitive_match():
    """Test 4: Reordered placeholders still match; a missing one does not."""
    assert placeholders_match("{b} and {a}", "{a} and {b}")
    assert not placeholders_match("{a}", "{a} {b}")


def test_presets():
    """Test 5: Preset names resolve to their regex."""
    assert resolve_pattern(None) == DEFAULT_PLACEHOLDER_PATTERN
    assert resolve_pattern("PRINTF") == PLACEHOLDER_PATTERNS["printf"].pattern
    assert resolve_pattern(r"%\w") == r"%\w"
    assert extract_placeholders("%s of %d", "printf") == ["%d", "%s"]
    assert PLACEHOLDER_PATTERNS["ruby"].find_all("Hi %{name}") == ["%{name}"]


def test_invalid_pattern():
    """Test 6: A broken regex raises ValueError."""
    with pytest.raises(ValueError):
        compile_pattern("(unclosed")
