#!/usr/bin/env python3
"""
Tests for extension handling and target path generation.
"""

import os

from localekit.paths import (
    generate_target_path,
    get_extension,
    get_file_name_without_extension,
    replace_extension,
)


def test_compound_extension():
    """Test 1: .i18n.json is one extension."""
    assert get_extension("common.en.i18n.json") == ".i18n.json"
    assert get_extension("locales/en.json") == ".json"
    assert get_extension("README") == ""
    assert get_file_name_without_extension("common.en.i18n.json") == "common.en"
    assert get_file_name_without_extension("dir/en.resx") == "en"


def test_replace_extension():
    """Test 2: Only the extension changes."""
    assert replace_extension(os.path.join("a", "b", "en.resx"), "json") == os.path.join("a", "b", "en.json")
    assert replace_extension("en.i18n.json", ".yaml") == "en.yaml"


def test_culture_segment_replaced(tmp_path):
    """Test 3: The culture segment of the name is swapped."""
    root = tmp_path / "locales"
    root.mkdir()
    for name, expected in [
        ("en.json", "tr.json"),
        ("common.en.json", "common.tr.json"),
        ("en.i18n.json", "tr.i18n.json"),
        ("common.en.i18n.json", "common.tr.i18n.json"),
    ]:
        source = str(root / name)
        assert generate_target_path(source, str(root), None, "en", "tr") == str(root / expected)


def test_culture_directory_replaced(tmp_path):
    """Test 4: locales/en/translation.json maps to locales/tr/translation.json."""
    root = tmp_path / "locales"
    (root / "en").mkdir(parents=True)
    source = str(root / "en" / "translation.json")

    assert generate_target_path(source, str(root), None, "en", "tr") == str(root / "tr" / "translation.json")
    out = str(tmp_path / "out")
    assert generate_target_path(source, str(root), out, "en", "tr") == os.path.join(out, "tr", "translation.json")


def test_directory_structure_mirrored(tmp_path):
    """Test 5: Subdirectories below the input are recreated under the output."""
    root = tmp_path / "locales"
    (root / "admin").mkdir(parents=True)
    source = str(root / "admin" / "admin.en.json")
    out = str(tmp_path / "out")
    assert generate_target_path(source, str(root), out, "en", "tr") == os.path.join(out, "admin", "admin.tr.json")


def test_file_input(tmp_path):
    """Test 6: A single file input writes beside the source or into the output."""
    root = tmp_path / "locales"
    root.mkdir()
    source = root / "en.json"
    source.write_text("{}", encoding="utf-8")

    assert generate_target_path(str(source), str(source), None, "en", "tr") == str(root / "tr.json")
    out = str(tmp_path / "out")
    assert generate_target_path(str(source), str(source), out, "en", "tr") == os.path.join(out, "tr.json")


def test_name_without_culture(tmp_path):
    """Test 7: A name without culture segment gets the target appended."""
    root = tmp_path / "locales"
    root.mkdir()
    source = str(root / "messages.json")
    assert generate_target_path(source, str(root), None, "en", "tr") == str(root / "messages.tr.json")
