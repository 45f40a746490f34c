#!/usr/bin/env python3
"""
Tests for ConvertService single-file and directory conversion.
"""

import json
import os

from localekit.services import ConvertOptions, ConvertService

RESX = """<?xml version="1.0" encoding="utf-8"?>
<root>
  <data name="Home_Title" xml:space="preserve">
    <value>Welcome</value>
    <comment>Main page title</comment>
  </data>
  <data name="Home_Body" xml:space="preserve">
    <value>Body</value>
  </data>
</root>
"""


def test_resx_to_json_warns_about_comments(registry, write, tmp_path):
    """Test 1: Comments that JSON cannot store produce a warning."""
    source = write("Strings.en.resx", RESX)
    destination = str(tmp_path / "out" / "en.json")

    result = ConvertService(registry).convert(source, destination, ConvertOptions(to_format="json"))

    assert result.success, result.error_message
    assert len(result.warnings) == 1
    with open(destination, encoding="utf-8") as f:
        assert json.load(f) == {"Home": {"Title": "Welcome", "Body": "Body"}}


def test_existing_destination_needs_force(registry, write):
    """Test 2: An existing destination is only replaced with force."""
    source = write("en.json", '{"a": "1"}')
    destination = write("en.yaml", "old: value\n")
    service = ConvertService(registry)

    result = service.convert(source, destination, ConvertOptions(to_format="yaml"))
    assert not result.success
    assert result.error_message == "Destination file already exists. Use --force to overwrite."

    result = service.convert(source, destination, ConvertOptions(to_format="yaml", force=True))
    assert result.success
    with open(destination, encoding="utf-8") as f:
        assert f.read() == "a: '1'\n"


def test_failures_are_results(registry, write, tmp_path):
    """Test 3: Missing source, unknown format and read-only targets fail softly."""
    source = write("en.json", '{"a": "1"}')
    service = ConvertService(registry)

    missing = service.convert(str(tmp_path / "nope.json"), str(tmp_path / "x.yaml"), ConvertOptions(to_format="yaml"))
    assert not missing.success
    assert "not found" in missing.error_message

    unknown = service.convert(source, str(tmp_path / "x.bin"), ConvertOptions(to_format="bin"))
    assert not unknown.success
    assert "Unknown format" in unknown.error_message

    read_only = service.convert(source, str(tmp_path / "x.vb"), ConvertOptions(to_format="vb"))
    assert not read_only.success
    assert "read-only" in read_only.error_message
    assert not os.path.exists(tmp_path / "x.vb")


def test_culture_override(registry, write, tmp_path):
    """Test 4: The culture option is stamped on the output."""
    source = write("messages.json", '{"greeting": "Merhaba"}')
    destination = str(tmp_path / "messages.xlf")

    result = ConvertService(registry).convert(source, destination, ConvertOptions(to_format="xliff", culture="tr"))
    assert result.success
    with open(destination, encoding="utf-8") as f:
        assert 'target-language="tr"' in f.read()


def test_explicit_source_format(registry, write, tmp_path):
    """Test 5: --from overrides extension-based detection."""
    source = write("strings.txt", "key,value\ngreeting,Hello\n")
    destination = str(tmp_path / "strings.json")
    result = ConvertService(registry).convert(
        source, destination, ConvertOptions(to_format="json", from_format="csv")
    )
    assert result.success
    with open(destination, encoding="utf-8") as f:
        assert json.load(f) == {"greeting": "Hello"}


def test_convert_directory(registry, write, tmp_path):
    """Test 6: The relative layout is mirrored with the new extension."""
    write("src/en.json", '{"a": "1"}')
    write("src/sub/tr.json", '{"a": "2"}')
    write("src/readme.txt", "skip me")
    out = tmp_path / "out"

    results = ConvertService(registry).convert_directory(
        str(tmp_path / "src"), str(out), ConvertOptions(to_format="yaml")
    )

    assert len(results) == 2
    assert all(r.success for r in results)
    assert (out / "en.yaml").exists()
    assert (out / "sub" / "tr.yaml").exists()


def test_convert_directory_errors(registry, tmp_path):
    """Test 7: A missing directory or unknown format yields one failed result."""
    service = ConvertService(registry)
    results = service.convert_directory(str(tmp_path / "nope"), str(tmp_path / "out"), ConvertOptions(to_format="yaml"))
    assert len(results) == 1 and not results[0].success

    results = service.convert_directory(str(tmp_path), str(tmp_path / "out"), ConvertOptions(to_format="bin"))
    assert len(results) == 1 and "Unknown format" in results[0].error_message
