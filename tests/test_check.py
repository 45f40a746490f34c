#!/usr/bin/env python3
"""
Tests for CheckService rules and severities.
"""

import json

import pytest

from localekit.errors import PathNotFoundError
from localekit.models import LocalizationEntry, LocalizationFile, ViolationSeverity
from localekit.services import CheckOptions, CheckRules, CheckService


def test_duplicate_key_reported_once(registry):
    """Test 1: Two entries with one key give exactly one violation."""
    file = LocalizationFile(
        path="en.json",
        entries=[LocalizationEntry("a", "1"), LocalizationEntry("a", "2")],
    )
    report = CheckService(registry).check(file, CheckOptions(rules=[CheckRules.NO_DUPLICATE_KEYS]))

    assert report.violation_count == 1
    violation = report.violations[0]
    assert violation.key == "a"
    assert violation.severity == ViolationSeverity.ERROR
    assert violation.message == "Duplicate key 'a' appears 2 times"


def test_directory_check_with_base(registry, write, tmp_path):
    """Test 2: Every rule runs against the merged base culture."""
    write("en.json", json.dumps({"a": "Hi {name}", "b": "B"}))
    write("tr.json", json.dumps({"a": "Merhaba", "c": "", "d": " x "}))

    report = CheckService(registry).check(str(tmp_path), CheckOptions(base_culture="en"))

    assert [v.key for v in report.violations_by_rule(CheckRules.NO_EMPTY_VALUES)] == ["c"]
    assert [v.key for v in report.violations_by_rule(CheckRules.NO_ORPHAN_KEYS)] == ["c", "d"]
    assert [v.key for v in report.violations_by_rule(CheckRules.CONSISTENT_PLACEHOLDERS)] == ["a"]
    assert [v.key for v in report.violations_by_rule(CheckRules.NO_TRAILING_WHITESPACE)] == ["d"]
    assert report.violation_count == 5
    assert all(v.file_path.endswith("tr.json") for v in report.violations)

    assert len(report.violations_by_severity(ViolationSeverity.ERROR)) == 1
    assert len(report.violations_by_severity(ViolationSeverity.WARNING)) == 3
    assert len(report.violations_by_severity(ViolationSeverity.INFO)) == 1


def test_placeholder_message(registry):
    """Test 3: Placeholder violations list expected and found placeholders."""
    base = LocalizationFile(entries=[LocalizationEntry("a", "{x} {y}")])
    target = LocalizationFile(path="tr.json", entries=[LocalizationEntry("a", "{x}")])
    report = CheckService(registry).check(target, CheckOptions(base_culture="en"), base=base)
    violation = report.violations_by_rule(CheckRules.CONSISTENT_PLACEHOLDERS)[0]
    assert violation.message == "Placeholder mismatch: expected [{x}, {y}], found [{x}]"


def test_without_base_only_file_rules_run(registry, write, tmp_path):
    """Test 4: Orphan and placeholder rules need a base culture."""
    write("tr.json", json.dumps({"a": "", "b": "{x}"}))
    report = CheckService(registry).check(str(tmp_path))
    assert [v.rule_name for v in report.violations] == [CheckRules.NO_EMPTY_VALUES]


def test_rule_selection(registry):
    """Test 5: Rules are selected by name; unknown names are ignored."""
    options = CheckOptions(rules=["No-Empty-Values", "bogus", " "])
    assert options.active_rules() == [CheckRules.NO_EMPTY_VALUES]
    assert CheckOptions().active_rules() == CheckRules.ALL

    file = LocalizationFile(path="x", entries=[LocalizationEntry("a", ""), LocalizationEntry("b", " y")])
    report = CheckService(registry).check(file, options)
    assert [v.key for v in report.violations] == ["a"]


def test_clean_files(registry, write, tmp_path):
    """Test 6: Consistent files have no violations."""
    write("en.json", json.dumps({"a": "Hello {name}"}))
    write("tr.json", json.dumps({"a": "Merhaba {name}"}))
    report = CheckService(registry).check(str(tmp_path), CheckOptions(base_culture="en"))
    assert not report.has_violations


def test_missing_path(registry, tmp_path):
    """Test 7: A missing path raises PathNotFoundError."""
    with pytest.raises(PathNotFoundError):
        CheckService(registry).check(str(tmp_path / "nope"))


def test_duplicate_keys_in_files(registry, write, tmp_path):
    """Test 8: Duplicate keys written in JSON and YAML files are reported."""
    write("en.json", '{"a": "1", "a": "2"}')
    write("tr.yaml", "greeting: Merhaba\ngreeting: Selam\n")

    report = CheckService(registry).check(str(tmp_path), CheckOptions(rules=[CheckRules.NO_DUPLICATE_KEYS]))

    assert [(v.key, v.severity) for v in report.violations] == [
        ("a", ViolationSeverity.ERROR),
        ("greeting", ViolationSeverity.ERROR),
    ]
    assert report.violations[0].message == "Duplicate key 'a' appears 2 times"


def test_single_file_uses_sibling_base(registry, write):
    """Test 9: Checking one file with a base culture compares against base files beside it."""
    write("locales/en.json", json.dumps({"a": "Hi {name}"}))
    target = write("locales/tr.json", json.dumps({"a": "Merhaba", "b": "B"}))

    report = CheckService(registry).check(target, CheckOptions(base_culture="en"))

    assert [v.key for v in report.violations_by_rule(CheckRules.NO_ORPHAN_KEYS)] == ["b"]
    assert [v.key for v in report.violations_by_rule(CheckRules.CONSISTENT_PLACEHOLDERS)] == ["a"]
    assert all(v.file_path.endswith("tr.json") for v in report.violations)


def test_single_file_without_sibling_base(registry, write):
    """Test 10: Without a base file nearby only the per-file rules run."""
    target = write("tr.json", json.dumps({"a": "", "b": "B"}))
    report = CheckService(registry).check(target, CheckOptions(base_culture="en"))
    assert [v.rule_name for v in report.violations] == [CheckRules.NO_EMPTY_VALUES]
