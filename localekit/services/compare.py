#!/usr/bin/env python3
"""
Key comparison shared by scan, diff and check.

Works on key -> entry maps so that callers can merge several files of one
culture before comparing.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Union

from ..models import LocalizationEntry, LocalizationFile, PlaceholderMismatch
from ..placeholders import compile_pattern, extract_placeholders

EntryMap = dict[str, LocalizationEntry]


@dataclass
class KeyComparison:
    """Raw comparison of a base map against a target map."""
    missing_keys: list[str] = field(default_factory=list)
    orphan_keys: list[str] = field(default_factory=list)
    empty_values: list[str] = field(default_factory=list)
    placeholder_mismatches: list[PlaceholderMismatch] = field(default_factory=list)


def merge_entries(files: Iterable[LocalizationFile]) -> EntryMap:
    """Merge entries of several files by key; later files win."""
    merged: EntryMap = {}
    for file in files:
        for entry in file.entries:
            merged[entry.key] = entry
    return merged


def find_placeholder_mismatches(
    base: EntryMap,
    target: EntryMap,
    pattern: Union[str, re.Pattern, None] = None,
) -> list[PlaceholderMismatch]:
    """Keys present in both maps whose sorted placeholders differ."""
    regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
    mismatches = []
    for key, target_entry in target.items():
        base_entry = base.get(key)
        if base_entry is None:
            continue
        base_placeholders = extract_placeholders(base_entry.value, regex)
        target_placeholders = extract_placeholders(target_entry.value, regex)
        if base_placeholders != target_placeholders:
            mismatches.append(PlaceholderMismatch(
                key=key,
                base_placeholders=base_placeholders,
                target_placeholders=target_placeholders,
            ))
    return mismatches


def compare_entries(
    base: EntryMap,
    target: EntryMap,
    check_placeholders: bool = True,
    pattern: Union[str, re.Pattern, None] = None,
) -> KeyComparison:
    """
    Compare a target map against a base map.

    Args:
        base: Base-culture entries by key
        target: Target-culture entries by key
        check_placeholders: Whether to compute placeholder mismatches
        pattern: Placeholder regex or preset name

    Returns:
        KeyComparison with lists in map iteration order
    """
    return KeyComparison(
        missing_keys=[key for key in base if key not in target],
        orphan_keys=[key for key in target if key not in base],
        empty_values=[key for key, entry in target.items() if entry.is_empty],
        placeholder_mismatches=(
            find_placeholder_mismatches(base, target, pattern) if check_placeholders else []
        ),
    )
