#!/usr/bin/env python3
"""
Diff service: key-level comparison of exactly two files.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..formats import FormatRegistry
from ..models import DiffReport, LocalizationFile
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN
from .compare import compare_entries


@dataclass
class DiffOptions:
    """Options for diff."""
    check_placeholders: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN


class DiffService:
    """Compares a second file against a first one."""

    def __init__(self, registry: FormatRegistry):
        self.registry = registry

    def load(self, path: str) -> LocalizationFile:
        """Parse a file with the handler registered for its extension."""
        return self.registry.require_for_file(path).parse_file(path)

    def diff(
        self,
        first: Union[str, LocalizationFile],
        second: Union[str, LocalizationFile],
        options: Optional[DiffOptions] = None,
    ) -> DiffReport:
        """
        Compare two files.

        Args:
            first: Reference file or its path
            second: File compared against the reference, or its path
            options: Diff options

        Returns:
            DiffReport

        Raises:
            PathNotFoundError: a path does not exist
            UnsupportedFormatError: no handler for a path
            MalformedContentError: a file cannot be parsed
        """
        options = options or DiffOptions()
        if isinstance(first, str):
            first = self.load(first)
        if isinstance(second, str):
            second = self.load(second)

        comparison = compare_entries(
            first.entries_by_key,
            second.entries_by_key,
            options.check_placeholders,
            options.placeholder_pattern,
        )

        return DiffReport(
            first_path=first.path,
            second_path=second.path,
            only_in_first=comparison.missing_keys,
            only_in_second=comparison.orphan_keys,
            empty_in_second=comparison.empty_values,
            placeholder_mismatches=comparison.placeholder_mismatches,
        )
