#!/usr/bin/env python3
"""
Scan service: find missing, orphan and empty keys across cultures.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..errors import LocaleError, PathNotFoundError
from ..formats import FormatRegistry
from ..models import CultureComparisonResult, LocalizationFile, ScanReport
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN
from .compare import compare_entries, merge_entries

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """Options for scan and file discovery."""
    base_culture: str = "en"
    target_cultures: list[str] = field(default_factory=list)
    recursive: bool = True
    ignore_patterns: list[str] = field(default_factory=list)
    check_placeholders: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN


def iter_supported_paths(path: str, registry: FormatRegistry, recursive: bool = True) -> Iterator[str]:
    """Yield supported file paths under a directory in a stable order."""
    if recursive:
        for root, dirs, files in os.walk(path):
            dirs.sort()
            for name in sorted(files):
                file_path = os.path.join(root, name)
                if registry.is_supported(file_path):
                    yield file_path
    else:
        for name in sorted(os.listdir(path)):
            file_path = os.path.join(path, name)
            if os.path.isfile(file_path) and registry.is_supported(file_path):
                yield file_path


def should_ignore(file_path: str, patterns: list[str]) -> bool:
    """Check whether the file name contains any ignore substring."""
    name = os.path.basename(file_path).lower()
    return any(pattern.lower() in name for pattern in patterns if pattern)


class ScanService:
    """Compares target cultures against a base culture."""

    def __init__(self, registry: FormatRegistry):
        self.registry = registry

    def discover_files(self, path: str, options: Optional[ScanOptions] = None) -> Iterator[LocalizationFile]:
        """
        Lazily parse every supported file under a path.

        Unparsable files and files matching an ignore pattern are skipped.

        Args:
            path: File or directory
            options: Discovery options (recursive, ignore_patterns)

        Yields:
            Parsed LocalizationFile objects

        Raises:
            PathNotFoundError: path does not exist
        """
        options = options or ScanOptions()

        if os.path.isfile(path):
            paths = [path]
        elif os.path.isdir(path):
            paths = iter_supported_paths(path, self.registry, options.recursive)
        else:
            raise PathNotFoundError(f"Path not found: {path}")

        for file_path in paths:
            if should_ignore(file_path, options.ignore_patterns):
                logger.debug("Ignoring %s", file_path)
                continue

            handler = self.registry.get_for_file(file_path)
            if handler is None:
                continue

            try:
                yield handler.parse_file(file_path)
            except (LocaleError, OSError) as e:
                logger.debug("Skipping %s: %s", file_path, e)

    def scan(self, path: str, options: ScanOptions) -> ScanReport:
        """
        Scan a path and compare every target culture with the base culture.

        Args:
            path: File or directory to scan
            options: Scan options

        Returns:
            ScanReport; empty when the base culture has no files
        """
        base_culture = options.base_culture.lower()

        files_by_culture: dict[str, list[LocalizationFile]] = {}
        for file in self.discover_files(path, options):
            if not file.culture:
                continue
            files_by_culture.setdefault(file.culture.lower(), []).append(file)

        base_files = files_by_culture.get(base_culture)
        if not base_files:
            return ScanReport(base_culture=base_culture)

        base_entries = merge_entries(base_files)

        if options.target_cultures:
            target_cultures = [c.lower() for c in options.target_cultures]
        else:
            target_cultures = [c for c in files_by_culture if c != base_culture]

        results = []
        for culture in target_cultures:
            target_files = files_by_culture.get(culture, [])
            comparison = compare_entries(
                base_entries,
                merge_entries(target_files),
                options.check_placeholders,
                options.placeholder_pattern,
            )
            results.append(CultureComparisonResult(
                culture=culture,
                file_path=target_files[0].path if target_files else None,
                missing_keys=comparison.missing_keys,
                orphan_keys=comparison.orphan_keys,
                empty_values=comparison.empty_values,
                placeholder_mismatches=comparison.placeholder_mismatches,
            ))

        return ScanReport(
            base_culture=base_culture,
            target_cultures=target_cultures,
            results=results,
        )
