#!/usr/bin/env python3
"""
Check service: rule-based validation of localization files.

Rules:
    no-empty-values          every entry has a non-blank value
    no-duplicate-keys        no key appears twice in one file
    no-orphan-keys           no key that the base culture lacks
    consistent-placeholders  same placeholders as the base culture
    no-trailing-whitespace   no leading or trailing whitespace in values
"""

import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from ..formats import FormatRegistry
from ..models import CheckReport, CheckViolation, LocalizationFile, ViolationSeverity
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN
from .compare import EntryMap, find_placeholder_mismatches, merge_entries
from .scan import ScanOptions, ScanService

logger = logging.getLogger(__name__)


class CheckRules:
    NO_EMPTY_VALUES = "no-empty-values"
    NO_DUPLICATE_KEYS = "no-duplicate-keys"
    NO_ORPHAN_KEYS = "no-orphan-keys"
    CONSISTENT_PLACEHOLDERS = "consistent-placeholders"
    NO_TRAILING_WHITESPACE = "no-trailing-whitespace"

    ALL = [
        NO_EMPTY_VALUES,
        NO_DUPLICATE_KEYS,
        NO_ORPHAN_KEYS,
        CONSISTENT_PLACEHOLDERS,
        NO_TRAILING_WHITESPACE,
    ]


@dataclass
class CheckOptions:
    """Options for check. An empty rule list runs every rule."""
    rules: list[str] = field(default_factory=list)
    base_culture: Optional[str] = None
    recursive: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN

    def active_rules(self) -> list[str]:
        if not self.rules:
            return list(CheckRules.ALL)
        selected = []
        for rule in self.rules:
            name = rule.strip().lower()
            if name in CheckRules.ALL:
                selected.append(name)
            elif name:
                logger.warning("Unknown check rule: %s", rule)
        return selected


class CheckService:
    """Runs check rules over files or directories."""

    def __init__(self, registry: FormatRegistry):
        self.registry = registry
        self.scanner = ScanService(registry)

    def check(
        self,
        target: Union[str, LocalizationFile],
        options: Optional[CheckOptions] = None,
        base: Optional[LocalizationFile] = None,
    ) -> CheckReport:
        """
        Validate a file, or every supported file under a path.

        In path mode the base-culture files found under the path provide the
        reference for orphan and placeholder rules; a single file path uses
        the base-culture files in its directory. When a LocalizationFile is
        given, pass its reference as ``base``.

        Args:
            target: Path or parsed file
            options: Check options
            base: Reference file for single-file checks

        Returns:
            CheckReport with all violations
        """
        options = options or CheckOptions()

        if isinstance(target, LocalizationFile):
            base_entries = base.entries_by_key if base is not None else None
            return CheckReport(violations=self.check_file(target, options, base_entries))

        scan_options = ScanOptions(recursive=options.recursive)
        files = list(self.scanner.discover_files(target, scan_options))

        base_files = None
        if options.base_culture and os.path.isfile(target):
            # A single file is checked against base-culture files beside it
            directory = os.path.dirname(os.path.abspath(target))
            siblings = self.scanner.discover_files(directory, ScanOptions(recursive=False))
            base_files = [f for f in siblings if (f.culture or "").lower() == options.base_culture.lower()]

        return CheckReport(violations=self.check_files(files, options, base_files))

    def check_files(
        self,
        files: Iterable[LocalizationFile],
        options: CheckOptions,
        base_files: Optional[list[LocalizationFile]] = None,
    ) -> list[CheckViolation]:
        """
        Run rules over a set of files, using base-culture files as reference.

        Base files default to the base-culture members of ``files``.
        """
        files = list(files)
        base_culture = options.base_culture.lower() if options.base_culture else None

        base_entries = None
        if base_culture:
            if base_files is None:
                base_files = [f for f in files if f.culture and f.culture.lower() == base_culture]
            if base_files:
                base_entries = merge_entries(base_files)
            else:
                logger.debug(
                    "No %s files found; skipping %s and %s",
                    base_culture, CheckRules.NO_ORPHAN_KEYS, CheckRules.CONSISTENT_PLACEHOLDERS,
                )

        violations = []
        for file in files:
            is_base = base_culture is not None and (file.culture or "").lower() == base_culture
            # Base-culture files are the reference, not a comparison target
            reference = base_entries if file.culture and not is_base else None
            violations.extend(self.check_file(file, options, reference))
        return violations

    def check_file(
        self,
        file: LocalizationFile,
        options: CheckOptions,
        base_entries: Optional[EntryMap] = None,
    ) -> list[CheckViolation]:
        """Run the selected rules over a single file."""
        rules = options.active_rules()
        violations: list[CheckViolation] = []

        if CheckRules.NO_EMPTY_VALUES in rules:
            violations.extend(self._check_empty_values(file))
        if CheckRules.NO_DUPLICATE_KEYS in rules:
            violations.extend(self._check_duplicate_keys(file))
        if base_entries is not None:
            if CheckRules.NO_ORPHAN_KEYS in rules:
                violations.extend(self._check_orphan_keys(file, base_entries, options))
            if CheckRules.CONSISTENT_PLACEHOLDERS in rules:
                violations.extend(self._check_placeholders(file, base_entries, options))
        if CheckRules.NO_TRAILING_WHITESPACE in rules:
            violations.extend(self._check_trailing_whitespace(file))

        return violations

    def _check_empty_values(self, file: LocalizationFile) -> list[CheckViolation]:
        return [
            CheckViolation(
                rule_name=CheckRules.NO_EMPTY_VALUES,
                file_path=file.path,
                key=entry.key,
                message=f"Empty value for key '{entry.key}'",
                severity=ViolationSeverity.WARNING,
            )
            for entry in file.entries
            if entry.is_empty
        ]

    def _check_duplicate_keys(self, file: LocalizationFile) -> list[CheckViolation]:
        counts = Counter(entry.key for entry in file.entries)
        return [
            CheckViolation(
                rule_name=CheckRules.NO_DUPLICATE_KEYS,
                file_path=file.path,
                key=key,
                message=f"Duplicate key '{key}' appears {count} times",
                severity=ViolationSeverity.ERROR,
            )
            for key, count in counts.items()
            if count > 1
        ]

    def _check_orphan_keys(
        self, file: LocalizationFile, base_entries: EntryMap, options: CheckOptions
    ) -> list[CheckViolation]:
        return [
            CheckViolation(
                rule_name=CheckRules.NO_ORPHAN_KEYS,
                file_path=file.path,
                key=key,
                message=f"Key '{key}' does not exist in base culture '{options.base_culture}'",
                severity=ViolationSeverity.WARNING,
            )
            for key in file.entries_by_key
            if key not in base_entries
        ]

    def _check_placeholders(
        self, file: LocalizationFile, base_entries: EntryMap, options: CheckOptions
    ) -> list[CheckViolation]:
        mismatches = find_placeholder_mismatches(
            base_entries, file.entries_by_key, options.placeholder_pattern
        )
        return [
            CheckViolation(
                rule_name=CheckRules.CONSISTENT_PLACEHOLDERS,
                file_path=file.path,
                key=mismatch.key,
                message=(
                    f"Placeholder mismatch: expected [{', '.join(mismatch.base_placeholders)}], "
                    f"found [{', '.join(mismatch.target_placeholders)}]"
                ),
                severity=ViolationSeverity.ERROR,
            )
            for mismatch in mismatches
        ]

    def _check_trailing_whitespace(self, file: LocalizationFile) -> list[CheckViolation]:
        return [
            CheckViolation(
                rule_name=CheckRules.NO_TRAILING_WHITESPACE,
                file_path=file.path,
                key=entry.key,
                message=f"Value for key '{entry.key}' has leading or trailing whitespace",
                severity=ViolationSeverity.INFO,
            )
            for entry in file.entries
            if entry.value and entry.value.strip() and entry.value != entry.value.strip()
        ]
