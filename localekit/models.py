#!/usr/bin/env python3
"""
Data model shared by format handlers and services.

LocalizationEntry is the universal record every format is reduced to.
LocalizationFile is one parsed document. The report classes are the
value objects returned by scan, diff and check.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class LocalizationEntry:
    """
    One translation record.

    Attributes:
        key: Unique key within a file (dot-joined path for nested formats)
        value: Translated text; None means the value is absent
        comment: Free-text note (subtitle handlers keep the timing line here)
        source: Original-language text for bilingual formats such as XLIFF

    Equality and hashing use key and value only.
    """
    key: str
    value: Optional[str] = None
    comment: Optional[str] = field(default=None, compare=False)
    source: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        """Ensure key is string."""
        object.__setattr__(self, 'key', str(self.key))

    @property
    def is_empty(self) -> bool:
        """True when the value is absent or whitespace-only."""
        return self.value is None or not self.value.strip()


@dataclass(frozen=True)
class LocalizationFile:
    """
    One parsed localization document.

    Entries keep their original order. A key index (last entry wins on
    duplicate keys) is built once at construction.
    """
    path: str = ""
    entries: tuple[LocalizationEntry, ...] = ()
    culture: Optional[str] = None
    format_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'entries', tuple(self.entries))
        object.__setattr__(self, '_index', {e.key: e for e in self.entries})

    @property
    def entries_by_key(self) -> dict[str, LocalizationEntry]:
        return dict(self._index)

    @property
    def keys(self) -> list[str]:
        return list(self._index)

    @property
    def count(self) -> int:
        return len(self.entries)

    def get_entry(self, key: str) -> Optional[LocalizationEntry]:
        return self._index.get(key)

    def get_value(self, key: str) -> Optional[str]:
        entry = self._index.get(key)
        return entry.value if entry else None

    def contains_key(self, key: str) -> bool:
        return key in self._index


@dataclass(frozen=True)
class PlaceholderMismatch:
    """Key whose placeholders differ between base and target."""
    key: str
    base_placeholders: list[str] = field(default_factory=list)
    target_placeholders: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CultureComparisonResult:
    """Comparison of one target culture against the base culture."""
    culture: str
    file_path: Optional[str] = None
    missing_keys: list[str] = field(default_factory=list)
    orphan_keys: list[str] = field(default_factory=list)
    empty_values: list[str] = field(default_factory=list)
    placeholder_mismatches: list[PlaceholderMismatch] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(
            self.missing_keys
            or self.orphan_keys
            or self.empty_values
            or self.placeholder_mismatches
        )


@dataclass(frozen=True)
class ScanReport:
    """Result of scanning a directory for translation gaps."""
    base_culture: str
    target_cultures: list[str] = field(default_factory=list)
    results: list[CultureComparisonResult] = field(default_factory=list)

    @property
    def total_missing_keys(self) -> int:
        return sum(len(r.missing_keys) for r in self.results)

    @property
    def total_orphan_keys(self) -> int:
        return sum(len(r.orphan_keys) for r in self.results)

    @property
    def total_empty_values(self) -> int:
        return sum(len(r.empty_values) for r in self.results)

    @property
    def total_placeholder_mismatches(self) -> int:
        return sum(len(r.placeholder_mismatches) for r in self.results)

    @property
    def has_issues(self) -> bool:
        return (
            self.total_missing_keys > 0
            or self.total_orphan_keys > 0
            or self.total_empty_values > 0
        )

    def get_result(self, culture: str) -> Optional[CultureComparisonResult]:
        culture = culture.lower()
        for result in self.results:
            if result.culture == culture:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for item, result in zip(data['results'], self.results):
            item['has_issues'] = result.has_issues
        data['summary'] = {
            'missing_keys': self.total_missing_keys,
            'orphan_keys': self.total_orphan_keys,
            'empty_values': self.total_empty_values,
            'placeholder_mismatches': self.total_placeholder_mismatches,
            'has_issues': self.has_issues,
        }
        return data


@dataclass(frozen=True)
class DiffReport:
    """Key-level differences between two files."""
    first_path: str
    second_path: str
    only_in_first: list[str] = field(default_factory=list)
    only_in_second: list[str] = field(default_factory=list)
    empty_in_second: list[str] = field(default_factory=list)
    placeholder_mismatches: list[PlaceholderMismatch] = field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        return bool(
            self.only_in_first
            or self.only_in_second
            or self.empty_in_second
            or self.placeholder_mismatches
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['has_differences'] = self.has_differences
        return data


class ViolationSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CheckViolation:
    """A single rule violation found by check."""
    rule_name: str
    file_path: str
    message: str
    key: Optional[str] = None
    severity: ViolationSeverity = ViolationSeverity.WARNING

    def __str__(self) -> str:
        return f"[{self.severity.value.capitalize()}] {self.rule_name}: {self.message} ({self.file_path})"

    def to_dict(self) -> dict[str, Any]:
        return {
            'rule': self.rule_name,
            'file': self.file_path,
            'key': self.key,
            'message': self.message,
            'severity': self.severity.value,
        }


@dataclass(frozen=True)
class CheckReport:
    """All violations produced by a check run."""
    violations: list[CheckViolation] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    def violations_by_rule(self, rule_name: str) -> list[CheckViolation]:
        return [v for v in self.violations if v.rule_name.lower() == rule_name.lower()]

    def violations_by_severity(self, severity: ViolationSeverity) -> list[CheckViolation]:
        return [v for v in self.violations if v.severity == severity]

    def to_dict(self) -> dict[str, Any]:
        return {
            'violations': [v.to_dict() for v in self.violations],
            'summary': {
                'total': self.violation_count,
                'errors': len(self.violations_by_severity(ViolationSeverity.ERROR)),
                'warnings': len(self.violations_by_severity(ViolationSeverity.WARNING)),
                'info': len(self.violations_by_severity(ViolationSeverity.INFO)),
            },
        }
