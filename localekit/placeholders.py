#!/usr/bin/env python3
"""
Placeholder extraction shared by scan, diff and check.

Placeholders are compared as sorted lists, so "{b} and {a}" and
"{a} and {b}" are consistent while "{a}" and "{a} {b}" are not.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

DEFAULT_PLACEHOLDER_PATTERN = r'\{+\w+\}+'


@dataclass(frozen=True)
class PlaceholderPattern:
    """Named placeholder syntax."""
    name: str
    pattern: str  # Regex pattern

    def find_all(self, text: str) -> list[str]:
        """Find all placeholders matching this pattern, sorted."""
        return extract_placeholders(text, self.pattern)


# Common placeholder syntaxes, selectable by name from the CLI
PLACEHOLDER_PATTERNS = {
    'default': PlaceholderPattern('default', DEFAULT_PLACEHOLDER_PATTERN),   # {name}, {{name}}
    'i18next': PlaceholderPattern('i18next', r'\{\{\w+\}\}'),               # {{name}}
    'icu': PlaceholderPattern('icu', r'\{\w+\}'),                           # {name}
    'printf': PlaceholderPattern('printf', r'%[\d$]*[sd]'),                 # %s, %1$s, %d
    'printf_named': PlaceholderPattern('printf_named', r'%\(\w+\)s'),       # %(name)s
    'ruby': PlaceholderPattern('ruby', r'%\{\w+\}'),                        # %{name}
    'laravel': PlaceholderPattern('laravel', r':\w+'),                      # :name
    'android': PlaceholderPattern('android', r'%\d+\$[sd]'),                # %1$s, %2$d
    'ios': PlaceholderPattern('ios', r'%@|%ld|%d|%f'),                      # %@, %d
}


def resolve_pattern(pattern: Optional[str]) -> str:
    """Return the regex for a preset name, or the pattern itself."""
    if not pattern:
        return DEFAULT_PLACEHOLDER_PATTERN
    preset = PLACEHOLDER_PATTERNS.get(pattern.lower())
    return preset.pattern if preset else pattern


@lru_cache(maxsize=32)
def compile_pattern(pattern: Optional[str] = None) -> re.Pattern:
    """Compile a placeholder pattern or preset name."""
    regex = resolve_pattern(pattern)
    try:
        return re.compile(regex)
    except re.error as e:
        raise ValueError(f"Invalid placeholder pattern '{regex}': {e}") from e


def extract_placeholders(
    value: Optional[str],
    pattern: Union[str, re.Pattern, None] = None,
) -> list[str]:
    """
    Extract placeholders from a value.

    Args:
        value: Text to search; None and "" yield no placeholders
        pattern: Regex, preset name or compiled pattern (default {name} style)

    Returns:
        All non-overlapping matches, sorted lexicographically
    """
    if not value:
        return []
    regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
    return sorted(m.group(0) for m in regex.finditer(value))


def placeholders_match(
    first: Optional[str],
    second: Optional[str],
    pattern: Union[str, re.Pattern, None] = None,
) -> bool:
    """Check whether two values carry the same placeholders."""
    return extract_placeholders(first, pattern) == extract_placeholders(second, pattern)
