#!/usr/bin/env python3
"""
JSON format handler for nested key-value localization files.

Nested objects are flattened to dot-notation keys and rebuilt from them
on write. The tree helpers here are shared with the YAML handler.
"""

import json
from typing import Any, Callable, Optional

from ..errors import MalformedContentError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler


class KeyValuePairs(list):
    """Mapping parsed as an ordered list of (key, value) pairs; keeps duplicate keys."""


def flatten_tree(
    obj: Any,
    prefix: str,
    entries: list[LocalizationEntry],
    format_scalar: Callable[[Any], str],
) -> None:
    """
    Recursively flatten a nested tree to dot-notation entries.

    Args:
        obj: Current node (dict, KeyValuePairs, list, or scalar)
        prefix: Current key prefix (dot-separated)
        entries: List to append entries to
        format_scalar: Converts non-string scalars to their text form
    """
    if isinstance(obj, (dict, KeyValuePairs)):
        pairs = obj.items() if isinstance(obj, dict) else obj
        for key, value in pairs:
            str_key = str(key)
            new_prefix = f"{prefix}.{str_key}" if prefix else str_key
            flatten_tree(value, new_prefix, entries, format_scalar)

    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            flatten_tree(item, f"{prefix}[{i}]", entries, format_scalar)

    elif not prefix:
        # A bare scalar document has no key to attach to
        return

    elif obj is None:
        entries.append(LocalizationEntry(key=prefix, value=None))

    elif isinstance(obj, str):
        entries.append(LocalizationEntry(key=prefix, value=obj))

    else:
        entries.append(LocalizationEntry(key=prefix, value=format_scalar(obj)))


def set_nested(tree: dict, key: str, value: Any) -> None:
    """
    Set a value at a dot-notation path, creating intermediate dicts.

    A leaf standing where a parent is needed is replaced by a new dict.

    Args:
        tree: Root dictionary
        key: Dot-separated key
        value: Value to store at the path
    """
    parts = key.split('.')
    node = tree
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child

    final_key = parts[-1]
    if final_key:
        node[final_key] = value


def unflatten_entries(entries: tuple[LocalizationEntry, ...]) -> dict:
    """Rebuild a nested dict from flat entries; absent values become ""."""
    tree: dict = {}
    for entry in entries:
        set_nested(tree, entry.key, entry.value if entry.value is not None else "")
    return tree


class JsonHandler(FormatHandler):
    """
    Handler for nested JSON localization files.

    Supports structures like:
    ```json
    {
      "welcome": "Welcome",
      "user": {
        "greeting": "Hello {name}",
        "tags": ["new", "vip"]
      },
      "enabled": true
    }
    ```

    Keys are flattened to dot notation: "user.greeting". Array items get an
    index suffix ("user.tags[0]"), null becomes an absent value and other
    scalars keep their JSON text ("true").
    """

    @property
    def format_id(self) -> str:
        return "json"

    @property
    def file_extensions(self) -> list[str]:
        return ["json"]

    @property
    def supports_comments(self) -> bool:
        return False

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse JSON content into localization entries.

        Args:
            content: Raw JSON file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with flattened keys
        """
        if not content.strip():
            return self.create_file([], path)

        try:
            data = json.loads(content, object_pairs_hook=KeyValuePairs)
        except json.JSONDecodeError as e:
            raise MalformedContentError(f"Invalid JSON: {e}") from e

        entries: list[LocalizationEntry] = []
        flatten_tree(data, "", entries, json.dumps)
        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        """
        Rebuild nested JSON from flat entries.

        Args:
            file: File to serialize

        Returns:
            Indented JSON document
        """
        return json.dumps(unflatten_entries(file.entries), indent=2, ensure_ascii=False) + "\n"
