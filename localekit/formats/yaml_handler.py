#!/usr/bin/env python3
"""
YAML format handler for Rails/Symfony style i18n files.

Uses the same flattening rules as the JSON handler over a YAML tree.
"""

from typing import Any, Optional

import yaml

from ..errors import MalformedContentError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler
from .json_handler import KeyValuePairs, flatten_tree, unflatten_entries


MERGE_TAG = "tag:yaml.org,2002:merge"


class PairPreservingLoader(yaml.SafeLoader):
    """SafeLoader that builds mappings as KeyValuePairs so duplicate keys survive."""


def _construct_pairs(loader: PairPreservingLoader, node: yaml.MappingNode) -> KeyValuePairs:
    has_merge = any(key_node.tag == MERGE_TAG for key_node, _ in node.value)
    loader.flatten_mapping(node)
    pairs = [
        (loader.construct_object(key_node, deep=True), loader.construct_object(value_node, deep=True))
        for key_node, value_node in node.value
    ]
    if has_merge:
        # Local keys override merged ones
        return KeyValuePairs(dict(pairs).items())
    return KeyValuePairs(pairs)


PairPreservingLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_pairs)


def _format_scalar(value: Any) -> str:
    """Render a non-string YAML scalar the way it is written in YAML."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class YamlHandler(FormatHandler):
    """
    Handler for YAML i18n files.

    YAML i18n structure:
    ```yaml
    home:
      title: Welcome
      items:
        - First
        - Second
    ```

    Produces "home.title", "home.items[0]" and "home.items[1]".
    """

    @property
    def format_id(self) -> str:
        return "yaml"

    @property
    def file_extensions(self) -> list[str]:
        return ["yaml", "yml"]

    @property
    def supports_comments(self) -> bool:
        return False

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse YAML content into localization entries.

        Args:
            content: Raw YAML file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with flattened keys
        """
        try:
            data = yaml.load(content, Loader=PairPreservingLoader)
        except yaml.YAMLError as e:
            raise MalformedContentError(f"Invalid YAML: {e}") from e

        entries: list[LocalizationEntry] = []
        if data is not None:
            flatten_tree(data, "", entries, _format_scalar)
        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        tree = unflatten_entries(file.entries)
        if not tree:
            return ""
        return yaml.dump(
            tree,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
