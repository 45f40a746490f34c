#!/usr/bin/env python3
"""
Fluent (FTL) format handler.

Covers the message subset used for plain string resources: messages,
terms, attributes, multi-line values and single-hash comments. Selectors
and variants are kept as raw text.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

MESSAGE_PATTERN = re.compile(r'^(-?[a-zA-Z][a-zA-Z0-9_-]*)\s*=\s*(.*)$')
ATTRIBUTE_PATTERN = re.compile(r'^\s+\.([a-zA-Z][a-zA-Z0-9_-]*)\s*=\s*(.*)$')

FILE_HEADER = "### Fluent FTL file generated by localekit"


class FluentHandler(FormatHandler):
    """
    Handler for Mozilla Fluent files.

    FTL structure:
    ```
    # Greeting shown on the home page
    welcome = Welcome, { $user }!

    submit-button = Submit
        .title = Click to submit

    long-text =
        First line
        second line
    ```

    Attributes become their own entries keyed "<message>.<attribute>".
    """

    @property
    def format_id(self) -> str:
        return "ftl"

    @property
    def file_extensions(self) -> list[str]:
        return ["ftl"]

    @property
    def supports_comments(self) -> bool:
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse FTL content into localization entries.

        Args:
            content: Raw FTL file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with messages and attributes as entries
        """
        entries: list[LocalizationEntry] = []
        pending_comment: list[str] = []
        current_key: Optional[str] = None
        current_comment: Optional[str] = None
        value_lines: list[str] = []
        parent_key: Optional[str] = None

        def flush():
            nonlocal current_key
            if current_key is not None:
                entries.append(LocalizationEntry(
                    key=current_key,
                    value='\n'.join(value_lines).strip(),
                    comment=current_comment,
                ))
            current_key = None

        for line in content.splitlines():
            if line.startswith('#'):
                # "##" group and "###" resource comments are not attached to messages
                if line.startswith("# ") or line == "#":
                    pending_comment.append(line[2:])
                continue

            if not line.strip():
                flush()
                parent_key = None
                pending_comment = []
                continue

            match = MESSAGE_PATTERN.match(line)
            if match:
                flush()
                current_key = match.group(1)
                current_comment = "\n".join(pending_comment) if pending_comment else None
                pending_comment = []
                value_lines = [match.group(2).strip()] if match.group(2).strip() else []
                parent_key = current_key
                continue

            match = ATTRIBUTE_PATTERN.match(line)
            if match and parent_key:
                flush()
                entries.append(LocalizationEntry(
                    key=f"{parent_key}.{match.group(1)}",
                    value=match.group(2).strip(),
                ))
                continue

            if current_key is not None and line[:1] in (' ', '\t'):
                value_lines.append(line.strip())

        flush()
        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        """
        Write FTL messages with their attributes nested below them.

        A dotted key is treated as an attribute when the part before its
        first dot is itself a key in the file.

        Args:
            file: File to serialize

        Returns:
            FTL content
        """
        keys = {entry.key for entry in file.entries}
        lines = [FILE_HEADER, ""]

        for entry in file.entries:
            if '.' in entry.key and entry.key.split('.', 1)[0] in keys:
                continue

            if entry.comment:
                for comment in entry.comment.split('\n'):
                    lines.append(f"# {comment}".rstrip())

            value = entry.value or ""
            if '\n' in value:
                lines.append(f"{entry.key} =")
                lines.extend(f"    {part}" for part in value.split('\n'))
            else:
                lines.append(f"{entry.key} = {value}".rstrip())

            prefix = f"{entry.key}."
            for attribute in file.entries:
                if attribute.key.startswith(prefix):
                    lines.append(f"    .{attribute.key[len(prefix):]} = {attribute.value or ''}".rstrip())

            lines.append("")

        return '\n'.join(lines)
