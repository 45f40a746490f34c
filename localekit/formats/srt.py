#!/usr/bin/env python3
"""
SRT (SubRip) subtitle format handler.

Each cue becomes one entry: the cue index is the key, the text is the
value and the raw timing line is kept in the comment so that timing
survives a round trip.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

TIMING_PATTERN = re.compile(
    r'^\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}'
)

CUE_PATTERN = re.compile(
    r'^(\d+)[ \t]*\r?\n'
    r'(\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3})[^\r\n]*'
    r'(?:\r?\n(.*))?$',
    re.DOTALL,
)

# Cues are separated by one or more blank lines
BLOCK_SEPARATOR = re.compile(r'\r?\n[ \t]*\r?\n')


def synthetic_timing(position: int, separator: str = ",") -> str:
    """Timing line for a cue without stored timing: one second per cue."""
    start, end = position, position + 1
    return (
        f"{start // 3600:02d}:{start % 3600 // 60:02d}:{start % 60:02d}{separator}000 --> "
        f"{end // 3600:02d}:{end % 3600 // 60:02d}:{end % 60:02d}{separator}000"
    )


class SrtHandler(FormatHandler):
    """
    Handler for SRT subtitle files.

    SRT format:
    ```
    1
    00:00:01,000 --> 00:00:04,000
    Hello world!

    2
    00:00:05,000 --> 00:00:08,000
    Second subtitle
    with two lines
    ```
    """

    @property
    def format_id(self) -> str:
        return "srt"

    @property
    def file_extensions(self) -> list[str]:
        return ["srt"]

    @property
    def supports_comments(self) -> bool:
        """The comment carries the cue timing."""
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse SRT content into localization entries.

        Args:
            content: Raw SRT file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with one entry per cue
        """
        entries = []
        for block in BLOCK_SEPARATOR.split(content.strip()):
            match = CUE_PATTERN.match(block.strip('\r\n'))
            if not match:
                continue
            index, timing, text = match.groups()
            entries.append(LocalizationEntry(
                key=index,
                value=(text or "").strip(),
                comment=timing,
            ))

        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        """
        Write SRT cues in entry order.

        Numeric keys are kept as cue indices; other keys are replaced by the
        running position. A synthetic timing line is generated when the
        entry has no stored timing.

        Args:
            file: File to serialize

        Returns:
            SRT content
        """
        blocks = []
        for i, entry in enumerate(file.entries, start=1):
            index = entry.key if entry.key.isdigit() else str(i)
            if entry.comment and TIMING_PATTERN.match(entry.comment):
                timing = entry.comment
            else:
                timing = synthetic_timing(i)
            blocks.append(f"{index}\n{timing}\n{entry.value or ''}\n")

        return '\n'.join(blocks)
