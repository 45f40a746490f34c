#!/usr/bin/env python3
"""
WebVTT subtitle format handler.

Like SRT, but cues may carry a textual identifier which becomes the key.
Cues without an identifier are keyed by their running position.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler
from .srt import synthetic_timing

TIMING_PATTERN = re.compile(
    r'^\d{2}:\d{2}:\d{2}[.,]\d{3}\s*-->\s*\d{2}:\d{2}:\d{2}[.,]\d{3}'
)


class VttHandler(FormatHandler):
    """
    Handler for WebVTT files.

    VTT format:
    ```
    WEBVTT

    intro
    00:00:01.000 --> 00:00:04.000
    Welcome!

    00:00:05.000 --> 00:00:08.000
    First line
    second line
    ```
    """

    @property
    def format_id(self) -> str:
        return "vtt"

    @property
    def file_extensions(self) -> list[str]:
        return ["vtt"]

    @property
    def supports_comments(self) -> bool:
        """The comment carries the cue timing."""
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse VTT content into localization entries.

        Args:
            content: Raw VTT file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with one entry per cue that has text
        """
        entries = []
        position = 1
        cue_id = None
        timing = None
        text_lines: list[str] = []

        def flush():
            nonlocal position
            if timing is not None and text_lines:
                entries.append(LocalizationEntry(
                    key=cue_id or str(position),
                    value='\n'.join(text_lines),
                    comment=timing,
                ))
                position += 1

        for raw_line in content.splitlines():
            line = raw_line.strip()

            if line.startswith('WEBVTT'):
                continue

            if not line:
                flush()
                cue_id, timing, text_lines = None, None, []
                continue

            if TIMING_PATTERN.match(line):
                timing = line
            elif timing is None:
                cue_id = line
            else:
                text_lines.append(line)

        flush()
        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        """
        Write a WebVTT document.

        Non-numeric keys are written as cue identifiers.

        Args:
            file: File to serialize

        Returns:
            VTT content
        """
        lines = ["WEBVTT", ""]
        for i, entry in enumerate(file.entries, start=1):
            if not entry.key.isdigit():
                lines.append(entry.key)
            if entry.comment and TIMING_PATTERN.match(entry.comment):
                lines.append(entry.comment)
            else:
                lines.append(synthetic_timing(i, separator="."))
            lines.append(entry.value or "")
            lines.append("")

        return '\n'.join(lines)
