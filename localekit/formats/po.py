#!/usr/bin/env python3
"""
GNU gettext PO format handler.

Handles parsing and writing of .po catalogs used by WordPress, Django,
Rails (via gettext), and many Linux applications.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

# gettext joins msgctxt and msgid with EOT in compiled catalogs
CONTEXT_SEPARATOR = "\x04"


class PoHandler(FormatHandler):
    """
    Handler for GNU gettext PO files.

    PO format structure:
    ```
    # Translator comment
    #: file.py:42
    msgctxt "menu"
    msgid "Open"
    msgstr "Aç"

    msgid "One item"
    msgid_plural "%d items"
    msgstr[0] "Bir öğe"
    msgstr[1] "%d öğe"
    ```

    The msgid is the key and the msgstr the value. Entries with a msgctxt
    are keyed "context\\x04msgid". For plural entries msgstr[0] is the value.
    The header entry (empty msgid) is metadata and is skipped.
    """

    @property
    def format_id(self) -> str:
        return "po"

    @property
    def file_extensions(self) -> list[str]:
        return ["po"]

    @property
    def supports_comments(self) -> bool:
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse PO content into localization entries.

        Args:
            content: Raw PO file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with one entry per message
        """
        entries = []
        current = self._new_entry_dict()

        lines = content.splitlines()
        i = 0

        while i < len(lines):
            line = lines[i].strip()

            # Blank line ends the current message
            if not line:
                self._append_entry(entries, current)
                current = self._new_entry_dict()
                i += 1
                continue

            # Obsolete entries
            if line.startswith('#~'):
                pass

            # Translator comment
            elif line.startswith('# ') or line == '#':
                current['comments'].append(line[2:])

            # Extracted comments, references, flags, previous msgid
            elif line.startswith('#'):
                pass

            elif line.startswith('msgctxt'):
                # A new msgctxt after a complete message starts the next one
                if current['msgid'] is not None:
                    self._append_entry(entries, current)
                    current = self._new_entry_dict()
                i, current['msgctxt'] = self._read_multiline(
                    lines, i, self._extract_string(line, 'msgctxt')
                )

            elif line.startswith('msgid_plural'):
                i, _ = self._read_multiline(
                    lines, i, self._extract_string(line, 'msgid_plural')
                )

            elif line.startswith('msgid'):
                if current['msgid'] is not None:
                    self._append_entry(entries, current)
                    current = self._new_entry_dict()
                i, current['msgid'] = self._read_multiline(
                    lines, i, self._extract_string(line, 'msgid')
                )

            elif line.startswith('msgstr['):
                match = re.match(r'msgstr\[(\d+)\]', line)
                if match:
                    i, value = self._read_multiline(
                        lines, i, self._extract_string(line, match.group(0))
                    )
                    current['msgstr_plural'][int(match.group(1))] = value

            elif line.startswith('msgstr'):
                i, current['msgstr'] = self._read_multiline(
                    lines, i, self._extract_string(line, 'msgstr')
                )

            i += 1

        # Don't forget the last entry
        self._append_entry(entries, current)

        return self.create_file(entries, path)

    def _new_entry_dict(self) -> dict:
        """Create empty entry dictionary."""
        return {
            'comments': [],
            'msgctxt': None,
            'msgid': None,
            'msgstr': None,
            'msgstr_plural': {},
        }

    def _append_entry(self, entries: list[LocalizationEntry], entry_dict: dict) -> None:
        """Turn a parsed message into an entry; the header is dropped."""
        msgid = entry_dict['msgid']
        if not msgid:
            return

        key = msgid
        if entry_dict['msgctxt'] is not None:
            key = f"{entry_dict['msgctxt']}{CONTEXT_SEPARATOR}{msgid}"

        value = entry_dict['msgstr']
        if value is None:
            value = entry_dict['msgstr_plural'].get(0)

        entries.append(LocalizationEntry(
            key=key,
            value=value,
            comment='\n'.join(entry_dict['comments']) if entry_dict['comments'] else None,
        ))

    def _extract_string(self, line: str, prefix: str) -> str:
        """Extract string value from PO line."""
        content = line[len(prefix):].strip()
        if content.startswith('"') and content.endswith('"') and len(content) >= 2:
            return self._unescape_po_string(content[1:-1])
        return ""

    def _read_multiline(
        self, lines: list[str], start: int, initial: str
    ) -> tuple[int, str]:
        """Read continuation lines for multi-line strings."""
        result = initial
        i = start + 1

        while i < len(lines):
            line = lines[i].strip()
            if line.startswith('"') and line.endswith('"') and len(line) >= 2:
                result += self._unescape_po_string(line[1:-1])
                i += 1
            else:
                break

        return i - 1, result

    def _unescape_po_string(self, s: str) -> str:
        """Unescape PO string escapes."""
        escapes = {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'}
        return re.sub(r'\\(.)', lambda m: escapes.get(m.group(1), m.group(0)), s)

    def _escape_po_string(self, s: str) -> str:
        """Escape string for PO format."""
        return (
            s.replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\n', '\\n')
            .replace('\t', '\\t')
            .replace('\r', '\\r')
        )

    def _format_po_string(self, prefix: str, s: Optional[str], wrap_width: int = 76) -> list[str]:
        """
        Format a string for PO output, wrapping long strings at ~76 characters.

        Args:
            prefix: The PO prefix (e.g., 'msgid', 'msgstr')
            s: The string to format
            wrap_width: Maximum line width for wrapping (default: 76)

        Returns:
            List of formatted lines
        """
        escaped = self._escape_po_string(s or "")

        single_line = f'{prefix} "{escaped}"'
        if len(single_line) <= wrap_width:
            return [single_line]

        # Continuation format:
        # msgid ""
        # "first part "
        # "second part"
        lines = [f'{prefix} ""']

        segments = escaped.split('\\n')
        for i, segment in enumerate(segments):
            if i < len(segments) - 1:
                segment += '\\n'

            max_chunk = wrap_width - 2
            while len(segment) > max_chunk:
                break_at = max_chunk
                # Prefer breaking after a space, never inside an escape
                space_pos = segment.rfind(' ', max_chunk - 20, max_chunk)
                if space_pos > 0:
                    break_at = space_pos + 1
                while break_at > 1 and segment[break_at - 1] == '\\':
                    break_at -= 1
                lines.append(f'"{segment[:break_at]}"')
                segment = segment[break_at:]
            if segment:
                lines.append(f'"{segment}"')

        return lines

    def render(self, file: LocalizationFile) -> str:
        """
        Write a PO catalog with a minimal header.

        Args:
            file: File to serialize

        Returns:
            Complete PO file content
        """
        lines = ['msgid ""', 'msgstr ""', '"Content-Type: text/plain; charset=UTF-8\\n"']
        if file.culture:
            lines.append(f'"Language: {file.culture}\\n"')
        lines.append('')

        for entry in file.entries:
            if entry.comment:
                for comment in entry.comment.split('\n'):
                    lines.append(f'# {comment}'.rstrip())

            context, separator, msgid = entry.key.partition(CONTEXT_SEPARATOR)
            if separator:
                lines.extend(self._format_po_string('msgctxt', context))
            else:
                msgid = entry.key

            lines.extend(self._format_po_string('msgid', msgid))
            lines.extend(self._format_po_string('msgstr', entry.value))
            lines.append('')

        return '\n'.join(lines)
