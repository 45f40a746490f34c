#!/usr/bin/env python3
"""
Visual Basic resource wrapper handler (read-only).

Scans generated My.Resources modules for resource lookups and string
constants. The generated code cannot be regenerated from entries, so
render() always raises UnsupportedFormatError.
"""

import re
from typing import Optional

from ..errors import UnsupportedFormatError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

GET_STRING_PATTERN = re.compile(r'ResourceManager\.GetString\(\s*"([^"]+)"')
CONST_PATTERN = re.compile(
    r'Const\s+(\w+)\s+As\s+String\s*=\s*"((?:[^"]|"")*)"',
    re.IGNORECASE,
)


class VbResourceHandler(FormatHandler):
    """
    Handler for VB.NET resource wrapper modules.

    Recognized patterns:
    ```vb
    Return ResourceManager.GetString("App_Name", resourceCulture)
    Public Const Greeting As String = "Say ""hi"" now"
    ```

    GetString lookups yield keys without values; constants yield the
    literal with doubled quotes unescaped.
    """

    @property
    def format_id(self) -> str:
        return "vb"

    @property
    def file_extensions(self) -> list[str]:
        return ["vb"]

    @property
    def supports_comments(self) -> bool:
        return False

    @property
    def is_read_only(self) -> bool:
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Extract resource keys and string constants from VB source.

        Args:
            content: VB source code
            path: Optional source path for culture detection

        Returns:
            LocalizationFile in source order
        """
        found = []
        for match in GET_STRING_PATTERN.finditer(content):
            found.append((match.start(), LocalizationEntry(key=match.group(1))))
        for match in CONST_PATTERN.finditer(content):
            found.append((match.start(), LocalizationEntry(
                key=match.group(1),
                value=match.group(2).replace('""', '"'),
            )))

        found.sort(key=lambda item: item[0])
        return self.create_file([entry for _, entry in found], path)

    def render(self, file: LocalizationFile) -> str:
        raise UnsupportedFormatError(
            "Writing VB resource wrappers is not supported; edit the source .resx file instead."
        )
