#!/usr/bin/env python3
"""
XLIFF format handler.

Reads XLIFF 1.2, XLIFF 2.0 and namespace-less documents. Always writes
XLIFF 1.2.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from ..errors import MalformedContentError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

XLIFF12_NS = "urn:oasis:names:tc:xliff:document:1.2"
XLIFF20_NS = "urn:oasis:names:tc:xliff:document:2.0"


def _text(element: Optional[ET.Element]) -> Optional[str]:
    """Inner text of an element including nested inline markup."""
    if element is None:
        return None
    return "".join(element.itertext())


class XliffHandler(FormatHandler):
    """
    Handler for XLIFF bilingual files.

    XLIFF 1.2 structure:
    ```xml
    <xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
      <file source-language="en" target-language="tr" datatype="plaintext" original="app">
        <body>
          <trans-unit id="greeting">
            <source>Hello</source>
            <target>Merhaba</target>
            <note>Shown on the home page</note>
          </trans-unit>
        </body>
      </file>
    </xliff>
    ```

    The unit id is the key. The value is the target, or the source when the
    unit is untranslated.
    """

    @property
    def format_id(self) -> str:
        return "xliff"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlf", "xliff"]

    @property
    def supports_comments(self) -> bool:
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse XLIFF content into localization entries.

        Tries the 1.2 namespace, then 2.0, then no namespace; the first
        layout that yields units wins.

        Args:
            content: Raw XLIFF XML content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with source text kept on each entry
        """
        if not content.strip():
            return self.create_file([], path)

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise MalformedContentError(f"Invalid XLIFF XML: {e}") from e

        entries = (
            self._parse_v12(root, f"{{{XLIFF12_NS}}}")
            or self._parse_v20(root)
            or self._parse_v12(root, "")
        )
        return self.create_file(entries, path)

    def _parse_v12(self, root: ET.Element, ns: str) -> list[LocalizationEntry]:
        entries = []
        for unit in root.iter(f"{ns}trans-unit"):
            unit_id = unit.get('id')
            if not unit_id:
                continue
            source = _text(unit.find(f"{ns}source"))
            target = _text(unit.find(f"{ns}target"))
            entries.append(LocalizationEntry(
                key=unit_id,
                value=target if target is not None else source,
                comment=_text(unit.find(f"{ns}note")),
                source=source,
            ))
        return entries

    def _parse_v20(self, root: ET.Element) -> list[LocalizationEntry]:
        ns = f"{{{XLIFF20_NS}}}"
        entries = []
        for unit in root.iter(f"{ns}unit"):
            unit_id = unit.get('id')
            if not unit_id:
                continue
            segment = unit.find(f"{ns}segment")
            source = _text(segment.find(f"{ns}source")) if segment is not None else None
            target = _text(segment.find(f"{ns}target")) if segment is not None else None
            entries.append(LocalizationEntry(
                key=unit_id,
                value=target if target is not None else source,
                comment=_text(unit.find(f"{ns}notes/{ns}note")),
                source=source,
            ))
        return entries

    def render(self, file: LocalizationFile) -> str:
        """
        Build an XLIFF 1.2 document.

        Args:
            file: File to serialize; its culture becomes target-language

        Returns:
            XLIFF XML content
        """
        # Unqualified tags plus an explicit xmlns keep the 1.2 namespace as default
        root = ET.Element("xliff", {'version': "1.2", 'xmlns': XLIFF12_NS})
        file_element = ET.SubElement(root, "file", {
            'source-language': "en",
            'target-language': file.culture or "en",
            'datatype': "plaintext",
            'original': file.path or "",
        })
        body = ET.SubElement(file_element, "body")

        for entry in file.entries:
            unit = ET.SubElement(body, "trans-unit", id=entry.key)
            ET.SubElement(unit, "source").text = entry.source or entry.value or ""
            ET.SubElement(unit, "target").text = entry.value or ""
            if entry.comment:
                ET.SubElement(unit, "note").text = entry.comment

        ET.indent(root, space="  ")
        xml_body = ET.tostring(root, encoding='unicode')
        return f'<?xml version="1.0" encoding="utf-8"?>\n{xml_body}\n'
