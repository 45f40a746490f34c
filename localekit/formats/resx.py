#!/usr/bin/env python3
"""
.NET RESX resource format handler.

Handles the XML resource files used by .NET applications. Resource names
use underscores where localekit keys use dots (Home_Title <-> Home.Title).
"""

import xml.etree.ElementTree as ET
from typing import Optional

from ..errors import MalformedContentError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'

RESX_HEADERS = [
    ('resmimetype', 'text/microsoft-resx'),
    ('version', '2.0'),
    ('reader', 'System.Resources.ResXResourceReader, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
    ('writer', 'System.Resources.ResXResourceWriter, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
]


class ResxHandler(FormatHandler):
    """
    Handler for .NET RESX files.

    RESX structure:
    ```xml
    <root>
      <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>
      <data name="Home_Title" xml:space="preserve">
        <value>Welcome</value>
        <comment>Main page title</comment>
      </data>
    </root>
    ```
    """

    @property
    def format_id(self) -> str:
        return "resx"

    @property
    def file_extensions(self) -> list[str]:
        return ["resx"]

    @property
    def supports_comments(self) -> bool:
        return True

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse RESX content into localization entries.

        Args:
            content: Raw RESX XML content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with one entry per <data> element
        """
        if not content.strip():
            return self.create_file([], path)

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise MalformedContentError(f"Invalid RESX XML: {e}") from e

        entries = []
        for data in root.iter('data'):
            name = data.get('name')
            if not name:
                continue
            value = data.find('value')
            comment = data.find('comment')
            entries.append(LocalizationEntry(
                key=name.replace('_', '.'),
                value=(value.text or "") if value is not None else None,
                comment=comment.text if comment is not None else None,
            ))

        return self.create_file(entries, path)

    def render(self, file: LocalizationFile) -> str:
        """
        Build a RESX document with the standard resheader block.

        Args:
            file: File to serialize

        Returns:
            RESX XML content
        """
        root = ET.Element('root')

        for name, value in RESX_HEADERS:
            header = ET.SubElement(root, 'resheader', name=name)
            ET.SubElement(header, 'value').text = value

        for entry in file.entries:
            data = ET.SubElement(root, 'data', name=entry.key.replace('.', '_'))
            data.set(XML_SPACE, 'preserve')
            ET.SubElement(data, 'value').text = entry.value or ""
            if entry.comment:
                ET.SubElement(data, 'comment').text = entry.comment

        ET.indent(root, space="  ")
        xml_body = ET.tostring(root, encoding='unicode')
        return f'<?xml version="1.0" encoding="utf-8"?>\n{xml_body}\n'
