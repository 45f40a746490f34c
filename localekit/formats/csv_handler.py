#!/usr/bin/env python3
"""
CSV format handler.

The first row is a header. Column 0 holds keys; the value column is the
header column matching the file's culture (for wide multi-language sheets)
or column 1.
"""

import csv
import io
from typing import Optional

from ..errors import MalformedContentError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler


class CsvHandler(FormatHandler):
    """
    Handler for CSV translation tables.

    Two-column layout:
    ```
    key,value
    greeting,Hello
    farewell,"Goodbye, friend"
    ```

    Wide layout, parsed as "messages.tr.csv":
    ```
    key,en,tr,de
    greeting,Hello,Merhaba,Hallo
    ```
    Only the column for the detected culture is read; writing emits the
    two-column layout.
    """

    def __init__(self, delimiter: str = ','):
        self.delimiter = delimiter

    @property
    def format_id(self) -> str:
        return "csv"

    @property
    def file_extensions(self) -> list[str]:
        return ["csv"]

    @property
    def supports_comments(self) -> bool:
        return False

    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse CSV content into localization entries.

        Args:
            content: Raw CSV file content
            path: Optional source path for culture detection

        Returns:
            LocalizationFile with one entry per data row
        """
        culture = self.detect_culture(path)
        reader = csv.reader(io.StringIO(content), delimiter=self.delimiter)

        try:
            header = next(reader, None)
            if not header:
                return self.create_file([], path, culture)

            value_column = 1
            if culture and len(header) > 2:
                for i, column in enumerate(header[1:], start=1):
                    if column.strip().lower() == culture:
                        value_column = i
                        break

            entries = []
            for row in reader:
                # Skip blank lines and rows without a value column
                if len(row) < 2:
                    continue
                entries.append(LocalizationEntry(
                    key=row[0],
                    value=row[value_column] if value_column < len(row) else "",
                ))
        except csv.Error as e:
            raise MalformedContentError(f"Invalid CSV: {e}") from e

        return self.create_file(entries, path, culture)

    def render(self, file: LocalizationFile) -> str:
        """
        Write a two-column key,value table.

        Fields containing the delimiter, quotes or line breaks are quoted
        with doubled inner quotes.
        """
        output = io.StringIO()
        writer = csv.writer(output, delimiter=self.delimiter, lineterminator='\n')
        writer.writerow(['key', 'value'])
        for entry in file.entries:
            writer.writerow([entry.key, entry.value or ""])
        return output.getvalue()
