#!/usr/bin/env python3
"""
Base classes for format handlers.

FormatHandler is the abstract base class that all format-specific handlers
must implement. FormatRegistry holds an ordered list of handlers and picks
the first one that accepts a given file.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..culture import detect_culture
from ..errors import MalformedContentError, PathNotFoundError, UnsupportedFormatError
from ..models import LocalizationEntry, LocalizationFile


class FormatHandler(ABC):
    """
    Abstract base class for format-specific handlers.

    Each handler converts between one on-disk grammar (nested JSON, XML
    trees, subtitle cues, gettext catalogs) and a flat LocalizationFile.
    Handlers are stateless and safe to share between threads.
    """

    @property
    @abstractmethod
    def format_id(self) -> str:
        """Registry key of this format."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this handler supports (without dot)."""
        pass

    @property
    @abstractmethod
    def supports_comments(self) -> bool:
        """
        Whether entry comments survive a write.

        RESX, PO, XLIFF, FTL: True (native comment/note fields)
        SRT, VTT: True (comment holds the cue timing)
        JSON, YAML, CSV: False
        """
        pass

    @property
    def is_read_only(self) -> bool:
        """Read-only handlers raise UnsupportedFormatError from render()."""
        return False

    @property
    def supported_extensions(self) -> set[str]:
        """Extensions with leading dot, lowercase."""
        return {f".{ext.lower()}" for ext in self.file_extensions}

    def can_handle(self, path: str) -> bool:
        """Check whether this handler accepts the given file by extension."""
        name = os.path.basename(path).lower()
        return any(name.endswith(ext) for ext in self.supported_extensions)

    def detect_culture(self, path: Optional[str]) -> Optional[str]:
        """Detect the culture code of a file of this format."""
        return detect_culture(path) if path else None

    @abstractmethod
    def parse(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse format-specific content into a localization file.

        Args:
            content: Raw file content as string
            path: Optional source path, used for culture detection

        Returns:
            LocalizationFile with entries in document order

        Raises:
            MalformedContentError: Content is structurally invalid
        """
        pass

    @abstractmethod
    def render(self, file: LocalizationFile) -> str:
        """
        Serialize a localization file to this format.

        Args:
            file: File whose entries are written in order

        Returns:
            Complete file content as string
        """
        pass

    def parse_bytes(self, data: bytes, path: Optional[str] = None) -> LocalizationFile:
        """Decode UTF-8 (with or without BOM) content and parse it."""
        try:
            content = data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise MalformedContentError(f"Invalid UTF-8 in {path or 'input'}: {e}") from e
        return self.parse(content, path)

    def parse_file(self, path: Union[str, Path]) -> LocalizationFile:
        """Read and parse a file from disk."""
        path = str(path)
        if not os.path.isfile(path):
            raise PathNotFoundError(f"File not found: {path}")
        with open(path, 'rb') as f:
            return self.parse_bytes(f.read(), path)

    def write_file(self, file: LocalizationFile, path: Union[str, Path]) -> None:
        """Render a file and write it to disk, creating parent directories."""
        content = self.render(file)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

    def create_file(
        self,
        entries: Iterable[LocalizationEntry],
        path: Optional[str] = None,
        culture: Optional[str] = None,
    ) -> LocalizationFile:
        """Build a LocalizationFile stamped with this handler's format id."""
        return LocalizationFile(
            path=path or "",
            entries=tuple(entries),
            culture=culture if culture is not None else self.detect_culture(path),
            format_id=self.format_id,
        )


class FormatRegistry:
    """
    Ordered registry of format handlers.

    Registration order decides which handler wins when more than one accepts
    a file, so specific handlers (i18next) must come before generic ones (json).
    """

    def __init__(self, handlers: Optional[Iterable[FormatHandler]] = None):
        self._handlers: list[FormatHandler] = []
        for handler in handlers or []:
            self.register(handler)

    def register(self, handler: FormatHandler) -> None:
        """Register a handler; a handler with the same id is replaced in place."""
        for i, existing in enumerate(self._handlers):
            if existing.format_id.lower() == handler.format_id.lower():
                self._handlers[i] = handler
                return
        self._handlers.append(handler)

    @property
    def handlers(self) -> list[FormatHandler]:
        return list(self._handlers)

    def get_by_id(self, format_id: str) -> Optional[FormatHandler]:
        """Get handler by format id (case-insensitive)."""
        format_id = format_id.lower()
        for handler in self._handlers:
            if handler.format_id.lower() == format_id:
                return handler
        return None

    def get_for_file(self, path: str) -> Optional[FormatHandler]:
        """Get the first registered handler that accepts the file."""
        for handler in self._handlers:
            if handler.can_handle(path):
                return handler
        return None

    def is_supported(self, path: str) -> bool:
        return self.get_for_file(path) is not None

    def supported_extensions(self) -> set[str]:
        extensions = set()
        for handler in self._handlers:
            extensions |= handler.supported_extensions
        return extensions

    def require_by_id(self, format_id: str) -> FormatHandler:
        """Like get_by_id, but raise UnsupportedFormatError when unknown."""
        handler = self.get_by_id(format_id)
        if handler is None:
            available = ', '.join(h.format_id for h in self._handlers)
            raise UnsupportedFormatError(f"Unknown format: {format_id}. Available: {available}")
        return handler

    def require_for_file(self, path: str) -> FormatHandler:
        """Like get_for_file, but raise UnsupportedFormatError when none matches."""
        handler = self.get_for_file(path)
        if handler is None:
            raise UnsupportedFormatError(f"Unsupported file format: {path}")
        return handler

    def list_formats(self) -> list[dict[str, Any]]:
        """List all registered formats with their extensions."""
        return [
            {
                'id': handler.format_id,
                'extensions': sorted(handler.supported_extensions),
                'supports_comments': handler.supports_comments,
                'read_only': handler.is_read_only,
            }
            for handler in self._handlers
        ]
