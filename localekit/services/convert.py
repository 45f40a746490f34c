#!/usr/bin/env python3
"""
Convert service: re-serialize localization files in another format.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from ..errors import LocaleError
from ..formats import FormatHandler, FormatRegistry
from ..paths import replace_extension
from .scan import iter_supported_paths

logger = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    """Options for convert."""
    to_format: str
    from_format: Optional[str] = None
    force: bool = False
    recursive: bool = True
    culture: Optional[str] = None


@dataclass
class ConvertResult:
    """Outcome of converting one file."""
    source_path: str
    destination_path: str
    success: bool = False
    error_message: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


class ConvertService:
    """Converts files between registered formats."""

    def __init__(self, registry: FormatRegistry):
        self.registry = registry

    def _source_handler(self, source_path: str, options: ConvertOptions) -> FormatHandler:
        if options.from_format:
            return self.registry.require_by_id(options.from_format)
        return self.registry.require_for_file(source_path)

    def convert(self, source_path: str, destination_path: str, options: ConvertOptions) -> ConvertResult:
        """
        Convert a single file.

        Failures are reported in the result rather than raised.

        Args:
            source_path: File to read
            destination_path: File to write
            options: Convert options

        Returns:
            ConvertResult
        """
        result = ConvertResult(source_path=source_path, destination_path=destination_path)

        if not os.path.isfile(source_path):
            result.error_message = f"Source file not found: {source_path}"
            return result

        if os.path.exists(destination_path) and not options.force:
            result.error_message = "Destination file already exists. Use --force to overwrite."
            return result

        try:
            source_handler = self._source_handler(source_path, options)
            target_handler = self.registry.require_by_id(options.to_format)
            if target_handler.is_read_only:
                result.error_message = f"Format '{target_handler.format_id}' is read-only"
                return result

            source = source_handler.parse_file(source_path)

            if source.count and not target_handler.supports_comments:
                dropped = sum(1 for entry in source.entries if entry.comment)
                if dropped:
                    result.warnings.append(
                        f"{dropped} comment(s) cannot be stored in {target_handler.format_id} and were dropped"
                    )

            converted = dataclasses.replace(
                source,
                path=destination_path,
                culture=options.culture or source.culture,
                format_id=target_handler.format_id,
            )
            target_handler.write_file(converted, destination_path)
            result.success = True
        except (LocaleError, OSError) as e:
            logger.debug("Conversion of %s failed: %s", source_path, e)
            result.error_message = str(e)

        return result

    def convert_directory(self, source_dir: str, destination_dir: str, options: ConvertOptions) -> list[ConvertResult]:
        """
        Convert every supported file under a directory.

        The relative layout is mirrored under destination_dir with the target
        format's primary extension.

        Args:
            source_dir: Directory to read
            destination_dir: Directory to write into
            options: Convert options

        Returns:
            One ConvertResult per file
        """
        if not os.path.isdir(source_dir):
            return [ConvertResult(
                source_path=source_dir,
                destination_path=destination_dir,
                error_message=f"Source directory not found: {source_dir}",
            )]

        target_handler = self.registry.get_by_id(options.to_format)
        if target_handler is None:
            return [ConvertResult(
                source_path=source_dir,
                destination_path=destination_dir,
                error_message=f"Unknown format: {options.to_format}",
            )]
        extension = target_handler.file_extensions[0]

        results = []
        for source_path in iter_supported_paths(source_dir, self.registry, options.recursive):
            if options.from_format:
                handler = self.registry.get_for_file(source_path)
                if handler is None or handler.format_id != options.from_format.lower():
                    continue
            relative = os.path.relpath(source_path, source_dir)
            destination = replace_extension(os.path.join(destination_dir, relative), extension)
            results.append(self.convert(source_path, destination, options))

        return results
