#!/usr/bin/env python3
"""
Generate service: create target-culture skeleton files from base files.

Every base key missing from the target gets a placeholder value, so the
generated files are complete and ready for translators.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Optional

from ..errors import LocaleError
from ..formats import FormatHandler, FormatRegistry
from ..models import LocalizationEntry, LocalizationFile
from ..paths import generate_target_path
from .scan import iter_supported_paths

logger = logging.getLogger(__name__)


@dataclass
class GenerateOptions:
    """Options for generate. ``{0}`` in the placeholder is the base value."""
    target_culture: str
    base_culture: str = "en"
    placeholder_pattern: str = "@@MISSING@@ {0}"
    use_empty_value: bool = False
    overwrite_existing: bool = False
    recursive: bool = True


@dataclass
class GenerateResult:
    """Outcome of generating one target file."""
    file_path: str
    created: bool = False
    keys_added: int = 0
    keys_skipped: int = 0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_message is None

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data['success'] = self.success
        return data


class GenerateService:
    """Generates target-culture files from base-culture files."""

    def __init__(self, registry: FormatRegistry):
        self.registry = registry

    def generate(self, input_path: str, output_path: Optional[str], options: GenerateOptions) -> list[GenerateResult]:
        """
        Generate target files for every base-culture file under a path.

        Args:
            input_path: Base file or directory
            output_path: Output root (None writes next to the sources)
            options: Generate options

        Returns:
            One GenerateResult per base file
        """
        if os.path.isfile(input_path):
            candidates = [input_path]
        elif os.path.isdir(input_path):
            candidates = iter_supported_paths(input_path, self.registry, options.recursive)
        else:
            return [GenerateResult(file_path=input_path, error_message=f"Path not found: {input_path}")]

        results = []
        for base_path in candidates:
            handler = self.registry.get_for_file(base_path)
            if handler is None:
                continue

            try:
                base_file = handler.parse_file(base_path)
            except (LocaleError, OSError) as e:
                results.append(GenerateResult(file_path=base_path, error_message=f"Failed to parse: {e}"))
                continue

            if (base_file.culture or "").lower() != options.base_culture.lower():
                continue

            target_path = generate_target_path(
                base_path, input_path, output_path, options.base_culture, options.target_culture
            )
            results.append(self.generate_file(base_file, target_path, handler, options))

        return results

    def generate_file(
        self,
        base_file: LocalizationFile,
        target_path: str,
        handler: FormatHandler,
        options: GenerateOptions,
    ) -> GenerateResult:
        """
        Write one target file, merging with an existing one if present.

        Existing target entries are kept unless overwrite_existing is set.
        """
        result = GenerateResult(file_path=target_path, created=not os.path.exists(target_path))

        existing: dict[str, LocalizationEntry] = {}
        if not result.created:
            try:
                existing = handler.parse_file(target_path).entries_by_key
            except (LocaleError, OSError) as e:
                logger.debug("Ignoring unreadable target %s: %s", target_path, e)

        entries = []
        for base_entry in base_file.entries:
            current = existing.get(base_entry.key)
            if current is not None and not options.overwrite_existing:
                entries.append(current)
                result.keys_skipped += 1
                continue

            entries.append(LocalizationEntry(
                key=base_entry.key,
                value=self.placeholder_value(base_entry, options),
                comment=base_entry.comment,
                source=base_entry.value,
            ))
            result.keys_added += 1

        target = handler.create_file(entries, target_path, culture=options.target_culture)
        try:
            handler.write_file(target, target_path)
        except (LocaleError, OSError) as e:
            result.error_message = str(e)

        return result

    def placeholder_value(self, entry: LocalizationEntry, options: GenerateOptions) -> str:
        if options.use_empty_value:
            return ""
        return options.placeholder_pattern.replace("{0}", entry.value or "")
