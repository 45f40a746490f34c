#!/usr/bin/env python3
"""
Translate service: fill target-culture files through a translation provider.

Entries are translated one by one, or by a bounded worker pool when
degree_of_parallelism > 1. A semaphore of that capacity caps in-flight
requests and each slot is held for delay_between_calls after its request,
which bounds the request rate to roughly parallelism / delay.
"""

import dataclasses
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..errors import LocaleError
from ..formats import FormatHandler, FormatRegistry
from ..models import LocalizationEntry, LocalizationFile
from ..paths import generate_target_path
from .providers import HttpTranslator
from .scan import iter_supported_paths

logger = logging.getLogger(__name__)


@dataclass
class TranslateOptions:
    """Options for translate. delay_between_calls is in milliseconds."""
    source_language: str
    target_language: str
    provider: str = "google"
    api_key: Optional[str] = None
    api_endpoint: Optional[str] = None
    model: Optional[str] = None
    overwrite_existing: bool = False
    only_missing: bool = True
    recursive: bool = True
    delay_between_calls: int = 100
    degree_of_parallelism: int = 1
    timeout: float = 30

    @property
    def keep_existing(self) -> bool:
        """Whether non-empty target values are left untouched."""
        return self.only_missing and not self.overwrite_existing


@dataclass
class TranslateResult:
    """Outcome of translating one file."""
    file_path: str
    translated_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    error_message: Optional[str] = None
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return self.error_message is None

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data['success'] = self.success
        return data


@dataclass(frozen=True)
class TranslateProgress:
    """Progress notification sent after each processed entry."""
    current: int
    total: int
    key: str

    @property
    def percentage(self) -> float:
        return 100.0 * self.current / self.total if self.total else 100.0


@dataclass
class TranslationBatch:
    """Translated entries in source order; None marks entries never processed."""
    entries: list[Optional[LocalizationEntry]] = field(default_factory=list)
    translated_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    cancelled: bool = False

    @property
    def completed_entries(self) -> list[LocalizationEntry]:
        return [entry for entry in self.entries if entry is not None]


Translator = Callable[[str, str, str, TranslateOptions], str]
ProgressCallback = Callable[[TranslateProgress], None]


class TranslateService:
    """Translates base-culture files into a target culture."""

    def __init__(self, registry: FormatRegistry, translator: Optional[Translator] = None):
        self.registry = registry
        self.translator = translator or HttpTranslator()

    def translate(
        self,
        input_path: str,
        output_path: Optional[str],
        options: TranslateOptions,
        progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[TranslateResult]:
        """
        Translate every source-language file under a path.

        Args:
            input_path: Base file or directory
            output_path: Output root (None writes next to the sources)
            options: Translate options
            progress: Called after every processed entry
            cancel_event: Set to stop scheduling new work

        Returns:
            One TranslateResult per source file
        """
        if options.degree_of_parallelism < 1:
            raise ValueError("degree_of_parallelism must be at least 1")

        if os.path.isfile(input_path):
            candidates = [input_path]
        elif os.path.isdir(input_path):
            candidates = iter_supported_paths(input_path, self.registry, options.recursive)
        else:
            return [TranslateResult(file_path=input_path, error_message=f"Path not found: {input_path}")]

        results = []
        for source_path in candidates:
            if cancel_event is not None and cancel_event.is_set():
                break

            handler = self.registry.get_for_file(source_path)
            if handler is None:
                continue

            try:
                source_file = handler.parse_file(source_path)
            except (LocaleError, OSError) as e:
                logger.debug("Skipping %s: %s", source_path, e)
                continue

            if (source_file.culture or "").lower() != options.source_language.lower():
                continue

            target_path = generate_target_path(
                source_path, input_path, output_path, options.source_language, options.target_language
            )
            results.append(self.translate_file(
                source_file, target_path, handler, options, progress, cancel_event
            ))

        return results

    def translate_file(
        self,
        source_file: LocalizationFile,
        target_path: str,
        handler: FormatHandler,
        options: TranslateOptions,
        progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> TranslateResult:
        """Translate one parsed file and write the target file."""
        result = TranslateResult(file_path=target_path)

        existing: dict[str, LocalizationEntry] = {}
        if os.path.exists(target_path):
            try:
                existing = handler.parse_file(target_path).entries_by_key
            except (LocaleError, OSError) as e:
                logger.debug("Ignoring unreadable target %s: %s", target_path, e)

        batch = self.translate_entries(source_file.entries, existing, options, progress, cancel_event)
        result.translated_count = batch.translated_count
        result.skipped_count = batch.skipped_count
        result.failed_count = batch.failed_count
        result.cancelled = batch.cancelled

        # Entries never reached after a cancel keep what the target already had
        output = [
            entry if entry is not None else existing.get(source_entry.key)
            for entry, source_entry in zip(batch.entries, source_file.entries)
        ]
        target = handler.create_file(
            [entry for entry in output if entry is not None], target_path, culture=options.target_language
        )
        try:
            handler.write_file(target, target_path)
        except (LocaleError, OSError) as e:
            result.error_message = str(e)

        return result

    def translate_entries(
        self,
        entries: Sequence[LocalizationEntry],
        existing: Optional[dict[str, LocalizationEntry]],
        options: TranslateOptions,
        progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> TranslationBatch:
        """
        Translate a sequence of entries.

        Every processed entry lands in its own slot of a pre-sized list, so
        completion order under parallelism does not matter. A failed entry
        keeps its existing value (or "") and records the error as comment.

        Args:
            entries: Source entries
            existing: Current target entries by key
            options: Translate options
            progress: Called after every processed entry
            cancel_event: Checked before each entry starts

        Returns:
            TranslationBatch
        """
        existing = existing or {}
        total = len(entries)
        batch = TranslationBatch(entries=[None] * total)
        lock = threading.Lock()
        completed = 0

        def process(index: int) -> bool:
            """Translate one entry into its slot; True when a request was made."""
            nonlocal completed
            source_entry = entries[index]
            current = existing.get(source_entry.key)
            requested = False

            if current is not None and current.value and options.keep_existing:
                outcome = current
                counter = 'skipped_count'
            elif source_entry.is_empty:
                outcome = LocalizationEntry(key=source_entry.key, value="", comment=source_entry.comment)
                counter = 'skipped_count'
            else:
                requested = True
                try:
                    translated = self.translator(
                        source_entry.value, options.source_language, options.target_language, options
                    )
                    outcome = LocalizationEntry(
                        key=source_entry.key,
                        value=translated,
                        comment=source_entry.comment,
                        source=source_entry.value,
                    )
                    counter = 'translated_count'
                except Exception as e:
                    logger.warning("Translation of '%s' failed: %s", source_entry.key, e)
                    outcome = LocalizationEntry(
                        key=source_entry.key,
                        value=current.value if current is not None and current.value else "",
                        comment=f"Translation failed: {e}",
                        source=source_entry.value,
                    )
                    counter = 'failed_count'

            batch.entries[index] = outcome
            with lock:
                setattr(batch, counter, getattr(batch, counter) + 1)
                completed += 1
                done = completed
            if progress is not None:
                progress(TranslateProgress(done, total, source_entry.key))
            return requested

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        delay = options.delay_between_calls / 1000.0

        if options.degree_of_parallelism == 1:
            for index in range(total):
                if cancelled():
                    batch.cancelled = True
                    break
                if process(index) and delay > 0:
                    time.sleep(delay)
            return batch

        slots = threading.BoundedSemaphore(options.degree_of_parallelism)

        def worker(index: int) -> None:
            try:
                if process(index) and delay > 0:
                    # The slot stays taken during the cooldown
                    time.sleep(delay)
            finally:
                slots.release()

        with ThreadPoolExecutor(max_workers=options.degree_of_parallelism) as executor:
            futures = []
            for index in range(total):
                slots.acquire()
                if cancelled():
                    slots.release()
                    batch.cancelled = True
                    break
                futures.append(executor.submit(worker, index))
            for future in futures:
                future.result()

        return batch
