#!/usr/bin/env python3
"""
Watch service: re-run scan or check when localization files change.

Changes are detected by polling file modification times on a background
thread. A burst of changes is collapsed into one run by a debounce timer.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..errors import LocaleError, PathNotFoundError
from ..formats import FormatRegistry
from .check import CheckOptions, CheckService
from .scan import ScanOptions, ScanService, iter_supported_paths

logger = logging.getLogger(__name__)

WATCH_MODES = ("scan", "check")

Snapshot = dict[str, tuple[float, int]]


@dataclass
class WatchOptions:
    """Options for watch. debounce_ms is in milliseconds, poll_interval in seconds."""
    base_culture: str = "en"
    target_cultures: list[str] = field(default_factory=list)
    mode: str = "scan"
    recursive: bool = True
    debounce_ms: int = 500
    poll_interval: float = 0.5
    check_rules: list[str] = field(default_factory=list)


class WatchService:
    """
    Polls a directory and reports a fresh scan or check after changes.

    Usage:
        with WatchService(registry) as watcher:
            watcher.start("locales", WatchOptions(), on_change=print)
            ...
    """

    def __init__(self, registry: FormatRegistry):
        self.registry = registry
        self.scanner = ScanService(registry)
        self.checker = CheckService(registry)
        self._path: Optional[str] = None
        self._options: Optional[WatchOptions] = None
        self._on_change: Optional[Callable[[Any], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None
        self._snapshot: Snapshot = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(
        self,
        path: str,
        options: WatchOptions,
        on_change: Callable[[Any], None],
        on_error: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Start watching a directory.

        Args:
            path: Directory to watch
            options: Watch options
            on_change: Receives the ScanReport or CheckReport after each change
            on_error: Receives an error message when a run fails

        Raises:
            PathNotFoundError: path is not an existing directory
            ValueError: unknown mode
        """
        if not os.path.isdir(path):
            raise PathNotFoundError(f"Directory not found: {path}")
        if options.mode not in WATCH_MODES:
            raise ValueError(f"Unknown watch mode: {options.mode}. Available: {', '.join(WATCH_MODES)}")

        self.stop()
        self._path = path
        self._options = options
        self._on_change = on_change
        self._on_error = on_error
        self._snapshot = self.take_snapshot()
        self._stop.clear()
        self._thread = threading.Thread(target=self._poll_loop, name="localekit-watch", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and cancel any pending run."""
        self._stop.set()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def take_snapshot(self) -> Snapshot:
        """Modification time and size of every supported file."""
        snapshot: Snapshot = {}
        for file_path in iter_supported_paths(self._path, self.registry, self._options.recursive):
            try:
                stat = os.stat(file_path)
            except OSError:
                continue
            snapshot[file_path] = (stat.st_mtime, stat.st_size)
        return snapshot

    def poll(self) -> bool:
        """Compare the directory with the last snapshot; schedule a run on change."""
        snapshot = self.take_snapshot()
        if snapshot == self._snapshot:
            return False
        changed = set(snapshot.items()) ^ set(self._snapshot.items())
        logger.info("Detected changes in %d file(s)", len({path for path, _ in changed}))
        self._snapshot = snapshot
        self._schedule()
        return True

    def _poll_loop(self) -> None:
        while not self._stop.wait(self._options.poll_interval):
            try:
                self.poll()
            except OSError as e:
                self._report_error(str(e))

    def _schedule(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._options.debounce_ms / 1000.0, self.run_once)
            self._timer.daemon = True
            self._timer.start()

    def run_once(self) -> Any:
        """Run scan or check now and pass the report to on_change."""
        options = self._options
        try:
            if options.mode == "check":
                report = self.checker.check(self._path, CheckOptions(
                    rules=options.check_rules,
                    base_culture=options.base_culture,
                    recursive=options.recursive,
                ))
            else:
                report = self.scanner.scan(self._path, ScanOptions(
                    base_culture=options.base_culture,
                    target_cultures=options.target_cultures,
                    recursive=options.recursive,
                ))
        except (LocaleError, OSError) as e:
            self._report_error(str(e))
            return None

        if self._on_change is not None:
            self._on_change(report)
        return report

    def _report_error(self, message: str) -> None:
        logger.warning("Watch run failed: %s", message)
        if self._on_error is not None:
            self._on_error(message)
