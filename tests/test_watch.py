#!/usr/bin/env python3
"""
Tests for WatchService polling and debounced runs.
"""

import json
import threading

import pytest

from localekit.errors import PathNotFoundError
from localekit.models import CheckReport, ScanReport
from localekit.services import WatchOptions, WatchService

# Long intervals keep the background thread and timer out of synchronous tests
IDLE = dict(poll_interval=60, debounce_ms=60000)


def test_start_validates_path_and_mode(registry, tmp_path):
    """Test 1: Missing directories and unknown modes are rejected."""
    watcher = WatchService(registry)
    with pytest.raises(PathNotFoundError):
        watcher.start(str(tmp_path / "nope"), WatchOptions(), print)
    with pytest.raises(ValueError):
        watcher.start(str(tmp_path), WatchOptions(mode="lint"), print)
    assert not watcher.is_running


def test_poll_detects_changes(registry, write, tmp_path):
    """Test 2: poll() reports modified and new files once."""
    path = write("en.json", json.dumps({"a": "A"}))
    with WatchService(registry) as watcher:
        watcher.start(str(tmp_path), WatchOptions(**IDLE), lambda report: None)
        assert watcher.is_running
        assert not watcher.poll()

        write("en.json", json.dumps({"a": "A", "b": "B"}))
        assert watcher.poll()
        assert not watcher.poll()

        write("tr.json", "{}")
        assert watcher.poll()
        assert path in watcher.take_snapshot()

    assert not watcher.is_running


def test_run_once_scan(registry, write, tmp_path):
    """Test 3: Scan mode passes a ScanReport to on_change."""
    write("en.json", json.dumps({"a": "A", "b": "B"}))
    write("tr.json", json.dumps({"a": "A"}))
    reports = []
    with WatchService(registry) as watcher:
        watcher.start(str(tmp_path), WatchOptions(target_cultures=["tr"], **IDLE), reports.append)
        report = watcher.run_once()

    assert isinstance(report, ScanReport)
    assert reports == [report]
    assert report.get_result("tr").missing_keys == ["b"]


def test_run_once_check(registry, write, tmp_path):
    """Test 4: Check mode passes a CheckReport to on_change."""
    write("en.json", json.dumps({"a": ""}))
    with WatchService(registry) as watcher:
        watcher.start(str(tmp_path), WatchOptions(mode="check", **IDLE), lambda report: None)
        report = watcher.run_once()

    assert isinstance(report, CheckReport)
    assert report.violation_count == 1


def test_errors_go_to_on_error(registry, write, tmp_path):
    """Test 5: A failing run is reported, not raised."""
    write("en.json", "{}")
    errors = []
    with WatchService(registry) as watcher:
        watcher.start(str(tmp_path), WatchOptions(**IDLE), lambda report: None, errors.append)
        tmp_path.joinpath("en.json").unlink()
        tmp_path.rmdir()
        assert watcher.run_once() is None

    assert len(errors) == 1


def test_debounced_change_triggers_run(registry, write, tmp_path):
    """Test 6: A change on disk leads to one on_change call after the debounce."""
    write("en.json", json.dumps({"a": "A"}))
    done = threading.Event()
    reports = []

    def on_change(report):
        reports.append(report)
        done.set()

    with WatchService(registry) as watcher:
        watcher.start(str(tmp_path), WatchOptions(poll_interval=0.05, debounce_ms=50), on_change)
        write("tr.json", json.dumps({"b": "B"}))
        assert done.wait(5)

    assert reports[0].get_result("tr").orphan_keys == ["b"]
