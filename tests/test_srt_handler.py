#!/usr/bin/env python3
"""
Tests for SRT format handler: cue parsing, timing preservation and
synthetic timing for cues without stored timing.
"""

import pytest

from localekit.formats import SrtHandler
from localekit.formats.srt import synthetic_timing
from localekit.models import LocalizationEntry

SAMPLE = """1
00:00:01,000 --> 00:00:04,000
Hello world!

2
00:00:05,000 --> 00:00:08,000
Second subtitle
with two lines


3
00:00:09,000 --> 00:00:10,000
"""


@pytest.fixture
def handler():
    """Fixture to create SrtHandler instance."""
    return SrtHandler()


def test_parse_cues(handler):
    """Test 1: Index is the key, text the value, timing the comment."""
    file = handler.parse(SAMPLE, "movie.tr.srt")
    assert file.culture == "tr"
    assert [(e.key, e.value) for e in file.entries] == [
        ("1", "Hello world!"),
        ("2", "Second subtitle\nwith two lines"),
        ("3", ""),
    ]
    assert file.get_entry("1").comment == "00:00:01,000 --> 00:00:04,000"


def test_crlf_line_endings(handler):
    """Test 2: Windows line endings are accepted."""
    file = handler.parse(SAMPLE.replace("\n", "\r\n"))
    assert file.count == 3
    assert file.get_value("2") == "Second subtitle\r\nwith two lines"


def test_render_keeps_timing(handler):
    """Test 3: Stored timing is written back unchanged."""
    file = handler.parse(SAMPLE)
    output = handler.render(file)
    assert "1\n00:00:01,000 --> 00:00:04,000\nHello world!\n" in output
    assert handler.parse(output).entries == file.entries


def test_render_synthetic_timing(handler):
    """Test 4: Non-numeric keys get the running index; bad timing is replaced."""
    file = handler.create_file([
        LocalizationEntry("intro", "Hi"),
        LocalizationEntry("7", "Bye", comment="not a timing"),
    ])
    output = handler.render(file)
    assert output.startswith("1\n00:00:01,000 --> 00:00:02,000\nHi\n")
    assert "7\n00:00:02,000 --> 00:00:03,000\nBye\n" in output


def test_synthetic_timing_past_one_minute():
    """Test 5: Synthetic timings roll over minutes and hours."""
    assert synthetic_timing(61) == "00:01:01,000 --> 00:01:02,000"
    assert synthetic_timing(3599, ".") == "00:59:59.000 --> 01:00:00.000"
