#!/usr/bin/env python3
"""
Tests for the WebVTT handler.
"""

import pytest

from localekit.formats import VttHandler
from localekit.models import LocalizationEntry

SAMPLE = """WEBVTT

intro
00:00:01.000 --> 00:00:04.000
Welcome!

00:00:05.000 --> 00:00:08.000 align:start
First line
second line

NOTE this block has no timing

00:00:09.000 --> 00:00:10.000
Last
"""


@pytest.fixture
def handler():
    """Fixture to create VttHandler instance."""
    return VttHandler()


def test_parse_cues(handler):
    """Test 1: Cue ids become keys; other cues are keyed by position."""
    file = handler.parse(SAMPLE, "movie.de.vtt")
    assert file.culture == "de"
    assert [(e.key, e.value) for e in file.entries] == [
        ("intro", "Welcome!"),
        ("2", "First line\nsecond line"),
        ("3", "Last"),
    ]
    assert file.get_entry("intro").comment == "00:00:01.000 --> 00:00:04.000"


def test_render(handler):
    """Test 2: Output starts with WEBVTT and writes textual ids."""
    file = handler.parse(SAMPLE)
    output = handler.render(file)
    assert output.startswith("WEBVTT\n\nintro\n00:00:01.000 --> 00:00:04.000\nWelcome!\n")
    assert "\n2\n" not in output
    assert [(e.key, e.value) for e in handler.parse(output).entries] == [
        (e.key, e.value) for e in file.entries
    ]


def test_render_synthetic_timing(handler):
    """Test 3: Entries without a valid timing get a dotted synthetic one."""
    output = handler.render(handler.create_file([LocalizationEntry("1", "Hi")]))
    assert output == "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n"
