#!/usr/bin/env python3
"""Shared fixtures: a default registry and a helper for writing fixture files."""

import pytest

from localekit.formats import create_default_registry


@pytest.fixture
def registry():
    """Fixture to create a registry with every built-in handler."""
    return create_default_registry()


@pytest.fixture
def write(tmp_path):
    """Write a UTF-8 file below tmp_path and return its path as string."""
    def _write(relative: str, content: str) -> str:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
