#!/usr/bin/env python3
"""
Culture code detection from file names.

A culture code is either two letters ("en") or a two-letter language with a
region suffix ("en-US", "zh-Hant" is too long and does not qualify). The code
is taken from the last dot-separated segment of the file name, so "en.json",
"messages.tr.yaml" and "Resources.de-DE.resx" all carry one.
"""

import os
from typing import Optional

I18N_SUFFIX = ".i18n"


def looks_like_culture_code(value: str) -> bool:
    """Check whether a name segment has the shape of a culture code."""
    if len(value) == 2:
        return value.isalpha()

    if 4 <= len(value) <= 5 and value.count('-') == 1:
        language, region = value.split('-')
        return (
            len(language) == 2
            and language.isalpha()
            and len(region) >= 2
            and region.isalnum()
        )

    return False


def _culture_from_stem(stem: str) -> Optional[str]:
    candidate = stem.rsplit('.', 1)[-1]
    if looks_like_culture_code(candidate):
        return candidate.lower()
    return None


def detect_culture(path: str) -> Optional[str]:
    """
    Detect the culture code of a localization file.

    Args:
        path: File name or path; only the file name is examined

    Returns:
        Lowercase culture code, or None when the name carries none
    """
    if not path:
        return None
    stem, _ = os.path.splitext(os.path.basename(path))
    return _culture_from_stem(stem)


def detect_i18next_culture(path: str) -> Optional[str]:
    """
    Detect the culture of an i18next resource.

    i18next projects use either "<culture>.i18n.json" style names or a
    "locales/<culture>/translation.json" directory layout.
    """
    if not path:
        return None
    stem, _ = os.path.splitext(os.path.basename(path))

    if stem.lower().endswith(I18N_SUFFIX):
        culture = _culture_from_stem(stem[:-len(I18N_SUFFIX)])
        if culture:
            return culture

    parent = os.path.basename(os.path.dirname(path))
    if parent and looks_like_culture_code(parent):
        return parent.lower()

    return detect_culture(path)
