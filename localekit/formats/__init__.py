#!/usr/bin/env python3
"""
Format handlers for localization file formats.

Supported formats:
- i18next: i18next JSON resources (.i18n.json, locales/<culture>/translation.json)
- VB: read-only VB.NET resource wrappers
- FTL: Mozilla Fluent
- XLIFF: XLIFF 1.2 / 2.0 bilingual files
- YAML: Rails/Symfony i18n YAML
- RESX: .NET resources
- JSON: nested key-value JSON
- VTT: WebVTT subtitles
- SRT: SubRip subtitles
- CSV: key/value and multi-language tables
- PO: GNU gettext catalogs
"""

from .base import FormatHandler, FormatRegistry
from .csv_handler import CsvHandler
from .ftl import FluentHandler
from .i18next import I18nextJsonHandler
from .json_handler import JsonHandler
from .po import PoHandler
from .resx import ResxHandler
from .srt import SrtHandler
from .vb import VbResourceHandler
from .vtt import VttHandler
from .xliff import XliffHandler
from .yaml_handler import YamlHandler


def create_default_registry() -> FormatRegistry:
    """
    Build a registry with every built-in handler.

    Order matters: i18next must precede the generic JSON handler.
    """
    return FormatRegistry([
        I18nextJsonHandler(),
        VbResourceHandler(),
        FluentHandler(),
        XliffHandler(),
        YamlHandler(),
        ResxHandler(),
        JsonHandler(),
        VttHandler(),
        SrtHandler(),
        CsvHandler(),
        PoHandler(),
    ])


__all__ = [
    'FormatHandler',
    'FormatRegistry',
    'create_default_registry',
    'CsvHandler',
    'FluentHandler',
    'I18nextJsonHandler',
    'JsonHandler',
    'PoHandler',
    'ResxHandler',
    'SrtHandler',
    'VbResourceHandler',
    'VttHandler',
    'XliffHandler',
    'YamlHandler',
]
