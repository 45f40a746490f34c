"""
localekit - multi-format localization file toolkit

Parses, compares, converts and machine-translates translation files in
JSON, i18next JSON, YAML, RESX, PO, XLIFF, SRT, VTT, CSV and Fluent FTL
formats, and reads VB.NET resource wrappers.

Quick start:
    localekit scan ./locales --base en
    localekit diff en.json tr.json
    localekit check ./locales --base en --ci
    localekit convert en.resx en.json --to json
    localekit generate tr --from en --in ./locales
    localekit translate tr --from en --in ./locales --provider deepl
"""

__version__ = "1.0.0"

from .culture import detect_culture
from .errors import (
    LocaleError,
    MalformedContentError,
    PathNotFoundError,
    ProviderError,
    UnsupportedFormatError,
)
from .formats import FormatHandler, FormatRegistry, create_default_registry
from .models import (
    CheckReport,
    CheckViolation,
    CultureComparisonResult,
    DiffReport,
    LocalizationEntry,
    LocalizationFile,
    PlaceholderMismatch,
    ScanReport,
    ViolationSeverity,
)

__all__ = [
    "detect_culture",
    "LocaleError",
    "MalformedContentError",
    "PathNotFoundError",
    "ProviderError",
    "UnsupportedFormatError",
    "FormatHandler",
    "FormatRegistry",
    "create_default_registry",
    "CheckReport",
    "CheckViolation",
    "CultureComparisonResult",
    "DiffReport",
    "LocalizationEntry",
    "LocalizationFile",
    "PlaceholderMismatch",
    "ScanReport",
    "ViolationSeverity",
]
