#!/usr/bin/env python3
"""
Services operating on parsed localization files.

- scan: compare target cultures with a base culture across a directory
- diff: compare two files
- check: rule-based validation
- convert: re-serialize files in another format
- generate: create target-culture skeletons from base files
- translate: fill target files through a translation provider
- watch: re-run scan or check on file changes
"""

from .check import CheckOptions, CheckRules, CheckService
from .convert import ConvertOptions, ConvertResult, ConvertService
from .diff import DiffOptions, DiffService
from .generate import GenerateOptions, GenerateResult, GenerateService
from .providers import PROVIDERS, HttpTranslator
from .scan import ScanOptions, ScanService
from .translate import (
    TranslateOptions,
    TranslateProgress,
    TranslateResult,
    TranslateService,
    TranslationBatch,
)
from .watch import WatchOptions, WatchService

__all__ = [
    'CheckOptions',
    'CheckRules',
    'CheckService',
    'ConvertOptions',
    'ConvertResult',
    'ConvertService',
    'DiffOptions',
    'DiffService',
    'GenerateOptions',
    'GenerateResult',
    'GenerateService',
    'HttpTranslator',
    'PROVIDERS',
    'ScanOptions',
    'ScanService',
    'TranslateOptions',
    'TranslateProgress',
    'TranslateResult',
    'TranslateService',
    'TranslationBatch',
    'WatchOptions',
    'WatchService',
]
