#!/usr/bin/env python3
"""
i18next JSON format handler.

Same nested JSON grammar as JsonHandler; only file matching and culture
detection differ, so it must be registered before the generic JSON handler.
"""

import os
from typing import Optional

from ..culture import detect_i18next_culture
from .json_handler import JsonHandler


class I18nextJsonHandler(JsonHandler):
    """
    Handler for i18next resource files.

    Recognized names:
        en.i18n.json, common.tr.i18n.json
        locales/en/translation.json
        any file with "i18next" in its name
    """

    @property
    def format_id(self) -> str:
        return "i18next"

    @property
    def file_extensions(self) -> list[str]:
        return ["i18n.json"]

    def can_handle(self, path: str) -> bool:
        name = os.path.basename(path).lower()
        return (
            name.endswith(".i18n.json")
            or "i18next" in name
            or "translation.json" in name
        )

    def detect_culture(self, path: Optional[str]) -> Optional[str]:
        return detect_i18next_culture(path) if path else None
