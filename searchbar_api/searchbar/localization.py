from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml

from .logging_utils import setup_searchbar_logger

logger = setup_searchbar_logger("searchbar.localization")

DEFAULT_STRINGS = {
    "SEARCH": {
        "PLACEHOLDER": "Search commands, layers and documents",
        "PLACEHOLDER_FILTER": "Search ",
        "PLACEHOLDER_INITIALIZING": "Initializing...",
        "NO_OPTIONS": "No options match your search",
        "CATEGORIES": {},
    }
}


class LocalizationError(KeyError):
    """Raised when a string key has no translation."""


class Localizer:
    """Dotted-key lookup into a nested string table."""

    def __init__(self, strings: Optional[Mapping[str, Any]] = None):
        self.strings = strings if strings is not None else DEFAULT_STRINGS

    @classmethod
    def from_file(cls, strings_file: Path) -> "Localizer":
        """Load a YAML string table; falls back to built-in strings when missing."""
        if not strings_file.exists():
            logger.warning(f"⚠️ String table not found, using defaults: {strings_file}")
            return cls()
        data = yaml.safe_load(strings_file.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            logger.warning(f"⚠️ String table is not a mapping, using defaults: {strings_file}")
            return cls()
        return cls(data)

    def localize(self, key: str) -> str:
        node: Any = self.strings
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                raise LocalizationError(key)
            node = node[part]
        if not isinstance(node, str):
            raise LocalizationError(key)
        return node

    def text(self, key: str) -> str:
        """Like localize, but falls back to the built-in string, then the key."""
        try:
            return self.localize(key)
        except LocalizationError:
            try:
                return Localizer(DEFAULT_STRINGS).localize(key)
            except LocalizationError:
                logger.warning(f"⚠️ Missing string: {key}")
                return key

    def category_label(self, token: str, raw_names: Optional[Mapping[str, str]] = None) -> str:
        """Human label for a category token.

        Falls back to the raw name map (user-named filters such as library
        names), then to the token itself.
        """
        try:
            return self.localize(f"SEARCH.CATEGORIES.{token}")
        except LocalizationError:
            raw = (raw_names or {}).get(token)
            return raw if raw else token


def strip_filter_words(input_text: str,
                       filters: Sequence[str],
                       localizer: Localizer,
                       raw_names: Optional[Mapping[str, str]] = None) -> str:
    """Input text to keep after a filter was applied.

    When any typed word is part of the applied filters' labels, the user was
    typing the filter name, so the whole input is cleared.
    """
    if not filters:
        return input_text

    labels = "".join(
        localizer.category_label(token, raw_names).replace(" ", "") for token in filters
    ).lower()

    words = input_text.split()
    if not words or any(word.lower() in labels for word in words):
        return ""
    return " ".join(words)


def placeholder_text(filters: Sequence[str],
                     ready: bool,
                     localizer: Localizer,
                     raw_names: Optional[Mapping[str, str]] = None) -> str:
    """Prompt shown in the empty search input."""
    if filters:
        return localizer.text("SEARCH.PLACEHOLDER_FILTER") + localizer.category_label(filters[-1], raw_names)
    if not ready:
        return localizer.text("SEARCH.PLACEHOLDER_INITIALIZING")
    return localizer.text("SEARCH.PLACEHOLDER")
