from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .models import PlaceholderOption


@dataclass(frozen=True)
class NoOptionsDescriptor:
    """What a filter offers when nothing under it matches.

    `execute` is an execution token handed to the execution sink together
    with the raw query text; None means the placeholder is inert.
    """
    label: str
    type: str = "placeholder"
    execute: Optional[str] = None


class NoResultsPolicy:
    """Per-filter registry of no-results descriptors."""

    def __init__(self, descriptors: Optional[Dict[str, NoOptionsDescriptor]] = None):
        self._descriptors: Dict[str, NoOptionsDescriptor] = dict(descriptors or {})

    def register(self, token: str, descriptor: NoOptionsDescriptor) -> None:
        self._descriptors[token] = descriptor

    def descriptor_for(self, token: Optional[str]) -> Optional[NoOptionsDescriptor]:
        if token is None:
            return None
        return self._descriptors.get(token)

    def placeholder(self, filters: Sequence[str], default_label: str, query_text: str = "") -> PlaceholderOption:
        """Build the placeholder for the deepest active filter."""
        descriptor = self.descriptor_for(filters[-1] if filters else None)

        if descriptor is None:
            return PlaceholderOption(title=default_label)

        if not descriptor.label:
            return PlaceholderOption(title=default_label, type=descriptor.type, execute=descriptor.execute)

        return PlaceholderOption(
            title=descriptor.label.replace("{query}", query_text),
            title_type="custom",
            type=descriptor.type,
            execute=descriptor.execute,
        )
