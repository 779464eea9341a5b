from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

import yaml
from pydantic import ValidationError

from .logging_utils import setup_searchbar_logger
from .models import CandidateItem, ItemKind
from .no_results import NoOptionsDescriptor, NoResultsPolicy

logger = setup_searchbar_logger("searchbar.catalog")


class CatalogError(ValueError):
    """Raised when a catalog is malformed or holds duplicate ids."""


def build_catalog(groups: Mapping[str, Sequence[CandidateItem]]) -> Dict[str, Tuple[CandidateItem, ...]]:
    """Freeze grouped items into a catalog, rejecting ids seen in two places."""
    seen: Dict[str, str] = {}
    catalog: Dict[str, Tuple[CandidateItem, ...]] = {}

    for group_key, items in groups.items():
        for item in items:
            if item.id in seen:
                raise CatalogError(
                    f"Duplicate option id '{item.id}' in groups '{seen[item.id]}' and '{group_key}'"
                )
            seen[item.id] = group_key
        catalog[group_key] = tuple(items)

    return catalog


@dataclass
class CatalogSnapshot:
    """Everything a search session needs from the catalog provider."""

    catalog: Dict[str, Tuple[CandidateItem, ...]] = field(default_factory=dict)
    headers: List[str] = field(default_factory=list)
    icons: Dict[str, str] = field(default_factory=dict)
    filter_names: Dict[str, str] = field(default_factory=dict)
    policy: NoResultsPolicy = field(default_factory=NoResultsPolicy)

    def filter_ids(self) -> Set[str]:
        return {
            item.id
            for items in self.catalog.values()
            for item in items
            if item.kind == ItemKind.FILTER
        }

    def icon_for(self, token: Optional[str]) -> Optional[str]:
        if token is None:
            return None
        return self.icons.get(token)


def _parse_items(group_key: str, raw_items) -> List[CandidateItem]:
    items = []
    for raw in raw_items or []:
        try:
            items.append(CandidateItem(**raw))
        except (TypeError, ValidationError) as e:
            # Malformed entries are skipped, the rest of the group still loads
            logger.warning(f"⚠️ Skipping malformed option in group '{group_key}': {e}")
            continue
    return items


def load_catalog(catalog_file: Path) -> CatalogSnapshot:
    """
    Load a YAML catalog file into a CatalogSnapshot.

    Args:
        catalog_file: path to catalog.yml

    Returns:
        CatalogSnapshot: empty snapshot when the file is missing or empty

    Raises:
        CatalogError: the file or one of its sections is not a mapping, or an id
            repeats across groups

    Layout:
        groups:        ordered mapping of group key -> list of options
        icons:         category token -> icon class
        filter_names:  category token -> raw display name
        no_results:    category token -> {label, type, execute}
    """
    if not catalog_file.exists():
        logger.warning(f"⚠️ Catalog file not found: {catalog_file}")
        return CatalogSnapshot()

    data = yaml.safe_load(catalog_file.read_text(encoding="utf-8"))
    if not data:
        return CatalogSnapshot()
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog must be a mapping: {catalog_file}")

    sections = {}
    for section in ("groups", "icons", "filter_names", "no_results"):
        value = data.get(section) or {}
        if not isinstance(value, dict):
            raise CatalogError(f"Catalog section '{section}' must be a mapping: {catalog_file}")
        sections[section] = value

    groups = {key: _parse_items(key, raw_items) for key, raw_items in sections["groups"].items()}

    headers = [
        item.title
        for items in groups.values()
        for item in items
        if item.kind == ItemKind.HEADER
    ]

    policy = NoResultsPolicy()
    for token, raw in sections["no_results"].items():
        try:
            policy.register(token, NoOptionsDescriptor(**raw))
        except TypeError as e:
            raise CatalogError(f"Bad no_results entry for '{token}': {e}") from e

    snapshot = CatalogSnapshot(
        catalog=build_catalog(groups),
        headers=headers,
        icons=dict(sections["icons"]),
        filter_names=dict(sections["filter_names"]),
        policy=policy,
    )
    logger.info(f"📚 Loaded catalog with {len(snapshot.catalog)} groups from {catalog_file}")
    return snapshot
