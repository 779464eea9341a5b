from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .collaborators import DocumentContext
from .models import CandidateItem, ItemKind

Catalog = Mapping[str, Sequence[CandidateItem]]
RankedCandidate = Tuple[CandidateItem, int]

HEADER_PRIORITY = -1
AUTOFILL_PRIORITY = 0
UNFILTERED_PRIORITY = 1

PATH_SEPARATORS_RE = re.compile(r"[/,>]")


def _searchable_path(path_info: Optional[str]) -> str:
    # Path is searched both as written and with its separators blanked out
    path = path_info.lower() + " " if path_info else ""
    return path + PATH_SEPARATORS_RE.sub(" ", path)


def _match_priority(item: CandidateItem, terms: Sequence[str]) -> Optional[int]:
    """Priority of an item against query terms, or None when no term hits.

    Each matching term scores 1, plus 1 if the title contains it, plus 1 if
    it is a whole word of the title. 3 * len(terms) bounds the score, so the
    result stays positive.
    """
    title = item.title.lower()
    title_words = title.split()
    path = _searchable_path(item.path_info)

    matched = False
    score = 0
    for term in terms:
        title_contains = term in title
        path_contains = term in path
        title_matches = title_contains and term in title_words

        if title_contains or path_contains:
            matched = True
            score += 1
            if title_contains:
                score += 1
            if title_matches:
                score += 1

    if not matched:
        return None
    return UNFILTERED_PRIORITY + 1 + 3 * len(terms) - score


def _prioritize(item: CandidateItem,
                filters: Sequence[str],
                terms: Sequence[str],
                autofill_id: Optional[str],
                documents: Optional[DocumentContext]) -> Optional[int]:
    if item.hidden:
        return None

    # Headers are group markers, never matched
    if item.kind == ItemKind.HEADER:
        return HEADER_PRIORITY

    category = tuple(item.category)

    if item.kind == ItemKind.FILTER:
        # Don't offer the filter that is already applied
        if category == tuple(filters):
            return None
        if item.requires_active_document and (documents is None or not documents.has_active_document()):
            return None

    if any(token not in category for token in filters):
        return None

    if terms:
        priority = _match_priority(item, terms)
        if priority is None:
            return None
    else:
        priority = UNFILTERED_PRIORITY

    if autofill_id is not None and item.id == autofill_id:
        return AUTOFILL_PRIORITY
    return priority


def rank_group(items: Iterable[CandidateItem],
               filters: Sequence[str] = (),
               query_text: str = "",
               autofill_id: Optional[str] = None,
               documents: Optional[DocumentContext] = None) -> List[RankedCandidate]:
    """Eligible items of one group with their priorities, best first.

    sorted() is stable, so equal priorities keep catalog order.
    """
    terms = query_text.lower().split()
    ranked = []
    for item in items:
        priority = _prioritize(item, filters, terms, autofill_id, documents)
        if priority is not None:
            ranked.append((item, priority))
    return sorted(ranked, key=lambda pair: pair[1])


def rank(catalog: Optional[Catalog],
         filters: Sequence[str] = (),
         query_text: str = "",
         autofill_id: Optional[str] = None,
         truncate_to: Optional[int] = None,
         documents: Optional[DocumentContext] = None) -> List[CandidateItem]:
    """Rank a grouped catalog into one flat dropdown list.

    Groups are promoted to the front in two passes: first the group holding
    filter options, then any group holding the autofill suggestion. Both
    passes and the remaining groups keep catalog order.
    """
    if not catalog:
        return []

    filter_groups: List[List[CandidateItem]] = []
    autofill_groups: List[List[CandidateItem]] = []
    other_groups: List[List[CandidateItem]] = []

    for items in catalog.values():
        ranked = rank_group(items, filters, query_text, autofill_id, documents)
        options = [item for item, _ in ranked]

        if any(item.kind == ItemKind.FILTER for item in options):
            filter_groups.append(options)
        elif any(priority == AUTOFILL_PRIORITY for _, priority in ranked):
            autofill_groups.append(options)
        else:
            other_groups.append(options)

    result = [
        item
        for group in filter_groups + autofill_groups + other_groups
        for item in group
    ]

    if truncate_to is not None:
        return result[:max(truncate_to, 0)]
    return result


def has_results(options: Iterable[CandidateItem]) -> bool:
    """True when the list holds anything besides group headers."""
    return any(item.kind != ItemKind.HEADER for item in options)
