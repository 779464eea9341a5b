from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

FILTER_ID_SEPARATOR = "-"


def decompose_filter_id(item_id: str) -> Tuple[str, ...]:
    """Split a filter option id into the category tokens it narrows to.

    The first segment names the option type and is dropped:
    "FILTER-LAYER-pixel" -> ("LAYER", "pixel").
    """
    if not item_id:
        return ()
    return tuple(item_id.split(FILTER_ID_SEPARATOR)[1:])


@dataclass(frozen=True)
class FilterStack:
    """Ordered category tokens the user has drilled into.

    Immutable: push and reset return a new stack.
    """

    tokens: Tuple[str, ...] = ()

    def push(self, tokens: Iterable[str]) -> "FilterStack":
        merged = list(self.tokens)
        for token in tokens:
            if token not in merged:
                merged.append(token)
        return FilterStack(tuple(merged))

    def reset(self) -> "FilterStack":
        return FilterStack()

    # Removing the last filter collapses every level at once
    pop = reset

    @property
    def last(self) -> Optional[str]:
        return self.tokens[-1] if self.tokens else None

    @property
    def active(self) -> bool:
        return bool(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, token: object) -> bool:
        return token in self.tokens
