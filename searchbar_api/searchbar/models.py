from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Id of the synthetic option shown when nothing else matches
PLACEHOLDER_ID = "NO_OPTIONS-placeholder"


class ItemKind(str, Enum):
    HEADER = "header"
    FILTER = "filter"
    LEAF = "leaf"


class CandidateItem(BaseModel):
    """One searchable entry of the dropdown."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    kind: ItemKind = ItemKind.LEAF
    category: Tuple[str, ...] = ()
    path_info: Optional[str] = None  # breadcrumb like "Doc > Group/Layer"
    hidden: bool = False
    requires_active_document: bool = False


class PlaceholderOption(BaseModel):
    """Synthetic "no matches" option, built fresh for every render."""

    model_config = ConfigDict(frozen=True)

    id: str = PLACEHOLDER_ID
    title: str
    title_type: str = "default"  # "custom" | "default"
    type: str = "placeholder"
    execute: Optional[str] = None


class SearchView(BaseModel):
    """Everything the host needs to draw the search bar for one keystroke."""

    search_id: str
    state: str
    query: str
    filters: List[str]
    icon: Optional[str] = None
    placeholder_text: str
    ready: bool
    has_input_value: bool
    options: List[CandidateItem]
    placeholder: Optional[PlaceholderOption] = None


class DocumentsPayload(BaseModel):
    documents: List[str] = Field(default_factory=list)
    selected: Optional[str] = None
    uninitialized: List[str] = Field(default_factory=list)


class DocumentPosition(BaseModel):
    index: int = Field(ge=0)


class InputEvent(BaseModel):
    value: str = ""


class SelectionEvent(BaseModel):
    id: Optional[str] = None
    query: Optional[str] = None


class KeyEvent(BaseModel):
    key: str
    selected_id: Optional[str] = None
    cursor_at_start: bool = False
