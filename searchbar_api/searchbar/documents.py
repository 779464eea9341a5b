from __future__ import annotations

from typing import Iterable, List, Optional, Set


class DocumentIndex:
    """In-process view of the host's open documents.

    Answers the two questions the search bar asks about documents: is there
    an active document (for document-only filters), and are all documents
    initialized (the bar is read-only until they are).
    """

    def __init__(self, document_ids: Iterable[str] = (), selected: Optional[str] = None):
        self._document_ids: List[str] = []
        self._selected_id: Optional[str] = None
        self._uninitialized: Set[str] = set()
        self.reset(document_ids, selected)

    def reset(self, document_ids: Iterable[str], selected: Optional[str] = None,
              uninitialized: Iterable[str] = ()) -> None:
        self._document_ids = list(dict.fromkeys(document_ids))
        self._uninitialized = {doc for doc in uninitialized if doc in self._document_ids}
        if selected is not None and selected in self._document_ids:
            self._selected_id = selected
        else:
            self._selected_id = self._document_ids[0] if self._document_ids else None

    @property
    def document_ids(self) -> List[str]:
        return list(self._document_ids)

    @property
    def current_document_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_index(self) -> Optional[int]:
        if self._selected_id is None:
            return None
        return self._document_ids.index(self._selected_id)

    def has_active_document(self) -> bool:
        return self._selected_id is not None

    @property
    def ready(self) -> bool:
        return not self._uninitialized

    def select(self, document_id: str) -> None:
        if document_id not in self._document_ids:
            raise KeyError(document_id)
        self._selected_id = document_id

    def mark_initialized(self, document_id: str) -> None:
        self._uninitialized.discard(document_id)

    def update_position(self, document_id: str, index: int) -> None:
        """Move (or insert) a document to the given position in the index."""
        if document_id in self._document_ids:
            self._document_ids.remove(document_id)
        self._document_ids.insert(index, document_id)

    def close(self, document_id: str, next_selected: Optional[str] = None) -> None:
        """Drop a document from the index.

        The host names the document to activate next; without one, a closed
        selected document hands the selection to its neighbour.
        """
        if document_id not in self._document_ids:
            raise KeyError(document_id)

        index = self._document_ids.index(document_id)
        self._document_ids.remove(document_id)
        self._uninitialized.discard(document_id)

        if not self._document_ids:
            self._selected_id = None
        elif next_selected is not None:
            self.select(next_selected)
        elif self._selected_id == document_id:
            self._selected_id = self._document_ids[min(index, len(self._document_ids) - 1)]

    def _neighbour(self, step: int) -> Optional[str]:
        if self._selected_id is None:
            return None
        index = (self._document_ids.index(self._selected_id) + step) % len(self._document_ids)
        return self._document_ids[index]

    def next_document(self) -> Optional[str]:
        return self._neighbour(1)

    def previous_document(self) -> Optional[str]:
        return self._neighbour(-1)
