from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Union

from .catalog import CatalogSnapshot
from .collaborators import AnalyticsSink, ExecutionSink
from .documents import DocumentIndex
from .interpreter import Action, KeyEventInterpreter, Transition, state_of
from .localization import Localizer, placeholder_text, strip_filter_words
from .logging_utils import create_session_id, log_transition, measure_time, setup_searchbar_logger
from .models import CandidateItem, PlaceholderOption, SearchView
from .ranking import has_results, rank

timed_rank = measure_time(rank)

RenderedOption = Union[CandidateItem, PlaceholderOption]


class SearchSession:
    """One open search bar: query text, filter stack and last render.

    The catalog snapshot is fetched from the provider on every ranking pass;
    only the filter stack and the input text carry over between keystrokes.
    """

    def __init__(self,
                 search_id: str,
                 catalog_provider: Callable[[], CatalogSnapshot],
                 documents: DocumentIndex,
                 localizer: Localizer,
                 executor: ExecutionSink,
                 analytics: Optional[AnalyticsSink] = None,
                 max_options: int = 30,
                 logger: Optional[logging.Logger] = None):
        self.search_id = search_id
        self.session_id = create_session_id()
        self.catalog_provider = catalog_provider
        self.documents = documents
        self.localizer = localizer
        self.executor = executor
        self.max_options = max_options
        self.logger = logger or setup_searchbar_logger("searchbar.session")

        self.query = ""
        self.has_input_value = False
        self.closed = False
        self.last_options: List[RenderedOption] = []

        snapshot = catalog_provider()
        self.interpreter = KeyEventInterpreter(
            filter_ids=snapshot.filter_ids(),
            policy=snapshot.policy,
            executor=executor,
            dismisser=self,
            analytics=analytics,
            icon_lookup=snapshot.icon_for,
            logger=self.logger,
        )

    @property
    def filters(self) -> List[str]:
        return list(self.interpreter.filters)

    def dismiss(self) -> None:
        self.closed = True

    def set_input(self, value: str) -> None:
        self.query = value
        self.has_input_value = len(value) != 0

    def render(self,
               query: Optional[str] = None,
               autofill_id: Optional[str] = None,
               truncate: bool = True) -> SearchView:
        """Rank the catalog for the current input and build the dropdown."""
        if query is not None:
            self.set_input(query)

        snapshot = self.catalog_provider()
        # The interpreter must know filter ids of the snapshot being shown
        self.interpreter.filter_ids = frozenset(snapshot.filter_ids())
        self.interpreter.policy = snapshot.policy
        self.interpreter.icon_lookup = snapshot.icon_for

        # One snapshot of stack and icon for the whole pass
        current = self.interpreter.current
        filters = current.stack
        options, duration_ms = timed_rank(
            snapshot.catalog,
            filters.tokens,
            self.query,
            autofill_id,
            self.max_options if truncate else None,
            self.documents,
        )
        self.logger.debug(
            f"🔍 Ranked {len(options)} options for '{self.query}' "
            f"(filters={list(filters)}) in {duration_ms:.1f}ms"
        )

        placeholder = None
        if not has_results(options):
            placeholder = snapshot.policy.placeholder(
                filters.tokens,
                self.localizer.text("SEARCH.NO_OPTIONS"),
                self.query,
            )

        self.last_options = list(options) + ([placeholder] if placeholder else [])

        return SearchView(
            search_id=self.search_id,
            state=state_of(filters).value,
            query=self.query,
            filters=list(filters),
            icon=current.icon,
            placeholder_text=placeholder_text(
                filters.tokens, self.documents.ready, self.localizer, snapshot.filter_names
            ),
            ready=self.documents.ready,
            has_input_value=self.has_input_value,
            options=options,
            placeholder=placeholder,
        )

    def _after_transition(self, event: str, transition: Transition) -> Transition:
        if transition.action == Action.PUSH_FILTER:
            snapshot = self.catalog_provider()
            self.set_input(strip_filter_words(
                self.query, self.filters, self.localizer, snapshot.filter_names
            ))
        elif not transition.keep_open:
            self.closed = True

        log_transition(
            self.logger, self.session_id, self.search_id, event,
            transition.action.value, transition.keep_open,
            filters=self.filters, item_id=transition.item_id, query=self.query,
        )
        return transition

    def select(self, item_id: Optional[str], query: Optional[str] = None) -> Transition:
        if query is not None:
            self.set_input(query)
        return self._after_transition("select", self.interpreter.select(item_id, self.query))

    def key_down(self, key: str, selected_id: Optional[str] = None, cursor_at_start: bool = False) -> Transition:
        transition = self.interpreter.key_down(
            key,
            selected_id=selected_id,
            options=self.last_options,
            cursor_at_start=cursor_at_start,
        )
        return self._after_transition(f"key:{key}", transition)

    def clear_input(self) -> None:
        """Clear button: drop filters and typed text together."""
        self.interpreter.reset_filters()
        self.set_input("")


class SessionManager:
    """Registry of open search sessions keyed by search id."""

    def __init__(self,
                 catalog_provider: Callable[[], CatalogSnapshot],
                 documents: DocumentIndex,
                 localizer: Localizer,
                 executor_factory: Callable[[], ExecutionSink],
                 analytics: Optional[AnalyticsSink] = None,
                 max_options: int = 30):
        self.catalog_provider = catalog_provider
        self.documents = documents
        self.localizer = localizer
        self.executor_factory = executor_factory
        self.analytics = analytics
        self.max_options = max_options
        self._sessions: Dict[str, SearchSession] = {}

    def open(self, search_id: str) -> SearchSession:
        """Start a session; an existing one for the same id is discarded."""
        session = SearchSession(
            search_id,
            catalog_provider=self.catalog_provider,
            documents=self.documents,
            localizer=self.localizer,
            executor=self.executor_factory(),
            analytics=self.analytics,
            max_options=self.max_options,
        )
        self._sessions[search_id] = session
        return session

    def get(self, search_id: str) -> Optional[SearchSession]:
        return self._sessions.get(search_id)

    def close(self, search_id: str) -> bool:
        session = self._sessions.pop(search_id, None)
        if session is None:
            return False
        session.dismiss()
        return True

    def __contains__(self, search_id: object) -> bool:
        return search_id in self._sessions
