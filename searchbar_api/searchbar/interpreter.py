from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from .collaborators import AnalyticsSink, DismissalSink, ExecutionSink
from .filters import FILTER_ID_SEPARATOR, FilterStack, decompose_filter_id
from .logging_utils import setup_searchbar_logger
from .models import PLACEHOLDER_ID
from .no_results import NoResultsPolicy

WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


class State(str, Enum):
    IDLE = "idle"           # no filter applied, whole catalog searchable
    FILTERED = "filtered"   # one or more category tokens applied


class Action(str, Enum):
    """What the interpreter did with an event."""
    PUSH_FILTER = "push_filter"
    RESET_FILTER = "reset_filter"
    EXECUTE = "execute"
    EXECUTE_FALLBACK = "execute_fallback"
    DISMISS = "dismiss"
    CLEAR_AUTOFILL = "clear_autofill"
    PREVENT_DEFAULT = "prevent_default"
    NONE = "none"


@dataclass(frozen=True)
class Transition:
    """Result of feeding one event to the interpreter."""
    action: Action
    keep_open: bool = True
    prevent_list_default: bool = False
    item_id: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class FilterState:
    """A filter stack and the icon derived from it, swapped in one assignment."""
    stack: FilterStack = field(default_factory=FilterStack)
    icon: Optional[str] = None


def state_of(stack: FilterStack) -> State:
    return State.FILTERED if stack.active else State.IDLE


def kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in WORD_RE.findall(text))


class KeyEventInterpreter:
    """Turns selections and key presses into filter changes or terminal actions.

    Owns the session's FilterState. Side effects are limited to replacing
    that value, analytics events, and calls into the execution and dismissal
    sinks.
    """

    def __init__(self,
                 filter_ids: Iterable[str],
                 policy: NoResultsPolicy,
                 executor: ExecutionSink,
                 dismisser: DismissalSink,
                 analytics: Optional[AnalyticsSink] = None,
                 icon_lookup: Optional[Callable[[Optional[str]], Optional[str]]] = None,
                 logger: Optional[logging.Logger] = None):
        self.filter_ids = frozenset(filter_ids)
        self.policy = policy
        self.executor = executor
        self.dismisser = dismisser
        self.analytics = analytics
        self.icon_lookup = icon_lookup
        self.logger = logger or setup_searchbar_logger("searchbar.interpreter")
        self._current = FilterState()

    @property
    def current(self) -> FilterState:
        return self._current

    @property
    def filters(self) -> FilterStack:
        return self._current.stack

    @property
    def icon(self) -> Optional[str]:
        return self._current.icon

    @property
    def state(self) -> State:
        return state_of(self._current.stack)

    def is_filter_id(self, item_id: Optional[str]) -> bool:
        return item_id is not None and item_id in self.filter_ids

    def _set_filters(self, filters: FilterStack) -> None:
        icon = self.icon_lookup(filters.last) if (self.icon_lookup and filters.active) else None
        self._current = FilterState(filters, icon)

    def apply_filter(self, item_id: str) -> Transition:
        self._set_filters(self.filters.push(decompose_filter_id(item_id)))
        return Transition(Action.PUSH_FILTER, keep_open=True, prevent_list_default=True, item_id=item_id)

    def reset_filters(self) -> Transition:
        self._set_filters(self.filters.reset())
        return Transition(Action.RESET_FILTER, keep_open=True)

    def _log_event(self, category: str, action: str, label: str) -> None:
        if self.analytics is None:
            return
        try:
            self.analytics.log_event(category, action, label)
        except Exception as e:
            self.logger.warning(f"⚠️ Analytics event {category}/{action}/{label} failed: {e}")

    def select(self, item_id: Optional[str], query_text: str = "") -> Transition:
        """Handle a confirmed selection from the dropdown."""
        if not item_id:
            self.dismisser.dismiss()
            return Transition(Action.DISMISS, keep_open=False)

        if item_id == PLACEHOLDER_ID:
            descriptor = self.policy.descriptor_for(self.filters.last)
            if descriptor is not None and descriptor.execute:
                self.executor.execute_with_fallback(query_text, descriptor.execute)
                return Transition(Action.EXECUTE_FALLBACK, keep_open=False, item_id=item_id)
            return Transition(Action.NONE, keep_open=True, item_id=item_id,
                              reason="No fallback registered for the active filter")

        if self.is_filter_id(item_id):
            return self.apply_filter(item_id)

        filter_state = "filter-active" if self.filters.active else "filter-inactive"
        option_type = item_id.split(FILTER_ID_SEPARATOR)[0]

        self.executor.execute(item_id)
        self._log_event("search", filter_state, kebab_case(f"category-{option_type}"))
        return Transition(Action.EXECUTE, keep_open=False, item_id=item_id)

    def key_down(self,
                 key: str,
                 selected_id: Optional[str] = None,
                 options: Optional[Sequence[object]] = None,
                 cursor_at_start: bool = False) -> Transition:
        """Handle a key press in the search input.

        `options` is the currently rendered list (placeholder included),
        `selected_id` the highlighted entry.
        """
        if key == "Return":
            first_execute = getattr(options[0], "execute", None) if options else None
            if not first_execute:
                return Transition(Action.PREVENT_DEFAULT, keep_open=True, prevent_list_default=True)
            return Transition(Action.NONE, keep_open=True)

        if key == "Enter":
            if not selected_id and not options:
                return Transition(Action.PREVENT_DEFAULT, keep_open=True, prevent_list_default=True)
            if self.is_filter_id(selected_id):
                return self.apply_filter(selected_id)
            if not selected_id or selected_id == PLACEHOLDER_ID:
                return Transition(Action.CLEAR_AUTOFILL, keep_open=True, item_id=selected_id)
            return Transition(Action.NONE, keep_open=True, item_id=selected_id)

        if key == "Tab":
            return Transition(Action.PREVENT_DEFAULT, keep_open=True, prevent_list_default=True)

        if key == "Escape":
            if selected_id == PLACEHOLDER_ID:
                self._log_event("tools", "search", "failed-search")
            self.dismisser.dismiss()
            return Transition(Action.DISMISS, keep_open=False)

        if key == "Backspace" and cursor_at_start and self.filters.active:
            return self.reset_filters()

        return Transition(Action.NONE, keep_open=True)
