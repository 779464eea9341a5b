from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .logging_utils import setup_searchbar_logger


class DocumentContext(Protocol):
    """Answers whether the host currently has an active document."""

    def has_active_document(self) -> bool:
        ...


class ExecutionSink(Protocol):
    """Carries out confirmed options on the host side."""

    def execute(self, item_id: str) -> None:
        ...

    def execute_with_fallback(self, query_text: str, execute: str) -> None:
        ...


class DismissalSink(Protocol):
    def dismiss(self) -> None:
        ...


class AnalyticsSink(Protocol):
    def log_event(self, category: str, action: str, label: str) -> None:
        ...


@dataclass(frozen=True)
class ExecutedAction:
    """Record of one call into the execution sink."""
    action: str  # "execute" | "execute_with_fallback"
    item_id: Optional[str] = None
    query: Optional[str] = None
    execute: Optional[str] = None


class RecordingExecutor:
    """Execution sink that queues actions for the host to pick up."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.actions: List[ExecutedAction] = []
        self.logger = logger or setup_searchbar_logger("searchbar.execution")

    def execute(self, item_id: str) -> None:
        self.logger.info(f"▶️ Execute option: {item_id}")
        self.actions.append(ExecutedAction(action="execute", item_id=item_id))

    def execute_with_fallback(self, query_text: str, execute: str) -> None:
        self.logger.info(f"▶️ Execute no-results fallback '{execute}' for query: '{query_text}'")
        self.actions.append(
            ExecutedAction(action="execute_with_fallback", query=query_text, execute=execute)
        )

    def drain(self) -> List[ExecutedAction]:
        """Return queued actions and forget them."""
        actions, self.actions = self.actions, []
        return actions


class LoggingAnalytics:
    """Analytics sink that writes events to the log.

    Fire-and-forget: nothing here may break the caller's control flow.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or setup_searchbar_logger("searchbar.analytics")
        self.events: List[tuple[str, str, str]] = []

    def log_event(self, category: str, action: str, label: str) -> None:
        self.events.append((category, action, label))
        self.logger.info(f"📊 {category}/{action}/{label}")
