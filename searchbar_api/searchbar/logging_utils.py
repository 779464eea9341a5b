import logging
import time
from typing import Optional, Sequence


def setup_searchbar_logger(name: str = "searchbar", level: str = "INFO") -> logging.Logger:
    """Setup standardized logger for search bar sessions."""
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def log_transition(logger: logging.Logger,
                   session_id: str,
                   search_id: str,
                   event: str,
                   action: str,
                   keep_open: bool,
                   filters: Sequence[str] = (),
                   item_id: Optional[str] = None,
                   query: Optional[str] = None,
                   duration_ms: Optional[float] = None,
                   error: Optional[str] = None) -> None:
    """Log one key/selection event and what the interpreter did with it."""

    log_data = {
        "session_id": session_id,
        "search_id": search_id,
        "event": event,
        "action": action,
        "keep_open": keep_open,
        "filters": list(filters),
    }

    if item_id:
        log_data["item_id"] = item_id

    if query:
        log_data["query"] = query[:197] + "..." if len(query) > 200 else query

    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 1)

    if error:
        log_data["error"] = error

    status_icon = "❌" if error else ("🔎" if keep_open else "✅")
    action_desc = action.replace("_", " ").title()

    if error:
        logger.error(f"{status_icon} {action_desc}: {log_data}")
    else:
        logger.info(f"{status_icon} {action_desc}: {log_data}")


def create_session_id() -> str:
    """Create unique session ID for tracking."""
    return f"session_{int(time.time() * 1000)}"


def measure_time(func):
    """Simple decorator to measure execution time."""
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        duration_ms = (time.time() - start_time) * 1000
        return result, duration_ms
    return wrapper
