from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Depends, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse

from .catalog import CatalogError, CatalogSnapshot, load_catalog
from .collaborators import LoggingAnalytics, RecordingExecutor
from .config import settings
from .documents import DocumentIndex
from .interpreter import Transition
from .localization import Localizer
from .logging_utils import setup_searchbar_logger
from .models import DocumentPosition, DocumentsPayload, InputEvent, KeyEvent, SelectionEvent
from .presentation.html_renderer import HtmlRenderer
from .presentation.presenters import OptionsPresenter
from .security import require_api_key
from .session import SearchSession, SessionManager

VERSION = "0.4.0"

app = FastAPI(title="Search Bar API", version=VERSION)

origins = (
    [o.strip() for o in settings.cors_origins.split(",")]
    if getattr(settings, "cors_origins", None)
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins if origins != ["*"] else ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

CATALOG_FILE = Path(settings.catalog_file)
STRINGS_FILE = Path(settings.strings_file)

logger = setup_searchbar_logger("searchbar", settings.log_level)


def current_catalog() -> CatalogSnapshot:
    """Catalog provider: a fresh snapshot for every ranking pass."""
    try:
        return load_catalog(CATALOG_FILE)
    except CatalogError as e:
        logger.error(f"❌ Catalog rejected: {e}")
        raise HTTPException(500, detail=str(e))


DOCUMENTS = DocumentIndex()
ANALYTICS = LoggingAnalytics()
SESSIONS = SessionManager(
    catalog_provider=current_catalog,
    documents=DOCUMENTS,
    localizer=Localizer.from_file(STRINGS_FILE),
    executor_factory=RecordingExecutor,
    analytics=ANALYTICS,
    max_options=settings.max_options,
)


def _get_session(search_id: str) -> SearchSession:
    session = SESSIONS.get(search_id)
    if session is None:
        raise HTTPException(404, detail=f"No open search session: {search_id}")
    return session


def _transition_response(session: SearchSession, transition: Transition) -> dict:
    """Serialize an interpreter transition plus what the host must do next."""
    executed = session.executor.drain() if isinstance(session.executor, RecordingExecutor) else []
    return {
        "search_id": session.search_id,
        "action": transition.action.value,
        "keep_open": transition.keep_open,
        "prevent_list_default": transition.prevent_list_default,
        "item_id": transition.item_id,
        "reason": transition.reason,
        "state": session.interpreter.state.value,
        "filters": session.filters,
        "icon": session.interpreter.icon,
        "query": session.query,
        "closed": session.closed,
        "executed": [asdict(action) for action in executed],
    }


@app.get("/health")
def health(response: Response):
    response.headers["Cache-Control"] = "no-store"
    return {
        "status": "ok",
        "service": "searchbar-api",
        "version": VERSION,
        "time": datetime.now().astimezone().isoformat()
    }


@app.get("/catalog", dependencies=[Depends(require_api_key)])
def catalog():
    if not CATALOG_FILE.exists():
        raise HTTPException(500, detail="Catalog file not found")
    snapshot = current_catalog()
    return {
        "groups": {key: len(items) for key, items in snapshot.catalog.items()},
        "headers": snapshot.headers,
        "filter_ids": sorted(snapshot.filter_ids()),
    }


@app.put("/documents", dependencies=[Depends(require_api_key)])
def reset_documents(payload: DocumentsPayload):
    DOCUMENTS.reset(payload.documents, payload.selected, payload.uninitialized)
    return {
        "documents": DOCUMENTS.document_ids,
        "selected": DOCUMENTS.current_document_id,
        "ready": DOCUMENTS.ready,
    }


@app.get("/documents", dependencies=[Depends(require_api_key)])
def list_documents():
    return {
        "documents": DOCUMENTS.document_ids,
        "selected": DOCUMENTS.current_document_id,
        "selected_index": DOCUMENTS.selected_index,
        "ready": DOCUMENTS.ready,
    }


@app.post("/documents/next", dependencies=[Depends(require_api_key)])
def select_next_document():
    next_id = DOCUMENTS.next_document()
    if next_id is None:
        raise HTTPException(404, detail="No open documents")
    DOCUMENTS.select(next_id)
    return {"selected": next_id, "selected_index": DOCUMENTS.selected_index}


@app.post("/documents/previous", dependencies=[Depends(require_api_key)])
def select_previous_document():
    previous_id = DOCUMENTS.previous_document()
    if previous_id is None:
        raise HTTPException(404, detail="No open documents")
    DOCUMENTS.select(previous_id)
    return {"selected": previous_id, "selected_index": DOCUMENTS.selected_index}


@app.put("/documents/{document_id}/position", dependencies=[Depends(require_api_key)])
def move_document(document_id: str, position: DocumentPosition):
    DOCUMENTS.update_position(document_id, position.index)
    return {"documents": DOCUMENTS.document_ids, "selected_index": DOCUMENTS.selected_index}


@app.post("/documents/{document_id}/select", dependencies=[Depends(require_api_key)])
def select_document(document_id: str):
    try:
        DOCUMENTS.select(document_id)
    except KeyError:
        raise HTTPException(404, detail=f"Document not open: {document_id}")
    return {"selected": DOCUMENTS.current_document_id}


@app.post("/documents/{document_id}/initialized", dependencies=[Depends(require_api_key)])
def document_initialized(document_id: str):
    DOCUMENTS.mark_initialized(document_id)
    return {"ready": DOCUMENTS.ready}


@app.delete("/documents/{document_id}", dependencies=[Depends(require_api_key)])
def close_document(document_id: str, next_selected: str | None = Query(default=None)):
    try:
        DOCUMENTS.close(document_id, next_selected)
    except KeyError:
        raise HTTPException(404, detail=f"Document not open: {document_id}")
    return {"documents": DOCUMENTS.document_ids, "selected": DOCUMENTS.current_document_id}


@app.post("/sessions/{search_id}", dependencies=[Depends(require_api_key)])
def open_session(search_id: str):
    session = SESSIONS.open(search_id)
    return session.render().model_dump(mode="json")


@app.get("/sessions/{search_id}/options", dependencies=[Depends(require_api_key)])
def options(
    search_id: str,
    q: str | None = Query(default=None, description="Current input text"),
    autofill: str | None = Query(default=None, description="Id of the inline autofill suggestion"),
    truncate: bool = Query(default=True),
    format: str = Query(default="json", pattern="^(json|markdown|html)$"),
):
    session = _get_session(search_id)
    view = session.render(query=q, autofill_id=autofill, truncate=truncate)

    if format == "json":
        return view.model_dump(mode="json")

    markdown_text = OptionsPresenter().to_markdown(view)
    if format == "markdown":
        return PlainTextResponse(markdown_text, media_type="text/markdown")

    html = HtmlRenderer().render(
        markdown_text,
        title=f"Search - {search_id}",
        metadata={"state": view.state, "filters": ",".join(view.filters)},
    )
    return HTMLResponse(html)


@app.post("/sessions/{search_id}/input", dependencies=[Depends(require_api_key)])
def input_changed(search_id: str, event: InputEvent):
    session = _get_session(search_id)
    session.set_input(event.value)
    return {"query": session.query, "has_input_value": session.has_input_value}


@app.post("/sessions/{search_id}/select", dependencies=[Depends(require_api_key)])
def select(search_id: str, event: SelectionEvent):
    session = _get_session(search_id)
    transition = session.select(event.id, event.query)
    response = _transition_response(session, transition)
    if session.closed:
        SESSIONS.close(search_id)
    return response


@app.post("/sessions/{search_id}/keys", dependencies=[Depends(require_api_key)])
def key_down(search_id: str, event: KeyEvent):
    session = _get_session(search_id)
    transition = session.key_down(event.key, event.selected_id, event.cursor_at_start)
    response = _transition_response(session, transition)
    if session.closed:
        SESSIONS.close(search_id)
    return response


@app.post("/sessions/{search_id}/clear", dependencies=[Depends(require_api_key)])
def clear(search_id: str):
    session = _get_session(search_id)
    session.clear_input()
    return session.render().model_dump(mode="json")


@app.delete("/sessions/{search_id}", dependencies=[Depends(require_api_key)])
def close_session(search_id: str):
    if not SESSIONS.close(search_id):
        raise HTTPException(404, detail=f"No open search session: {search_id}")
    return {"closed": True, "search_id": search_id}
