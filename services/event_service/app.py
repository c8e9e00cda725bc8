"""
FastAPI service for sticker event storage.

Exposes list/create/update/delete endpoints over a key-value namespace where
every event lives under ``event:{id}``. These are single store operations with
no transactions and no retries; any store failure is reported as a 500.
"""
from __future__ import annotations

import logging
import os
import typing as t
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from calendar_server.models import Event
from calendar_server.store import (
    KVStore,
    list_events as store_list_events,
    new_event_id,
    open_store,
    remove_event,
    save_event,
)
from services.shared.models import (
    Event as PydanticEvent,
    CreateEventRequest,
    UpdateEventRequest,
    EventListResponse,
    EventResponse,
    DeleteEventResponse,
    ErrorResponse,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Configuration - overridable via environment variables
EVENT_STORE_PATH = os.getenv("EVENT_STORE_PATH", "")
ROUTE_PREFIX = os.getenv("EVENT_SERVICE_ROUTE_PREFIX", "/api").rstrip("/")
EVENT_SERVICE_TOKEN = os.getenv("EVENT_SERVICE_TOKEN", "")
EVENT_SERVICE_PORT = int(os.getenv("EVENT_SERVICE_PORT", "8004"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the key-value store on startup."""
    app.state.store = open_store(EVENT_STORE_PATH)
    logger.info(f"Event store opened: {EVENT_STORE_PATH or 'in-memory'}")
    yield
    logger.info("Event service shutting down")


app = FastAPI(
    title="Sticker Calendar Event Service",
    description="REST API for storing calendar sticker events in a key-value store",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as a JSON body with an ``error`` field."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    content = ErrorResponse(error="Invalid request body", details=str(exc.errors()))
    return JSONResponse(status_code=400, content=content.model_dump())


# ---------- Dependencies ----------
def get_store(request: Request) -> KVStore:
    store: t.Optional[KVStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Event store not initialized")
    return store


def verify_token(authorization: t.Optional[str] = Header(default=None)) -> None:
    """Check the static bearer token when one is configured."""
    if not EVENT_SERVICE_TOKEN:
        return
    if authorization != f"Bearer {EVENT_SERVICE_TOKEN}":
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def _store_failure(message: str, error: Exception) -> HTTPException:
    logger.error(f"{message}: {error}")
    body = ErrorResponse(error=message, details=str(error))
    return HTTPException(status_code=500, detail=body.model_dump())


def _to_pydantic(event: Event) -> PydanticEvent:
    return PydanticEvent(**asdict(event))


router = APIRouter(prefix=ROUTE_PREFIX, dependencies=[Depends(verify_token)])


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "event-service"}


@router.get("/events", response_model=EventListResponse)
def list_events(store: KVStore = Depends(get_store)) -> EventListResponse:
    """
    List every stored event.

    Order is whatever the store's prefix scan yields; there is no pagination.
    """
    try:
        events = store_list_events(store)
    except Exception as e:
        raise _store_failure("Failed to fetch events", e)
    return EventListResponse(events=[_to_pydantic(event) for event in events])


@router.post("/events", response_model=EventResponse)
def create_event(request: CreateEventRequest, store: KVStore = Depends(get_store)) -> EventResponse:
    """
    Create an event with a server-generated id.

    Date and title are required; color and rotation are stored as given.
    """
    if not request.date or not request.title:
        raise HTTPException(status_code=400, detail="Date and title are required")

    event = Event(
        id=new_event_id(),
        date=request.date,
        title=request.title,
        color=request.color,
        rotation=request.rotation,
    )
    try:
        save_event(store, event)
    except Exception as e:
        raise _store_failure("Failed to create event", e)
    logger.info(f"Created event {event.id} on {event.date}")
    return EventResponse(event=_to_pydantic(event))


@router.put("/events/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    request: UpdateEventRequest,
    store: KVStore = Depends(get_store),
) -> EventResponse:
    """
    Overwrite the event stored under ``event_id``.

    The body is written verbatim; the event does not have to exist first.
    """
    event = Event(
        id=event_id,
        date=request.date,
        title=request.title,
        color=request.color,
        rotation=request.rotation,
    )
    try:
        save_event(store, event)
    except Exception as e:
        raise _store_failure("Failed to update event", e)
    return EventResponse(event=_to_pydantic(event))


@router.delete("/events/{event_id}", response_model=DeleteEventResponse)
def delete_event(event_id: str, store: KVStore = Depends(get_store)) -> DeleteEventResponse:
    """Delete an event. Unknown ids succeed as well."""
    try:
        remove_event(store, event_id)
    except Exception as e:
        raise _store_failure("Failed to delete event", e)
    return DeleteEventResponse(success=True)


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=EVENT_SERVICE_PORT)
