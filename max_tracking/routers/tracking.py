import logging
from datetime import datetime
from functools import lru_cache
from typing import Callable, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from supabase import Client

from max_tracking.config import get_settings, get_timezone
from max_tracking.errors import InvalidFormat, NotFound, StoreUnavailable, TrackingError
from max_tracking.schemas import TrackingEnvelope, TrackRequest
from max_tracking.services.request_log import (
    LedgerRequestLog,
    NullRequestLog,
    RequestLog,
    SupabaseRequestLog,
)
from max_tracking.services.store import SupabaseStore
from max_tracking.services.supabase_client import get_supabase
from max_tracking.services.tracker import Tracker
from max_tracking.services.validator import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tracking"])

SUCCESS_MESSAGE = "Tracking information retrieved successfully"
UNKNOWN_CALLER = "unknown"


def get_connector() -> Callable[[], Client]:
    """One lazily built Supabase client per request, shared by the store and the lookup log."""
    return lru_cache(maxsize=1)(get_supabase)


def get_tracker(connect: Callable[[], Client] = Depends(get_connector)) -> Tracker:
    return Tracker(SupabaseStore(connect), tz=get_timezone())


def get_request_log(connect: Callable[[], Client] = Depends(get_connector)) -> RequestLog:
    settings = get_settings()
    if settings.request_log == "ledger":
        return LedgerRequestLog(settings.ledger_file)
    if settings.request_log == "none":
        return NullRequestLog()
    return SupabaseRequestLog(connect)


def envelope(data, status_code: int, message: str) -> JSONResponse:
    body = TrackingEnvelope(
        success=200 <= status_code < 300,
        message=message,
        data=data,
        timestamp=datetime.now(get_timezone()).strftime("%Y-%m-%d %H:%M:%S"),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _lookup(raw: Optional[str], request: Request, background_tasks: BackgroundTasks,
            tracker: Tracker, request_log: RequestLog) -> JSONResponse:
    try:
        tracking_number = validate(raw)
    except InvalidFormat as e:
        return envelope(None, e.status_code, e.message)

    caller_address = request.client.host if request.client else UNKNOWN_CALLER
    caller_agent = request.headers.get("user-agent", UNKNOWN_CALLER)
    background_tasks.add_task(request_log.record_lookup, tracking_number, caller_address, caller_agent)

    try:
        data = tracker.track(tracking_number)
    except NotFound as e:
        return envelope(None, e.status_code, e.message)
    except StoreUnavailable:
        logger.exception("Tracking API store failure for %s", tracking_number)
        return envelope(None, 500, TrackingError.message)
    except Exception:
        logger.exception("Tracking API error for %s", tracking_number)
        return envelope(None, 500, TrackingError.message)

    return envelope(data.model_dump(mode="json"), 200, SUCCESS_MESSAGE)


@router.get("/track")
def track_get(
    request: Request,
    background_tasks: BackgroundTasks,
    tracking_number: Optional[str] = Query(None),
    tracker: Tracker = Depends(get_tracker),
    request_log: RequestLog = Depends(get_request_log),
):
    return _lookup(tracking_number, request, background_tasks, tracker, request_log)


@router.post("/track")
def track_post(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: Optional[TrackRequest] = Body(None),
    tracker: Tracker = Depends(get_tracker),
    request_log: RequestLog = Depends(get_request_log),
):
    # numeric JSON values are checked as text, like the query parameter
    raw = str(payload.tracking_number) if payload and payload.tracking_number is not None else None
    return _lookup(raw, request, background_tasks, tracker, request_log)
