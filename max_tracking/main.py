import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from max_tracking.config import get_settings
from max_tracking.errors import InvalidFormat
from max_tracking.routers.tracking import envelope, router as tracking_router

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="MAX Logistics Tracking")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(tracking_router)


@app.exception_handler(RequestValidationError)
async def unreadable_request(request: Request, exc: RequestValidationError):
    # malformed JSON body, or a tracking_number that is neither text nor an integer
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return envelope(None, InvalidFormat.status_code, "Tracking number is required")


@app.get("/")
async def root():
    return {"status": "ONLINE", "engine": "MAX Tracking V1"}
