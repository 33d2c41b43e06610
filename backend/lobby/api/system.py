import time
from fastapi import APIRouter

from lobby.models.room import utc_timestamp
from lobby.schemas.room import HealthResponse

router = APIRouter(tags=["system"])
debug_router = APIRouter(prefix="/debug", tags=["debug"])

_started_at = time.monotonic()


@router.get("/")
def root():
    return {"message": "API ok"}


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="ok",
        uptime_seconds=int(time.monotonic() - _started_at),
        timestamp=utc_timestamp(),
    )


@debug_router.get("/error")
def debug_error():
    raise RuntimeError("Debug error (intentional)")
