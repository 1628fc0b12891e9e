"""Together Timer — elapsed time since the relationship anchor, one-shot and streamed.

Invariants:
    - The anchor comes from settings.together_since (timezone-aware)
    - The stream emits its first event immediately, then one per second
    - ?ticks bounds the number of streamed events; unbounded when omitted

Design Decisions:
    - The route owns the clock and the one-second interval; compute_elapsed stays pure
    - StreamingResponse for SSE: event_generator yields formatted SSE lines
"""

import asyncio
import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

from keepsake.config import get_settings
from keepsake.core.elapsed import compute_elapsed
from keepsake.schemas.together import ElapsedResponse, TogetherResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/together", tags=["together"])

TICK_SECONDS = 1.0

# SSE headers prevent proxy/browser buffering of streamed events
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _snapshot(now: datetime) -> TogetherResponse:
    since = get_settings().together_since
    return TogetherResponse(
        since=since,
        now=now,
        elapsed=ElapsedResponse.from_breakdown(compute_elapsed(since, now)),
    )


@router.get("", response_model=TogetherResponse)
async def get_together(
    at: datetime | None = Query(None, description="Instant to measure to (default: now)"),
):
    """Elapsed breakdown from the anchor to `at` (or now)."""
    return _snapshot(at or _utcnow())


@router.get("/stream")
async def stream_together(ticks: int | None = Query(None, ge=1)):
    """SSE stream — one elapsed breakdown per second."""

    async def event_generator():
        sent = 0
        try:
            while True:
                yield _sse_line(_snapshot(_utcnow()).model_dump(mode="json"))
                sent += 1
                if ticks is not None and sent >= ticks:
                    return
                await asyncio.sleep(TICK_SECONDS)
        except asyncio.CancelledError:
            logger.info("Client disconnected from together stream after %d events", sent)
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
