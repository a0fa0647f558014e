"""Raw change feed over SSE."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from peakflow.application.services import ChangeFeed
from peakflow.application.services.change_feed import WATCHED_TABLES
from peakflow.infrastructure.dependencies import get_change_feed

router = APIRouter(prefix="/changes", tags=["Changes"])


@router.get("/stream")
async def change_stream(
    table: str | None = None,
    feed: ChangeFeed = Depends(get_change_feed),
) -> StreamingResponse:
    """Clients connect via EventSource and receive a ``change`` event per
    committed insert, update or delete on ``table`` (or on every table).
    """
    if table is not None and table not in WATCHED_TABLES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown table '{table}'")
    return StreamingResponse(
        feed.stream(table),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
