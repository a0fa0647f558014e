"""Comment endpoints — REST for one-off calls, WebSocket for the live thread."""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from peakflow.application.schemas import CommentCreate, CommentResponse, CommentUpdate
from peakflow.application.services import AuthContext, CommentService, CommentThread, LiveState, Notice
from peakflow.domain.entities import AuthUser, Comment, SessionEvent
from peakflow.domain.exceptions import (
    AuthenticationRequiredError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from peakflow.infrastructure.dependencies import (
    build_socket_auth_context,
    comment_service_scope,
    get_change_feed,
    get_comment_service,
    require_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Comments"])


# ── REST ─────────────────────────────────────────────────────────────


@router.get("/articles/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: str,
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    """Comments for one article, newest first."""
    comments = await service.list_for_article(article_id)
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.post(
    "/articles/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    article_id: str,
    data: CommentCreate,
    user: AuthUser = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    try:
        comment = await service.add_comment(article_id, user, data.content)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CommentResponse.model_validate(comment, from_attributes=True)


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    user: AuthUser = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """Edit a comment. Only its author may do so."""
    try:
        comment = await service.update_comment(comment_id, user, data.content)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return CommentResponse.model_validate(comment, from_attributes=True)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    user: AuthUser = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> None:
    try:
        await service.delete_comment(comment_id, user)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except AuthenticationRequiredError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)


# ── WebSocket ────────────────────────────────────────────────────────


def _comment_payload(thread: CommentThread, comment: Comment) -> dict[str, Any]:
    payload = CommentResponse.model_validate(comment, from_attributes=True).model_dump(mode="json")
    payload["can_modify"] = thread.can_modify(comment)
    return payload


def _state_message(thread: CommentThread, state: LiveState[Comment]) -> dict[str, Any]:
    return {
        "type": "state",
        "comments": [_comment_payload(thread, c) for c in state.items],
        "loading": state.loading,
        "error": state.error,
        "is_authenticated": thread.is_authenticated,
        "current_user_id": thread.current_user_id,
    }


async def _handle_message(thread: CommentThread, auth: AuthContext, message: dict[str, Any]) -> Notice | None:
    """Apply one client action. Returns a notice only for malformed input."""
    action = message.get("action")
    if action == "add":
        await thread.add_comment(str(message.get("content", "")))
    elif action == "update":
        await thread.update_comment(str(message.get("comment_id", "")), str(message.get("content", "")))
    elif action == "delete":
        await thread.delete_comment(str(message.get("comment_id", "")))
    elif action == "auth":
        try:
            event = SessionEvent(message.get("event"))
        except ValueError:
            return Notice("error", f"Unknown session event '{message.get('event')}'")
        await auth.handle_session_change(event, message.get("access_token"))
    elif action == "sign_out":
        await auth.sign_out()
    else:
        return Notice("error", f"Unknown action '{action}'")
    return None


async def _stop_tasks(tasks: list[asyncio.Task[None]], article_id: str) -> list[Exception]:
    """Cancel the socket's background tasks and collect how each one ended."""
    for task in tasks:
        task.cancel()
    results = await asyncio.gather(*tasks, return_exceptions=True)
    failures = [r for r in results if isinstance(r, Exception)]
    for failure in failures:
        logger.debug("Comment thread socket task for %s ended with %r", article_id, failure)
    return failures


@router.websocket("/articles/{article_id}/comments/ws")
async def comment_thread_socket(
    websocket: WebSocket,
    article_id: str,
    access_token: str | None = None,
) -> None:
    """Live comment thread.

    The server sends ``state`` messages (the full comment list plus auth
    flags) and ``notice`` messages (mutation results). The client sends
    ``add``/``update``/``delete``/``auth``/``sign_out`` actions.
    """
    await websocket.accept()
    outgoing: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def _enqueue_notice(notice: Notice) -> None:
        outgoing.put_nowait({"type": "notice", **notice.to_dict()})

    auth = await build_socket_auth_context(access_token)
    thread = CommentThread(
        article_id,
        comment_service_scope,
        get_change_feed(),
        auth,
        on_notice=_enqueue_notice,
    )

    async def _pump_states() -> None:
        async for state in thread.snapshots():
            outgoing.put_nowait(_state_message(thread, state))

    async def _send() -> None:
        while True:
            await websocket.send_json(await outgoing.get())

    tasks: list[asyncio.Task[None]] = []
    try:
        await thread.start()
        tasks = [asyncio.create_task(_pump_states()), asyncio.create_task(_send())]
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                _enqueue_notice(Notice("error", "Malformed message"))
                continue
            if not isinstance(message, dict):
                _enqueue_notice(Notice("error", "Malformed message"))
                continue
            notice = await _handle_message(thread, auth, message)
            if notice is not None:
                _enqueue_notice(notice)
    except WebSocketDisconnect:
        logger.debug("Comment thread socket for %s disconnected", article_id)
    finally:
        await _stop_tasks(tasks, article_id)
        await thread.close()
        auth.close()
