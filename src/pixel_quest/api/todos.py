"""Todo query and mutation endpoints."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    Request,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from pixel_quest.api.auth import require_session
from pixel_quest.api.schemas import StatsResponse, TodoCreateRequest, TodoResponse
from pixel_quest.domain.errors import UnauthenticatedError
from pixel_quest.domain.sessions import SessionRecord  # noqa: TC001
from pixel_quest.domain.todos import TodoStats

if TYPE_CHECKING:
    from pixel_quest.containers import AppContainer
    from pixel_quest.services.subscriptions import Subscription

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])

_LIVE_QUERIES = ("list", "stats")


@router.get("")
async def list_todos(
    request: Request, session: SessionRecord = Depends(require_session)
) -> list[TodoResponse]:
    """Return the caller's todos."""
    container: AppContainer = request.app.state.container
    records = container.todo_service.list_todos(session)
    return [TodoResponse.from_record(record) for record in records]


@router.get("/stats")
async def todo_stats(
    request: Request, session: SessionRecord = Depends(require_session)
) -> StatsResponse:
    """Return total, completed and pending counts."""
    container: AppContainer = request.app.state.container
    return StatsResponse.from_stats(container.todo_service.stats(session))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo(
    payload: TodoCreateRequest,
    request: Request,
    session: SessionRecord = Depends(require_session),
) -> TodoResponse:
    """Create a todo."""
    container: AppContainer = request.app.state.container
    priority = payload.priority.value if payload.priority else None
    record = container.todo_service.create(session, payload.text, priority)
    return TodoResponse.from_record(record)


@router.post("/{todo_id}/toggle")
async def toggle_todo(
    todo_id: UUID,
    request: Request,
    session: SessionRecord = Depends(require_session),
) -> TodoResponse:
    """Flip a todo's completed flag."""
    container: AppContainer = request.app.state.container
    return TodoResponse.from_record(container.todo_service.toggle(session, todo_id))


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_todo(
    todo_id: UUID,
    request: Request,
    session: SessionRecord = Depends(require_session),
) -> Response:
    """Permanently delete a todo."""
    container: AppContainer = request.app.state.container
    container.todo_service.remove(session, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/live")
async def live_todos(websocket: WebSocket, token: str | None = None) -> None:
    """Push list and stats results whenever the caller's todos change."""
    container: AppContainer = websocket.app.state.container
    try:
        session = container.auth_service.authenticate(token)
    except UnauthenticatedError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    loop = asyncio.get_running_loop()
    # None marks the end of the session.
    queue: asyncio.Queue[dict[str, object] | None] = asyncio.Queue()
    subscriptions: list[Subscription] = []

    def deliver(query: str) -> Callable[[object], None]:
        def callback(result: object) -> None:
            message = {"query": query, "result": _serialize(result)}
            loop.call_soon_threadsafe(queue.put_nowait, message)

        return callback

    def session_closed() -> None:
        loop.call_soon_threadsafe(queue.put_nowait, None)

    async def pump() -> None:
        while True:
            message = await queue.get()
            if message is None:
                logger.info(
                    "Live query session ended",
                    extra={"session_id": str(session.id)},
                )
                await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
                return
            await websocket.send_json(message)

    sender = asyncio.create_task(pump())
    try:
        for query in _LIVE_QUERIES:
            subscriptions.append(
                container.todo_service.subscribe(
                    session, query, deliver(query), on_close=session_closed
                )
            )
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Live query client left", extra={"session_id": str(session.id)})
    finally:
        for subscription in subscriptions:
            subscription.unsubscribe()
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender


def _serialize(result: object) -> object:
    if isinstance(result, TodoStats):
        return StatsResponse.from_stats(result).model_dump(mode="json")
    if isinstance(result, list):
        return [
            TodoResponse.from_record(record).model_dump(mode="json")
            for record in result
        ]
    raise TypeError(f"Unsupported live query result: {type(result).__name__}")
