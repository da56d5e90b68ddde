"""aiohttp adapter exposing a coordinator over HTTP and WebSocket.

The adapter is only a consumer: requests become dispatched events and the
coordinator's state stream is forwarded to WebSocket clients.  It never
touches the store.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any

from aiohttp import WSMsgType, web
from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError

from studentbloc.coordinator import StudentCoordinator
from studentbloc.exceptions import CoordinatorClosedError
from studentbloc.models import Student
from studentbloc.state.events import Create, Delete, LoadAll, StudentEvent, Update
from studentbloc.state.states import StudentState

_logger = logging.getLogger(__name__)

COORDINATOR_KEY: web.AppKey[StudentCoordinator] = web.AppKey("coordinator", StudentCoordinator)


class StudentFields(BaseModel):
    """Request body for create and update."""

    model_config = ConfigDict(extra="forbid")

    name: str
    age: StrictInt
    school: str


def _state_json(state: StudentState) -> dict[str, Any]:
    return state.model_dump(mode="json")


def _error(status: type[web.HTTPException], message: str) -> web.HTTPException:
    return status(text=json.dumps({"error": message}), content_type="application/json")


async def _read_fields(request: web.Request) -> StudentFields:
    try:
        body = await request.json()
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError both land here.
        raise _error(web.HTTPBadRequest, f"Invalid JSON body: {exc}") from exc
    try:
        return StudentFields.model_validate(body)
    except ValidationError as exc:
        raise _error(web.HTTPBadRequest, str(exc)) from exc


def _accept(request: web.Request, event: StudentEvent) -> web.Response:
    try:
        request.app[COORDINATOR_KEY].dispatch(event)
    except CoordinatorClosedError as exc:
        raise _error(web.HTTPServiceUnavailable, str(exc)) from exc
    return web.json_response({"accepted": event.kind}, status=202)


async def get_state(request: web.Request) -> web.Response:
    return web.json_response(_state_json(request.app[COORDINATOR_KEY].state))


async def load_students(request: web.Request) -> web.Response:
    return _accept(request, LoadAll())


async def create_student(request: web.Request) -> web.Response:
    fields = await _read_fields(request)
    return _accept(request, Create(name=fields.name, age=fields.age, school=fields.school))


async def update_student(request: web.Request) -> web.Response:
    fields = await _read_fields(request)
    try:
        record = Student(id=request.match_info["student_id"], **fields.model_dump())
    except ValidationError as exc:
        raise _error(web.HTTPBadRequest, str(exc)) from exc
    return _accept(request, Update(record=record))


async def delete_student(request: web.Request) -> web.Response:
    return _accept(request, Delete(id=request.match_info["student_id"]))


async def stream_states(request: web.Request) -> web.WebSocketResponse:
    """Forward every state as a JSON text frame, current state first."""
    ws = web.WebSocketResponse()
    await ws.prepare(request)
    coordinator = request.app[COORDINATOR_KEY]

    async def _forward() -> None:
        try:
            async with contextlib.aclosing(coordinator.stream()) as states:
                async for state in states:
                    await ws.send_json(_state_json(state))
        except ConnectionResetError:
            _logger.debug("WebSocket peer went away")
            return
        await ws.close()

    sender = asyncio.create_task(_forward())
    try:
        async for msg in ws:
            if msg.type == WSMsgType.ERROR:
                _logger.debug("WebSocket closed with error", exc_info=ws.exception())
    finally:
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
    return ws


async def _close_coordinator(app: web.Application) -> None:
    await app[COORDINATOR_KEY].close()


def create_app(coordinator: StudentCoordinator) -> web.Application:
    """Build the aiohttp application around *coordinator*.

    The coordinator is closed on application cleanup.
    """
    app = web.Application()
    app[COORDINATOR_KEY] = coordinator
    app.add_routes(
        [
            web.get("/students", get_state),
            web.post("/students/load", load_students),
            web.post("/students", create_student),
            web.put("/students/{student_id}", update_student),
            web.delete("/students/{student_id}", delete_student),
            web.get("/ws", stream_states),
        ]
    )
    app.on_cleanup.append(_close_coordinator)
    return app
