"""Single-writer coordinator between consumers and the student store."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any, assert_never

from studentbloc.config import StudentBlocConfig
from studentbloc.exceptions import CoordinatorClosedError
from studentbloc.state.events import EVENT_TYPES, Create, Delete, LoadAll, StudentEvent, Update
from studentbloc.state.policy import (
    NotFoundPolicy,
    failure_reason,
    not_found_reason,
    operation_label,
    success_message,
)
from studentbloc.state.states import (
    Initial,
    Loaded,
    OperationFailed,
    OperationSucceeded,
    Pending,
    StudentState,
)
from studentbloc.state.store import StudentStore

_logger = logging.getLogger(__name__)

Listener = Callable[[StudentState], None]

# Pushed into stream queues when the coordinator closes.
_STREAM_END: Any = object()


class StudentCoordinator:
    """Serializes events and broadcasts the resulting states.

    Usage::

        async with StudentCoordinator(StudentStore()) as coordinator:
            unsubscribe = coordinator.subscribe(render)
            coordinator.dispatch(Create(name="Ann", age=20, school="Tech U"))
            await coordinator.join()

    Events are queued FIFO and handled by one worker task.  Each event runs
    to completion, every state it produces delivered to every listener,
    before the next one is taken off the queue.
    """

    def __init__(self, store: StudentStore, *, config: StudentBlocConfig | None = None) -> None:
        self._store = store
        self._config = config or StudentBlocConfig()
        self._state: StudentState = Initial()
        self._listeners: list[Listener] = []
        self._stream_queues: list[asyncio.Queue[Any]] = []
        self._queue: asyncio.Queue[StudentEvent] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._processing = False
        self._closed = False
        self._closing: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> StudentCoordinator:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    def start(self) -> None:
        """Spawn the worker on the running loop (idempotent)."""
        if self._closed:
            raise CoordinatorClosedError("Coordinator is closed")
        if self._worker is not None:
            return
        self._worker = asyncio.get_running_loop().create_task(self._run(), name="studentbloc-coordinator")
        _logger.debug("Coordinator worker started")

    async def close(self) -> None:
        """Stop accepting events, finish the queued ones, then stop the worker.

        Concurrent callers all wait for the same shutdown.
        """
        if self._closing is None:
            self._closed = True
            self._closing = asyncio.get_running_loop().create_task(self._shutdown())
        await asyncio.shield(self._closing)

    async def _shutdown(self) -> None:
        worker = self._worker
        self._worker = None
        if worker is not None:
            await self._queue.join()
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker
        for queue in self._stream_queues:
            queue.put_nowait(_STREAM_END)
        _logger.debug("Coordinator closed")

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> StudentState:
        """The last emitted state."""
        return self._state

    @property
    def is_processing(self) -> bool:
        """Whether an event is in flight (``False`` means idle)."""
        return self._processing

    @property
    def is_closed(self) -> bool:
        return self._closed

    def dispatch(self, event: StudentEvent) -> None:
        """Queue *event* and return immediately.

        Must be called from code running on the event loop, since the first
        dispatch starts the worker.
        """
        # Exact types only: outcome texts are keyed by event class.
        if type(event) not in EVENT_TYPES:
            raise TypeError(f"Not a student event: {event!r}")
        if self._closed:
            raise CoordinatorClosedError(f"Cannot dispatch {event.kind}: coordinator is closed")
        self.start()
        _logger.debug("Dispatch %s (queued=%d)", event.kind, self._queue.qsize())
        self._queue.put_nowait(event)

    async def join(self) -> None:
        """Wait until every event dispatched so far has been fully processed."""
        await self._queue.join()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it.

        The current state is delivered right away; after that the listener
        receives every emission, in order.
        """
        self._listeners.append(listener)
        self._notify(listener, self._state)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    async def stream(self, *, max_pending: int | None = None) -> AsyncIterator[StudentState]:
        """Iterate over states, starting with the current one.

        Ends when the coordinator closes.  Use ``contextlib.aclosing`` when
        breaking out early so the subscription is released promptly.

        At most *max_pending* (default ``config.stream_buffer``) undelivered
        states are buffered.  A consumer that falls further behind is
        dropped: it still receives the buffered states, then the stream ends.
        """
        limit = max_pending if max_pending is not None else self._config.stream_buffer
        if limit < 1:
            raise ValueError("max_pending must be >= 1")
        queue: asyncio.Queue[Any] = asyncio.Queue()

        def _detach() -> None:
            unsubscribe()
            with contextlib.suppress(ValueError):
                self._stream_queues.remove(queue)

        def _enqueue(state: StudentState) -> None:
            if queue.qsize() >= limit:
                _logger.warning("State stream is %d states behind; dropping it", limit)
                _detach()
                queue.put_nowait(_STREAM_END)
                return
            queue.put_nowait(state)

        unsubscribe = self.subscribe(_enqueue)
        self._stream_queues.append(queue)
        if self._closed:
            queue.put_nowait(_STREAM_END)
        try:
            while True:
                item = await queue.get()
                if item is _STREAM_END:
                    return
                yield item
        finally:
            _detach()

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            self._processing = True
            try:
                await self._process(event)
            except Exception:
                _logger.exception("Unexpected error while processing %s", event.kind)
            finally:
                self._processing = False
                self._queue.task_done()

    async def _process(self, event: StudentEvent) -> None:
        _logger.debug("Processing %s", event.kind)
        self._emit(Pending())
        try:
            if self._config.simulated_latency > 0:
                await asyncio.sleep(self._config.simulated_latency)
            missing_id = self._apply(event)
            records = self._store.list_all()
        except Exception as exc:
            _logger.warning("Could not %s", operation_label(event), exc_info=True)
            self._emit(OperationFailed(reason=failure_reason(event, exc)))
            return

        if missing_id is not None and self._config.not_found_policy is NotFoundPolicy.FAIL:
            self._emit(OperationFailed(reason=not_found_reason(event, missing_id)))
            return

        self._emit(Loaded(records=records))
        message = success_message(event)
        if message is not None:
            self._emit(OperationSucceeded(message=message))

    def _apply(self, event: StudentEvent) -> str | None:
        """Run the store call for *event*; return the id it failed to match, if any."""
        match event:
            case LoadAll():
                return None
            case Create(name=name, age=age, school=school):
                self._store.create(name, age, school)
                return None
            case Update(record=record):
                return None if self._store.update(record) is not None else record.id
            case Delete(id=student_id):
                return None if self._store.remove(student_id) else student_id
            case _:
                assert_never(event)

    def _emit(self, state: StudentState) -> None:
        self._state = state
        _logger.debug("Emit %s to %d listener(s)", state.kind, len(self._listeners))
        for listener in list(self._listeners):
            self._notify(listener, state)

    @staticmethod
    def _notify(listener: Listener, state: StudentState) -> None:
        try:
            listener(state)
        except Exception:
            _logger.warning("State listener %r failed", listener, exc_info=True)
