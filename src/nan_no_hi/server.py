"""Single-owner calendar server.

One asyncio worker task owns an :class:`EventStore` and processes request
messages strictly one at a time, in submission order.  Every public
operation enqueues a request and awaits its reply, so an acknowledged
``append`` is visible to the caller's next ``lookup``.

Follows the standard ``start() / stop()`` lifecycle::

    async with CalendarServer(name="JapaneseHoliday") as server:
        await server.import_events(csv_text)
        events = await server.lookup(2025, 5)
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .core.dates import Event
from .core.errors import ServerNotRunning
from .store import EventStore, check_query

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppendRequest:
    when: date | tuple[int, int, int]
    payload: Any


@dataclass(frozen=True)
class ImportRequest:
    raw: Any


@dataclass(frozen=True)
class LookupRequest:
    year: int
    month: int | None = None
    day: int | None = None


@dataclass(frozen=True)
class LookupAllRequest:
    pass


@dataclass(frozen=True)
class ClearRequest:
    pass


Request = AppendRequest | ImportRequest | LookupRequest | LookupAllRequest | ClearRequest


@dataclass
class _Envelope:
    request: Request
    reply: asyncio.Future[Any] = field(repr=False)


class CalendarServer:
    """Serialized-access front end for an owned :class:`EventStore`.

    Parameters
    ----------
    name:
        Label passed to the owned store.
    store:
        Use an existing store instead of creating one.  The server then
        assumes exclusive ownership of it.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        store: EventStore | None = None,
    ) -> None:
        self._store = store if store is not None else EventStore(name=name)
        self._queue: asyncio.Queue[_Envelope] | None = None
        self._task: asyncio.Task[None] | None = None
        self._running = False
        self._requests_handled: int = 0

    @property
    def name(self) -> str | None:
        return self._store.name

    @property
    def running(self) -> bool:
        return self._running

    @property
    def requests_handled(self) -> int:
        return self._requests_handled

    # -- lifecycle ----------------------------------------------------------

    async def start(self) -> None:
        """Start the worker task."""
        if self._running:
            return
        queue: asyncio.Queue[_Envelope] = asyncio.Queue()
        self._queue = queue
        self._running = True
        self._task = asyncio.create_task(
            self._serve_loop(queue), name=f"calendar-server-{self.name}",
        )
        logger.info("CalendarServer started (name=%s)", self.name)

    async def stop(self) -> None:
        """Finish queued requests, then stop the worker task."""
        if not self._running:
            return
        self._running = False
        if self._queue is not None:
            await self._queue.join()
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self._queue = None
        logger.info(
            "CalendarServer stopped (name=%s, requests_handled=%d)",
            self.name,
            self._requests_handled,
        )

    async def __aenter__(self) -> CalendarServer:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    # -- public API ---------------------------------------------------------

    async def append(self, when: date | tuple[int, int, int], payload: Any) -> None:
        await self._call(AppendRequest(when, payload))

    async def append_ymd(self, year: int, month: int, day: int, payload: Any) -> None:
        await self._call(AppendRequest((year, month, day), payload))

    async def import_events(self, raw: Any) -> int:
        return await self._call(ImportRequest(raw))

    async def lookup(
        self,
        year: int | date,
        month: int | None = None,
        day: int | None = None,
    ) -> list[Event]:
        if isinstance(year, date) and month is None and day is None:
            year, month, day = year.year, year.month, year.day
        check_query(year, month, day)
        return await self._call(LookupRequest(year, month, day))

    async def lookup_all(self) -> list[Event]:
        return await self._call(LookupAllRequest())

    async def clear(self) -> None:
        await self._call(ClearRequest())

    # -- internals ----------------------------------------------------------

    async def _call(self, request: Request) -> Any:
        if not self._running or self._queue is None:
            raise ServerNotRunning(f"CalendarServer {self.name!r} is not running")
        reply = asyncio.get_running_loop().create_future()
        await self._queue.put(_Envelope(request, reply))
        return await reply

    async def _serve_loop(self, queue: asyncio.Queue[_Envelope]) -> None:
        while True:
            envelope = await queue.get()
            try:
                result = self._handle(envelope.request)
            except Exception as exc:
                if not envelope.reply.done():
                    envelope.reply.set_exception(exc)
            else:
                if not envelope.reply.done():
                    envelope.reply.set_result(result)
            finally:
                self._requests_handled += 1
                queue.task_done()

    def _handle(self, request: Request) -> Any:
        store = self._store
        match request:
            case AppendRequest(when=when, payload=payload):
                return store.append(when, payload)
            case ImportRequest(raw=raw):
                return store.import_events(raw)
            case LookupRequest(year=year, month=month, day=day):
                return store.lookup(year, month, day)
            case LookupAllRequest():
                return store.lookup_all()
            case ClearRequest():
                return store.clear()
        raise TypeError(f"Unknown request: {request!r}")
