"""Async adapter — runs operations against awaitable streams."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Optional, TypeVar

from ini_splice._io import ReadRequest, check_chunk

if TYPE_CHECKING:
    from ini_splice._io import IOOperation, IORequest
    from ini_splice._types import AsyncByteSink, AsyncByteSource

T = TypeVar("T")


class AsyncAdapter:
    """Fulfils I/O requests with awaitable ``read``/``write`` calls.

    ``read`` and ``write`` may return either a value or an awaitable, which
    covers ``asyncio.StreamReader``/``StreamWriter`` as well as aiofiles-style
    handles. When the destination has a ``drain()`` coroutine it is awaited
    after every write. Control is yielded to the event loop only here, never
    while a line is being classified.

    :param source: Stream the operation reads from.
    :param dest: Stream the operation writes to, if it writes.
    """

    def __init__(self, source: AsyncByteSource, dest: Optional[AsyncByteSink] = None) -> None:
        self._source = source
        self._dest = dest

    @property
    def name(self) -> str:
        return "async"

    def __repr__(self) -> str:
        return f"AsyncAdapter(source={self._source!r}, dest={self._dest!r})"

    async def run(self, op: IOOperation[T]) -> T:
        """Drive ``op`` to completion and return its result.

        Cancelling the awaiting task closes the operation; whatever reached
        the destination by then is incomplete and must be discarded.
        """
        try:
            request = next(op)
            while True:
                request = op.send(await self._perform(request))
        except StopIteration as stop:
            return stop.value  # type: ignore[no-any-return]
        finally:
            op.close()

    async def _perform(self, request: IORequest) -> Optional[bytes]:
        if isinstance(request, ReadRequest):
            data = self._source.read(request.size)
            if inspect.isawaitable(data):
                data = await data
            return check_chunk(data)
        if self._dest is None:
            raise TypeError("Operation writes output but no destination stream was given")
        result = self._dest.write(request.data)
        if inspect.isawaitable(result):
            await result
        drain = getattr(self._dest, "drain", None)
        if drain is not None:
            await drain()
        return None
