"""Blocking adapter — runs operations against ordinary file-like objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, TypeVar

from ini_splice._io import ReadRequest, check_chunk

if TYPE_CHECKING:
    from ini_splice._io import IOOperation, IORequest
    from ini_splice._types import ByteSink, ByteSource

T = TypeVar("T")


class BlockingAdapter:
    """Fulfils I/O requests with blocking ``read``/``write`` calls.

    Neither stream is ever seeked, so pipes, sockets and other non-seekable
    transports work as long as source and destination are distinct.

    :param source: Binary stream the operation reads from.
    :param dest: Binary stream the operation writes to, if it writes.
    """

    def __init__(self, source: ByteSource, dest: Optional[ByteSink] = None) -> None:
        self._source = source
        self._dest = dest

    @property
    def name(self) -> str:
        return "blocking"

    def __repr__(self) -> str:
        return f"BlockingAdapter(source={self._source!r}, dest={self._dest!r})"

    def run(self, op: IOOperation[T]) -> T:
        """Drive ``op`` to completion and return its result.

        Transport exceptions propagate unchanged; the operation is closed
        first so it can release its resources.
        """
        try:
            request = next(op)
            while True:
                request = op.send(self._perform(request))
        except StopIteration as stop:
            return stop.value  # type: ignore[no-any-return]
        finally:
            op.close()

    def _perform(self, request: IORequest) -> Optional[bytes]:
        if isinstance(request, ReadRequest):
            return check_chunk(self._source.read(request.size))
        if self._dest is None:
            raise TypeError("Operation writes output but no destination stream was given")
        data = request.data
        while data:
            written = self._dest.write(data)
            if written is None:
                raise BlockingIOError("Destination accepted no data; non-blocking destinations are not supported")
            if not isinstance(written, int) or written >= len(data):
                break
            # Raw streams may accept fewer bytes than offered.
            if written <= 0:
                raise OSError(f"Destination accepted {written} of {len(data)} bytes")
            data = data[written:]
        return None
