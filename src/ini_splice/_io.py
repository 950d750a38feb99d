"""I/O requests — the only points where an operation touches its transport.

Operations are generators that yield :class:`ReadRequest` or
:class:`WriteRequest` and receive the bytes read (or ``None`` after a write).
Adapters in :mod:`ini_splice.adapters` fulfil the requests with blocking or
awaitable calls, so the scanning code is written once for both.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Generator
from typing import Optional, TypeVar, Union

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class ReadRequest:
    """Read up to ``size`` bytes; an empty reply means end of stream."""

    size: int


@dataclasses.dataclass(frozen=True)
class WriteRequest:
    """Write all of ``data`` to the destination."""

    data: bytes


IORequest = Union[ReadRequest, WriteRequest]
IOOperation = Generator[IORequest, Optional[bytes], T]


def check_chunk(data: object) -> bytes:
    """Validate what a source returned for a read request.

    :raises BlockingIOError: If a non-blocking source had no data ready.
    :raises TypeError: If the source is not a binary stream.
    """
    if data is None:
        raise BlockingIOError("Source returned no data; non-blocking sources are not supported")
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Source must return bytes, got {type(data).__name__}; open it in binary mode")
