"""Transport protocols and type aliases used throughout ini_splice."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Callable, Optional, Protocol, TypeVar, Union

ValueT = TypeVar("ValueT")
Converter = Union[type[ValueT], Callable[[str], ValueT]]
SectionName = Optional[str]


class ByteSource(Protocol):
    """Forward-only blocking reader (``io.BufferedReader``, ``io.BytesIO``, pipes)."""

    def read(self, size: int = -1, /) -> bytes: ...


class ByteSink(Protocol):
    """Forward-only blocking writer.

    ``write`` returns the number of bytes accepted, as ``io`` streams do;
    ``None`` (a non-blocking stream that would block) is an error.
    """

    def write(self, data: bytes, /) -> Optional[int]: ...


class AsyncByteSource(Protocol):
    """Forward-only reader whose ``read`` may suspend (``asyncio.StreamReader``)."""

    def read(self, size: int = -1, /) -> Awaitable[bytes]: ...


class AsyncByteSink(Protocol):
    """Forward-only writer whose ``write`` may return an awaitable.

    ``asyncio.StreamWriter`` fits: its ``drain()`` is awaited after each write.
    """

    def write(self, data: bytes, /) -> object: ...
