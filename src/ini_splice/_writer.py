"""Value writer — streams the source to the destination with one value patched."""

from __future__ import annotations

import functools
import logging
import tempfile
from typing import IO, TYPE_CHECKING, Optional

from ini_splice._classifier import LineClassifier, find_inline_comment
from ini_splice._config import MissingPolicy, TrimPolicy
from ini_splice._convert import is_quoted
from ini_splice._errors import EncodingError, InvalidValue, NotFoundPolicyError
from ini_splice._io import ReadRequest, WriteRequest
from ini_splice._locator import Locator

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ini_splice._address import EntryAddress
    from ini_splice._config import ParserConfig
    from ini_splice._io import IOOperation
    from ini_splice._models import Line, LocateResult

log = logging.getLogger(__name__)

_PADDING = " \t\x0b\x0c"


class _HeldTail:
    """FIFO of output bytes that may still be replaced or pushed back.

    Everything before the locator's pending offset is released as soon as it
    is known; the rest waits here. The buffer lives in memory up to
    ``max_size`` and spills to an anonymous temporary file beyond that;
    ``max_size=0`` puts it on disk from the start.
    """

    def __init__(self, max_size: int, chunk_size: int) -> None:
        self._spool: IO[bytes]
        if max_size:
            self._spool = tempfile.SpooledTemporaryFile(max_size=max_size)
        else:
            self._spool = tempfile.TemporaryFile()
        self._max_size = max_size
        self._spilled = not max_size
        self._chunk_size = chunk_size
        self._start = 0
        self._held = 0

    @property
    def start(self) -> int:
        """Absolute offset of the first held byte."""
        return self._start

    def push(self, data: bytes, keep_from: Optional[int]) -> Iterator[bytes]:
        """Append ``data`` and yield every byte before ``keep_from``.

        ``keep_from`` never decreases between calls; ``None`` releases all.
        """
        end = self._start + self._held + len(data)
        cut = end if keep_from is None else keep_from
        if self._held:
            yield from self._release(min(cut, self._start + self._held))
            if self._held:
                self._append(data)
                return
        split = cut - self._start
        if split > 0:
            yield data[:split]
            self._start += split
        if split < len(data):
            self._append(data[max(split, 0) :])

    def drain(self, skip: int = 0) -> Iterator[bytes]:
        """Yield all held bytes after the first ``skip`` and empty the buffer."""
        self._spool.seek(skip)
        yield from iter(functools.partial(self._spool.read, self._chunk_size), b"")
        self._reset(self._start + self._held)

    def close(self) -> None:
        self._spool.close()

    def _append(self, data: bytes) -> None:
        self._spool.seek(self._held)
        self._spool.write(data)
        self._held += len(data)
        if not self._spilled and self._held > self._max_size:
            self._spilled = True
            log.debug("Held tail exceeded %d bytes at offset %d; spilled to disk", self._max_size, self._start)

    def _release(self, upto: int) -> Iterator[bytes]:
        count = upto - self._start
        if count <= 0:
            return
        self._spool.seek(0)
        remaining = count
        while remaining:
            piece = self._spool.read(min(self._chunk_size, remaining))
            remaining -= len(piece)
            yield piece
        # What stays is part of the latest line only.
        rest = self._spool.read()
        self._reset(upto)
        if rest:
            self._append(rest)

    def _reset(self, start: int) -> None:
        self._spool.seek(0)
        self._spool.truncate()
        self._start = start
        self._held = 0


class Patcher:
    """Push-style patcher: feed source chunks, get destination bytes back.

    The source is read once, front to back. Bytes are released as soon as
    the scan proves they precede the patch point; the last-occurrence rule
    means the patch point is only final at end of stream (or, for the
    global section, at the first header).

    :param config: Parser options.
    :param address: Target section and key.
    :param value: New value text.
    :raises InvalidName: If ``address`` is unusable under ``config``.
    :raises InvalidValue: If ``value`` spans lines or would read back altered
        (trimmed, unquoted or cut at an inline comment).
    :raises EncodingError: If ``value`` or a new name cannot be encoded.
    """

    def __init__(self, config: ParserConfig, address: EntryAddress, value: str) -> None:
        address.check(config)
        self._config = config
        self._address = address
        self._value = self._encode_value(value)
        self._key = self._encode(address.key, "Key")
        self._section = None if address.section is None else self._encode(address.section, "Section name")
        self._separator = config.separator.encode(config.encoding)
        self._classifier = LineClassifier(config)
        self._locator = Locator(config, address)
        self._tail = _HeldTail(config.spool_size, config.chunk_size)
        self._done = False

    def _encode(self, text: str, what: str) -> bytes:
        try:
            return text.encode(self._config.encoding)
        except UnicodeEncodeError as exc:
            raise EncodingError(
                f"{what} cannot be encoded as {self._config.encoding}: {exc.reason}",
                section=self._address.section,
                key=self._address.key,
            ) from exc

    def _encode_value(self, value: str) -> bytes:
        if "\n" in value or "\r" in value:
            raise InvalidValue("Value contains a line break", section=self._address.section, key=self._address.key)
        if self._config.trim_policy is TrimPolicy.STRIP and value != value.strip(_PADDING):
            raise InvalidValue(
                "Value has surrounding whitespace that trim_policy strip would drop on read",
                section=self._address.section,
                key=self._address.key,
            )
        if self._config.strip_quotes and is_quoted(value):
            raise InvalidValue(
                "Value is wrapped in double quotes that strip_quotes would drop on read",
                section=self._address.section,
                key=self._address.key,
            )
        encoded = self._encode(value, "Value")
        if self._config.trailing_comments:
            prefixes = tuple(p.encode(self._config.encoding) for p in self._config.comment_prefixes)
            if find_inline_comment(encoded, 0, prefixes) < len(encoded):
                raise InvalidValue(
                    "Value would be read back as an inline comment",
                    section=self._address.section,
                    key=self._address.key,
                )
        return encoded

    def feed(self, chunk: bytes) -> Iterator[bytes]:
        """Consume a source chunk; yield the destination bytes it settles."""
        return self._process(self._classifier.feed(chunk))

    def finish(self) -> Iterator[bytes]:
        """Flush everything at end of stream, applying the patch."""
        yield from self._process(self._classifier.finish())
        if not self._done:
            self._done = True
            yield from self._resolve(self._locator.result())

    def close(self) -> None:
        self._tail.close()

    def _process(self, lines: Iterable[Line]) -> Iterator[bytes]:
        for line in lines:
            if self._done:
                yield line.raw
                continue
            self._locator.feed(line)
            yield from self._tail.push(line.raw, self._locator.pending)
            if self._locator.settled:
                self._done = True
                yield from self._resolve(self._locator.result())

    def _line_ending(self, result: LocateResult) -> bytes:
        if self._config.line_ending is not None:
            return self._config.line_ending.encode(self._config.encoding)
        return result.line_ending or b"\n"

    def _resolve(self, result: LocateResult) -> Iterator[bytes]:
        line_ending = self._line_ending(result)
        entry = self._key + self._separator + self._value + line_ending

        if result.location is not None:
            location = result.location
            assert self._tail.start == location.value_start
            log.debug("Replacing %s at bytes %d..%d", self._address, location.value_start, location.value_end)
            yield self._value
            yield from self._tail.drain(skip=location.value_end - location.value_start)
            return

        if self._config.missing_policy is MissingPolicy.STRICT:
            what = "Key" if result.section is not None else "Section"
            raise NotFoundPolicyError(
                f"{what} not found and missing_policy is strict",
                section=self._address.section,
                key=self._address.key,
            )

        if result.section is not None:
            bounds = result.section
            assert self._tail.start == bounds.insert_at
            log.debug("Inserting %s at byte %d", self._address, bounds.insert_at)
            if bounds.insert_needs_terminator:
                yield line_ending
            yield entry
            yield from self._tail.drain()
            return

        assert self._section is not None
        yield from self._tail.drain()
        log.debug("Appending section for %s at byte %d", self._address, result.size)
        if result.size:
            if not result.terminated:
                yield line_ending
            if not result.ends_with_blank:
                yield line_ending
        yield b"[" + self._section + b"]" + line_ending + entry


def _batched(pieces: Iterable[bytes], size: int) -> Iterator[WriteRequest]:
    buffer = bytearray()
    for piece in pieces:
        buffer += piece
        if len(buffer) >= size:
            yield WriteRequest(bytes(buffer))
            buffer.clear()
    if buffer:
        yield WriteRequest(bytes(buffer))


def write_value(config: ParserConfig, address: EntryAddress, value: str) -> IOOperation[None]:
    """Copy the source to the destination with ``address`` set to ``value``.

    Argument errors are raised before anything is read or written.
    """
    patcher = Patcher(config, address, value)
    try:
        while True:
            chunk = yield ReadRequest(config.chunk_size)
            pieces = patcher.feed(chunk) if chunk else patcher.finish()
            yield from _batched(pieces, config.chunk_size)
            if not chunk:
                return
    finally:
        patcher.close()
