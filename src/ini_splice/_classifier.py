"""Line classifier — splits a byte stream into classified lines with exact spans."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Optional

from ini_splice._config import PreHeaderPolicy, TrimPolicy
from ini_splice._models import Blank, Comment, Entry, Malformed, SectionHeader, Span

if TYPE_CHECKING:
    from ini_splice._config import ParserConfig
    from ini_splice._models import Line

log = logging.getLogger(__name__)

_WHITESPACE = b" \t\r\x0b\x0c"


@dataclasses.dataclass(frozen=True)
class _Syntax:
    """Config tokens pre-encoded for byte-level matching."""

    prefixes: tuple[bytes, ...]
    separator: bytes
    encoding: str
    trim: TrimPolicy
    trailing_comments: bool
    reject_pre_header: bool

    @classmethod
    def of(cls, config: ParserConfig) -> _Syntax:
        return cls(
            prefixes=tuple(p.encode(config.encoding) for p in config.comment_prefixes),
            separator=config.separator.encode(config.encoding),
            encoding=config.encoding,
            trim=config.trim_policy,
            trailing_comments=config.trailing_comments,
            reject_pre_header=config.pre_header_policy is PreHeaderPolicy.REJECT,
        )


def _split_terminator(raw: bytes) -> tuple[bytes, bytes]:
    if raw.endswith(b"\r\n"):
        return raw[:-2], b"\r\n"
    if raw.endswith(b"\n"):
        return raw[:-1], b"\n"
    return raw, b""


def find_inline_comment(content: bytes, start: int, prefixes: tuple[bytes, ...]) -> int:
    """Offset of the first inline comment at or after ``start``, else ``len(content)``.

    An inline comment prefix must open the value or follow whitespace.
    """
    best = len(content)
    for prefix in prefixes:
        i = content.find(prefix, start, best)
        while i >= 0:
            if i == start or content[i - 1] in _WHITESPACE:
                best = i
                break
            i = content.find(prefix, i + 1, best)
    return best


def _value_bounds(content: bytes, start: int, syntax: _Syntax) -> tuple[int, int]:
    end = len(content)
    if syntax.trailing_comments:
        end = find_inline_comment(content, start, syntax.prefixes)
    if syntax.trim is TrimPolicy.PRESERVE:
        return start, end
    first = start
    while first < end and content[first] in _WHITESPACE:
        first += 1
    if first == end:
        # Whitespace-only value: patch right after the separator.
        return start, start
    while content[end - 1] in _WHITESPACE:
        end -= 1
    return first, end


def _header_name(stripped: bytes, syntax: _Syntax) -> Optional[bytes]:
    close = stripped.find(b"]")
    if close < 0:
        return None
    # Only a comment may follow the closing bracket.
    rest = stripped[close + 1 :].lstrip()
    if rest and not rest.startswith(syntax.prefixes):
        return None
    return stripped[1:close].strip()


def _classify(raw: bytes, offset: int, syntax: _Syntax, after_header: bool) -> Line:
    content, terminator = _split_terminator(raw)
    span = Span(offset, offset + len(raw))
    stripped = content.strip()

    if not stripped:
        return Blank(raw=raw, span=span, terminator=terminator)
    if stripped.startswith(syntax.prefixes):
        return Comment(raw=raw, span=span, terminator=terminator)
    if stripped.startswith(b"["):
        name = _header_name(stripped, syntax)
        if name is not None:
            try:
                return SectionHeader(raw=raw, span=span, terminator=terminator, name=name.decode(syntax.encoding))
            except UnicodeDecodeError:
                log.debug("Undecodable section header at offset %d kept as malformed", offset)
        return Malformed(raw=raw, span=span, terminator=terminator)

    sep = content.find(syntax.separator)
    if sep < 0 or (syntax.reject_pre_header and not after_header):
        return Malformed(raw=raw, span=span, terminator=terminator)
    key = content[:sep].strip()
    if not key:
        return Malformed(raw=raw, span=span, terminator=terminator)
    try:
        key_text = key.decode(syntax.encoding)
    except UnicodeDecodeError:
        log.debug("Undecodable key at offset %d kept as malformed", offset)
        return Malformed(raw=raw, span=span, terminator=terminator)
    start, end = _value_bounds(content, sep + len(syntax.separator), syntax)
    return Entry(
        raw=raw,
        span=span,
        terminator=terminator,
        key=key_text,
        value_span=Span(offset + start, offset + end),
    )


def classify_line(raw: bytes, offset: int, config: ParserConfig, *, after_header: bool = True) -> Line:
    """Classify a single physical line.

    :param raw: Line bytes including the terminator, if any.
    :param offset: Absolute offset of the line's first byte.
    :param after_header: Whether a section header precedes this line.
    """
    return _classify(raw, offset, _Syntax.of(config), after_header)


class LineClassifier:
    """Push parser turning byte chunks into classified lines.

    Feed chunks in stream order; each call returns the lines the chunk
    completes. At most one partial line is buffered between calls, so a
    chunk boundary never exposes half a line.

    :param config: Parser options.
    """

    def __init__(self, config: ParserConfig) -> None:
        self._syntax = _Syntax.of(config)
        self._buffer = bytearray()
        self._offset = 0
        self._after_header = False

    @property
    def offset(self) -> int:
        """Offset one past the last classified byte."""
        return self._offset

    def feed(self, chunk: bytes) -> list[Line]:
        """Consume ``chunk`` and return every line it completes."""
        self._buffer += chunk
        lines = []
        start = 0
        while True:
            newline = self._buffer.find(b"\n", start)
            if newline < 0:
                break
            lines.append(self._emit(bytes(self._buffer[start : newline + 1])))
            start = newline + 1
        del self._buffer[:start]
        return lines

    def finish(self) -> list[Line]:
        """Flush the final unterminated line at end of stream, if any."""
        if not self._buffer:
            return []
        raw = bytes(self._buffer)
        self._buffer.clear()
        return [self._emit(raw)]

    def _emit(self, raw: bytes) -> Line:
        line = _classify(raw, self._offset, self._syntax, self._after_header)
        self._offset += len(raw)
        if isinstance(line, SectionHeader):
            self._after_header = True
        return line
