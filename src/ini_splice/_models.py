"""Immutable scan records — classified lines, value locations and scan results."""

from __future__ import annotations

import dataclasses
from typing import Optional, Union


@dataclasses.dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` within the source stream."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start


@dataclasses.dataclass(frozen=True)
class _LineBase:
    raw: bytes
    span: Span
    terminator: bytes


@dataclasses.dataclass(frozen=True)
class SectionHeader(_LineBase):
    """A ``[name]`` line.

    :param name: Header interior with surrounding whitespace removed.
    """

    name: str


@dataclasses.dataclass(frozen=True)
class Entry(_LineBase):
    """A ``key<sep>value`` line.

    :param key: Decoded key text, trimmed.
    :param value_span: Absolute byte range of the value text.
    """

    key: str
    value_span: Span

    @property
    def value(self) -> bytes:
        """Raw value bytes as they appear in the document."""
        offset = self.span.start
        return self.raw[self.value_span.start - offset : self.value_span.end - offset]


@dataclasses.dataclass(frozen=True)
class Comment(_LineBase):
    """A line whose trimmed content starts with a comment prefix."""


@dataclasses.dataclass(frozen=True)
class Blank(_LineBase):
    """A whitespace-only line."""


@dataclasses.dataclass(frozen=True)
class Malformed(_LineBase):
    """Any line that is not understood; preserved byte-for-byte."""


Line = Union[SectionHeader, Entry, Comment, Blank, Malformed]


@dataclasses.dataclass(frozen=True)
class ValueLocation:
    """Byte offsets pinpointing the patchable region of one entry.

    :param entry_start: First byte of the entry line.
    :param value_start: First byte of the value.
    :param value_end: One past the last byte of the value.
    :param line_end: One past the entry's line terminator.
    """

    entry_start: int
    value_start: int
    value_end: int
    line_end: int

    def __post_init__(self) -> None:
        if not self.entry_start <= self.value_start <= self.value_end <= self.line_end:
            raise ValueError(
                "ValueLocation offsets must be ordered: "
                f"{self.entry_start} <= {self.value_start} <= {self.value_end} <= {self.line_end}"
            )

    @classmethod
    def of(cls, entry: Entry) -> ValueLocation:
        return cls(entry.span.start, entry.value_span.start, entry.value_span.end, entry.span.end)


@dataclasses.dataclass(frozen=True)
class SectionBounds:
    """Extent of the resolved target section.

    :param start: Offset of the section header (0 for the global section).
    :param end: Offset of the next header, or the end of the stream.
    :param insert_at: Where a new entry for this section is inserted.
    :param insert_needs_terminator: The line ending at ``insert_at`` has no
        terminator, so one must precede an inserted line.
    """

    start: int
    end: int
    insert_at: int
    insert_needs_terminator: bool = False


@dataclasses.dataclass(frozen=True)
class LocateResult:
    """Everything a single scan learns about the target.

    :param location: Where the selected value lives, if the key was found.
    :param value: Raw bytes of the selected value, if found.
    :param section: Bounds of the selected section, if it exists.
    :param size: Total bytes scanned.
    :param terminated: The stream is empty or ends with a line terminator.
    :param ends_with_blank: The last line of the stream is blank.
    :param line_ending: First terminator seen, if any.
    """

    location: Optional[ValueLocation]
    value: Optional[bytes]
    section: Optional[SectionBounds]
    size: int
    terminated: bool
    ends_with_blank: bool
    line_ending: Optional[bytes]
