"""Section/key locator — finds the byte offsets of a target value in one pass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ini_splice._classifier import LineClassifier
from ini_splice._io import ReadRequest
from ini_splice._models import Blank, Comment, Entry, LocateResult, SectionBounds, SectionHeader, ValueLocation

if TYPE_CHECKING:
    from ini_splice._address import EntryAddress
    from ini_splice._config import ParserConfig
    from ini_splice._io import IOOperation
    from ini_splice._models import Line

log = logging.getLogger(__name__)


class Locator:
    """Tracks the current section and remembers where the target value lives.

    Repeated keys and repeated sections resolve to the **last** occurrence in
    document order. Only the latest match is retained, so memory use does not
    depend on document size.

    :param config: Parser options (case sensitivity).
    :param address: The section and key to find.
    """

    def __init__(self, config: ParserConfig, address: EntryAddress) -> None:
        self._config = config
        self._address = address
        is_global = address.section is None
        self._in_target = is_global
        self._left_global = False
        self._location: Optional[ValueLocation] = None
        self._value: Optional[bytes] = None
        self._section_start: Optional[int] = 0 if is_global else None
        self._section_end: Optional[int] = None
        self._insert_at: Optional[int] = 0 if is_global else None
        self._insert_needs_terminator = False
        self._size = 0
        self._terminated = True
        self._ends_with_blank = False
        self._line_ending: Optional[bytes] = None

    def feed(self, line: Line) -> None:
        """Consume the next line in document order."""
        if isinstance(line, SectionHeader):
            if self._in_target:
                self._section_end = line.span.start
            if self._address.section is None:
                self._left_global = True
            self._in_target = self._address.matches_section(line.name, self._config)
            if self._in_target:
                self._section_start = line.span.start
                self._section_end = None
                self._mark_insertion(line)
        elif self._in_target:
            if isinstance(line, Entry) and self._address.matches_key(line.key, self._config):
                self._location = ValueLocation.of(line)
                self._value = line.value
                log.debug("Candidate for %s at bytes %d..%d", self._address, line.value_span.start, line.value_span.end)
            if not isinstance(line, (Blank, Comment)):
                self._mark_insertion(line)

        self._size = line.span.end
        self._terminated = bool(line.terminator)
        self._ends_with_blank = isinstance(line, Blank)
        if self._line_ending is None and line.terminator:
            self._line_ending = line.terminator

    def _mark_insertion(self, line: Line) -> None:
        self._insert_at = line.span.end
        self._insert_needs_terminator = not line.terminator

    @property
    def pending(self) -> Optional[int]:
        """Earliest offset whose output still depends on lines not yet seen.

        ``None`` when the target section has not been seen, so every byte so
        far passes through unchanged.
        """
        if self._location is not None:
            return self._location.value_start
        return self._insert_at

    @property
    def settled(self) -> bool:
        """No later line can change the result.

        Only the global section is closed for good: once a header appears no
        global entry can follow it.
        """
        return self._left_global

    def result(self) -> LocateResult:
        """Snapshot of what the scan has learned so far."""
        section = None
        if self._section_start is not None:
            assert self._insert_at is not None
            section = SectionBounds(
                start=self._section_start,
                end=self._section_end if self._section_end is not None else self._size,
                insert_at=self._insert_at,
                insert_needs_terminator=self._insert_needs_terminator,
            )
        return LocateResult(
            location=self._location,
            value=self._value,
            section=section,
            size=self._size,
            terminated=self._terminated,
            ends_with_blank=self._ends_with_blank,
            line_ending=self._line_ending,
        )


def locate(config: ParserConfig, address: EntryAddress) -> IOOperation[LocateResult]:
    """Scan the source and return what was found for ``address``.

    Stops reading early once the result is settled.
    """
    classifier = LineClassifier(config)
    locator = Locator(config, address)
    while True:
        chunk = yield ReadRequest(config.chunk_size)
        lines = classifier.feed(chunk) if chunk else classifier.finish()
        for line in lines:
            locator.feed(line)
            if locator.settled:
                return locator.result()
        if not chunk:
            return locator.result()
