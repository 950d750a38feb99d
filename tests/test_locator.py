"""Tests for the section/key locator."""

from __future__ import annotations

from typing import Optional

from stream_doubles import OneWayReader

from ini_splice import BlockingAdapter, EntryAddress, LineClassifier, Locator, ParserConfig, SectionBounds, ValueLocation
from ini_splice._locator import locate

DEFAULT = ParserConfig()


def _scan(data: bytes, section: Optional[str], key: str, config: ParserConfig = DEFAULT) -> Locator:
    locator = Locator(config, EntryAddress(section, key))
    classifier = LineClassifier(config)
    for line in classifier.feed(data) + classifier.finish():
        locator.feed(line)
    return locator


class TestFound:
    def test_location(self) -> None:
        result = _scan(b"[a]\nk = v\n", "a", "k").result()
        assert result.location == ValueLocation(entry_start=4, value_start=8, value_end=9, line_end=10)
        assert result.value == b"v"

    def test_last_key_in_section(self) -> None:
        result = _scan(b"[a]\nk=1\nk=22\n", "a", "k").result()
        assert result.value == b"22"

    def test_last_section_occurrence(self) -> None:
        result = _scan(b"[a]\nk=1\n[b]\nk=2\n[a]\nk=3\n[b]\n", "a", "k").result()
        assert result.value == b"3"

    def test_key_from_earlier_occurrence(self) -> None:
        result = _scan(b"[a]\nk=1\n[a]\nother=2\n", "a", "k").result()
        assert result.value == b"1"
        assert result.section is not None
        assert result.section.start == 8

    def test_case_insensitive(self) -> None:
        config = ParserConfig(case_sensitive_sections=False, case_sensitive_keys=False)
        assert _scan(b"[USER]\nNAME=x\n", "user", "name", config).result().value == b"x"

    def test_case_sensitive_default(self) -> None:
        assert _scan(b"[USER]\nNAME=x\n", "user", "name").result().value is None

    def test_global(self) -> None:
        result = _scan(b"k=1\n[a]\nk=2\n", None, "k").result()
        assert result.value == b"1"


class TestSectionBounds:
    def test_insert_after_last_entry(self) -> None:
        result = _scan(b"[a]\nx=1\n\n; note\n[b]\n", "a", "k").result()
        assert result.location is None
        assert result.section == SectionBounds(start=0, end=16, insert_at=8)

    def test_insert_after_header_when_empty(self) -> None:
        result = _scan(b"[a]\n\n[b]\n", "a", "k").result()
        assert result.section == SectionBounds(start=0, end=5, insert_at=4)

    def test_malformed_lines_count_as_content(self) -> None:
        result = _scan(b"[a]\njunk\n\n", "a", "k").result()
        assert result.section is not None
        assert result.section.insert_at == 9

    def test_unterminated_section_end(self) -> None:
        result = _scan(b"[a]\nx=1", "a", "k").result()
        assert result.section == SectionBounds(start=0, end=7, insert_at=7, insert_needs_terminator=True)

    def test_global_bounds(self) -> None:
        result = _scan(b"; c\nx=1\n\n[a]\n", None, "k").result()
        assert result.section == SectionBounds(start=0, end=9, insert_at=8)

    def test_global_without_entries(self) -> None:
        result = _scan(b"[a]\n", None, "k").result()
        assert result.section == SectionBounds(start=0, end=0, insert_at=0)

    def test_missing_section(self) -> None:
        assert _scan(b"[a]\nk=1\n", "b", "k").result().section is None


class TestStreamFacts:
    def test_size_and_termination(self) -> None:
        result = _scan(b"[a]\nx=1", "a", "x").result()
        assert result.size == 7
        assert result.terminated is False
        assert result.ends_with_blank is False

    def test_ends_with_blank(self) -> None:
        result = _scan(b"[a]\n\n", "a", "x").result()
        assert result.terminated is True
        assert result.ends_with_blank is True

    def test_first_line_ending(self) -> None:
        assert _scan(b"[a]\r\nx=1\n", "a", "x").result().line_ending == b"\r\n"

    def test_no_line_ending(self) -> None:
        assert _scan(b"x=1", None, "x").result().line_ending is None

    def test_empty(self) -> None:
        result = _scan(b"", "a", "x").result()
        assert result.size == 0
        assert result.terminated is True
        assert result.section is None


class TestPending:
    def test_unknown_section(self) -> None:
        assert _scan(b"[b]\nk=1\n", "a", "k").pending is None

    def test_points_at_value(self) -> None:
        assert _scan(b"[a]\nk=1\n\n", "a", "k").pending == 6

    def test_points_at_insertion(self) -> None:
        assert _scan(b"[a]\nx=1\n\n", "a", "k").pending == 8


class TestLocateOperation:
    def test_stops_after_global_section(self) -> None:
        data = b"k=1\n[a]\n" + b"filler=0\n" * 10_000
        source = OneWayReader(data)
        op = locate(ParserConfig(chunk_size=16), EntryAddress(None, "k"))
        result = BlockingAdapter(source).run(op)
        assert result.value == b"1"
        assert source.consumed < 64

    def test_reads_to_end_for_named_section(self) -> None:
        data = b"[a]\nk=1\n" + b"filler=0\n" * 100
        source = OneWayReader(data)
        result = BlockingAdapter(source).run(locate(ParserConfig(chunk_size=16), EntryAddress("a", "k")))
        assert result.value == b"1"
        assert source.consumed == len(data)
