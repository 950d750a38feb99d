"""Tests for writing values through IniEditor."""

from __future__ import annotations

import io
import logging

import pytest
from stream_doubles import OneWayReader, OneWayWriter

from ini_splice import (
    EncodingError,
    EntryAddress,
    IniEditor,
    InvalidName,
    InvalidValue,
    MissingPolicy,
    NotFoundPolicyError,
    ParserConfig,
    PreHeaderPolicy,
    TrimPolicy,
    write_value,
)
from ini_splice._writer import Patcher


def _write(data: bytes, section: str | None, key: str, value: str, config: ParserConfig | None = None) -> bytes:
    dest = io.BytesIO()
    write_value(io.BytesIO(data), dest, section, key, value, config=config)
    return dest.getvalue()


class TestReplace:
    def test_keeps_spacing(self) -> None:
        assert _write(b"[s]\n  k  =  old  \n", "s", "k", "new") == b"[s]\n  k  =  new  \n"

    def test_empty_to_value(self) -> None:
        assert _write(b"[s]\nk=\n", "s", "k", "v") == b"[s]\nk=v\n"

    def test_value_to_empty(self) -> None:
        assert _write(b"[s]\nk = v\n", "s", "k", "") == b"[s]\nk = \n"

    def test_whitespace_only_value(self) -> None:
        assert _write(b"[s]\nk =   \n", "s", "k", "v") == b"[s]\nk =v   \n"

    def test_preserve_replaces_padding(self) -> None:
        config = ParserConfig(trim_policy=TrimPolicy.PRESERVE)
        assert _write(b"k = v \n", None, "k", "x", config) == b"k =x\n"

    def test_trailing_comment_kept(self) -> None:
        config = ParserConfig(trailing_comments=True)
        assert _write(b"[s]\nk = 1 ; old\n", "s", "k", "2", config) == b"[s]\nk = 2 ; old\n"

    def test_value_may_contain_separator(self) -> None:
        assert _write(b"[s]\nurl=x\n", "s", "url", "a=b") == b"[s]\nurl=a=b\n"

    def test_case_insensitive_keeps_original_key(self) -> None:
        config = ParserConfig(case_sensitive_keys=False)
        assert _write(b"[s]\nName=a\n", "s", "name", "b", config) == b"[s]\nName=b\n"


class TestInsert:
    def test_before_trailing_blank_lines(self) -> None:
        data = b"[a]\nx=1\n\n\n[b]\n"
        assert _write(data, "a", "y", "2") == b"[a]\nx=1\ny=2\n\n\n[b]\n"

    def test_before_trailing_comments(self) -> None:
        data = b"[a]\nx=1\n; about b\n[b]\n"
        assert _write(data, "a", "y", "2") == b"[a]\nx=1\ny=2\n; about b\n[b]\n"

    def test_into_empty_section(self) -> None:
        assert _write(b"[a]\n[b]\n", "a", "k", "v") == b"[a]\nk=v\n[b]\n"

    def test_after_unterminated_last_line(self) -> None:
        assert _write(b"[a]\nx=1", "a", "y", "2") == b"[a]\nx=1\ny=2\n"

    def test_after_unterminated_header(self) -> None:
        assert _write(b"[a]", "a", "k", "v") == b"[a]\nk=v\n"

    def test_global_into_empty_input(self) -> None:
        assert _write(b"", None, "k", "v") == b"k=v\n"

    def test_global_before_comment_header(self) -> None:
        assert _write(b"; top\n[a]\n", None, "k", "v") == b"k=v\n; top\n[a]\n"

    def test_uses_configured_separator(self) -> None:
        config = ParserConfig(separator=":")
        assert _write(b"[a]\nx: 1\n", "a", "y", "2", config) == b"[a]\nx: 1\ny:2\n"


class TestAppendSection:
    def test_after_terminated_content(self) -> None:
        assert _write(b"[a]\nx=1\n", "b", "k", "v") == b"[a]\nx=1\n\n[b]\nk=v\n"

    def test_after_unterminated_content(self) -> None:
        assert _write(b"[a]\nx=1", "b", "k", "v") == b"[a]\nx=1\n\n[b]\nk=v\n"

    def test_after_trailing_blank(self) -> None:
        assert _write(b"[a]\nx=1\n\n", "b", "k", "v") == b"[a]\nx=1\n\n[b]\nk=v\n"

    def test_address_is_trimmed(self) -> None:
        assert _write(b"", " b ", " k ", "v") == b"[b]\nk=v\n"

    def test_reject_policy_appends_after_pre_header_lines(self) -> None:
        config = ParserConfig(pre_header_policy=PreHeaderPolicy.REJECT)
        assert _write(b"stray=1\n", "s", "k", "v", config) == b"stray=1\n\n[s]\nk=v\n"


class TestLineEndings:
    def test_detected_from_source(self) -> None:
        assert _write(b"[a]\r\nx=1\r\n", "a", "y", "2") == b"[a]\r\nx=1\r\ny=2\r\n"

    def test_first_terminator_wins(self) -> None:
        assert _write(b"[a]\nx=1\r\n", "b", "k", "v") == b"[a]\nx=1\r\n\n[b]\nk=v\n"

    def test_override(self) -> None:
        config = ParserConfig(line_ending="\r\n")
        assert _write(b"[a]\nx=1\n", "a", "y", "2", config) == b"[a]\nx=1\ny=2\r\n"

    def test_fallback_without_terminators(self) -> None:
        assert _write(b"x=1", "b", "k", "v") == b"x=1\n\n[b]\nk=v\n"

    def test_mixed_endings_preserved(self) -> None:
        data = b"[a]\r\nx=1\n\r\n[b]\ny=2\r\n"
        assert _write(data, "b", "y", "3") == b"[a]\r\nx=1\n\r\n[b]\ny=3\r\n"


class TestArgumentErrors:
    """Bad arguments fail before anything is read or written."""

    @pytest.mark.parametrize("value", ["a\nb", "a\r", "\r\n"])
    def test_line_break_in_value(self, value: str) -> None:
        source = OneWayReader(b"[s]\nk=1\n")
        dest = OneWayWriter()
        with pytest.raises(InvalidValue):
            write_value(source, dest, "s", "k", value)
        assert source.reads == 0
        assert dest.writes == []

    @pytest.mark.parametrize("value", ["  padded  ", " lead", "trail\t", "   "])
    def test_padding_that_reads_back_trimmed(self, value: str) -> None:
        source = OneWayReader(b"[s]\nk=1\n")
        dest = OneWayWriter()
        with pytest.raises(InvalidValue, match="whitespace") as info:
            write_value(source, dest, "s", "k", value)
        assert (info.value.section, info.value.key) == ("s", "k")
        assert source.reads == 0
        assert dest.writes == []

    def test_padding_allowed_when_preserved(self) -> None:
        config = ParserConfig(trim_policy=TrimPolicy.PRESERVE)
        assert _write(b"[s]\nk=1\n", "s", "k", " v ", config) == b"[s]\nk= v \n"

    def test_inner_whitespace_allowed(self) -> None:
        assert _write(b"[s]\nk=1\n", "s", "k", "a  b") == b"[s]\nk=a  b\n"

    @pytest.mark.parametrize("value", ['"Bob"', '""'])
    def test_quoted_value_reads_back_unquoted(self, value: str) -> None:
        dest = OneWayWriter()
        with pytest.raises(InvalidValue, match="quotes"):
            write_value(OneWayReader(b"[s]\n"), dest, "s", "k", value)
        assert dest.writes == []

    @pytest.mark.parametrize("value", ['"', 'say "hi"', '"open'])
    def test_partial_quotes_allowed(self, value: str) -> None:
        out = _write(b"[s]\nk=1\n", "s", "k", value)
        assert out == b"[s]\nk=" + value.encode() + b"\n"

    def test_quoted_value_with_strip_quotes_off(self) -> None:
        config = ParserConfig(strip_quotes=False)
        assert _write(b"[s]\nk=1\n", "s", "k", '"Bob"', config) == b'[s]\nk="Bob"\n'

    def test_value_read_back_as_comment(self) -> None:
        config = ParserConfig(trailing_comments=True)
        with pytest.raises(InvalidValue, match="inline comment"):
            _write(b"[s]\nk=1\n", "s", "k", "a ;b", config)

    def test_glued_prefix_allowed_with_trailing_comments(self) -> None:
        config = ParserConfig(trailing_comments=True)
        assert _write(b"[s]\nk=1\n", "s", "k", "a;b", config) == b"[s]\nk=a;b\n"

    def test_unencodable_value(self) -> None:
        config = ParserConfig(encoding="ascii")
        dest = OneWayWriter()
        with pytest.raises(EncodingError):
            write_value(OneWayReader(b"[s]\n"), dest, "s", "k", "héllo", config=config)
        assert dest.writes == []

    def test_unencodable_section(self) -> None:
        with pytest.raises(EncodingError):
            _write(b"", "ünï", "k", "v", ParserConfig(encoding="ascii"))

    @pytest.mark.parametrize(("section", "key"), [("s", "a=b"), ("s", ";k"), ("s", "[k"), ("a]", "k")])
    def test_invalid_names(self, section: str, key: str) -> None:
        dest = OneWayWriter()
        with pytest.raises(InvalidName):
            write_value(OneWayReader(b"[s]\n"), dest, section, key, "v")
        assert dest.writes == []


class TestBoundedHold:
    def test_spills_to_disk_and_stays_correct(self) -> None:
        filler = b"".join(b"f%d=%s\n" % (i, b"x" * 40) for i in range(2000))
        data = b"[a]\nk=1\n" + filler + b"[b]\n"
        config = ParserConfig(spool_size=64, chunk_size=256)
        out = _write(data, "a", "k", "2", config)
        assert out == b"[a]\nk=2\n" + filler + b"[b]\n"

    def test_output_released_before_target(self) -> None:
        prefix = b"[other]\n" + b"x=1\n" * 1000
        patcher = Patcher(ParserConfig(chunk_size=64), EntryAddress("a", "k"), "2")
        try:
            released = b"".join(b"".join(patcher.feed(prefix[i : i + 64])) for i in range(0, len(prefix), 64))
            assert released == prefix
            rest = b"".join(patcher.feed(b"[a]\nk=1\n")) + b"".join(patcher.finish())
        finally:
            patcher.close()
        assert rest == b"[a]\nk=2\n"

    def test_last_occurrence_far_apart(self) -> None:
        middle = b"".join(b"m%d=0\n" % i for i in range(500))
        data = b"[a]\nk=1\n" + middle + b"[a]\nk=9\n"
        config = ParserConfig(spool_size=0, chunk_size=32)
        assert _write(data, "a", "k", "5", config) == b"[a]\nk=1\n" + middle + b"[a]\nk=5\n"


class TestLogging:
    def test_debug_records(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="ini_splice"):
            _write(b"[a]\nk=1\n", "a", "k", "2")
        assert any("Replacing [a].k" in r.getMessage() for r in caplog.records)

    def test_spill_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        data = b"[a]\nk=1\n" + b"x=1\n" * 100
        with caplog.at_level(logging.DEBUG, logger="ini_splice"):
            _write(data, "a", "k", "2", ParserConfig(spool_size=16))
        assert any("spilled" in r.getMessage() for r in caplog.records)


class TestEditorWrite:
    def test_editor_method(self, editor: IniEditor) -> None:
        dest = io.BytesIO()
        editor.write_value(io.BytesIO(b"[s]\nk=1\n"), dest, "s", "k", "2")
        assert dest.getvalue() == b"[s]\nk=2\n"

    def test_strict_error_context(self) -> None:
        editor = IniEditor(ParserConfig(missing_policy=MissingPolicy.STRICT))
        with pytest.raises(NotFoundPolicyError) as info:
            editor.write_value(io.BytesIO(b"[s]\n"), io.BytesIO(), "s", "k", "2")
        assert (info.value.section, info.value.key) == ("s", "k")
