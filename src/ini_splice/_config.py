"""Parser configuration — immutable options shared by every scan."""

from __future__ import annotations

import codecs
import dataclasses
import enum
from typing import Optional


class TrimPolicy(enum.Enum):
    """Whitespace handling around the separator."""

    STRIP = "strip"
    PRESERVE = "preserve"


class MissingPolicy(enum.Enum):
    """What a write does when the target section or key does not exist."""

    CREATE = "create"
    STRICT = "strict"


class PreHeaderPolicy(enum.Enum):
    """How entries appearing before the first section header are treated."""

    GLOBAL = "global"
    REJECT = "reject"


_LINE_ENDINGS = ("\n", "\r\n")


@dataclasses.dataclass(frozen=True)
class ParserConfig:
    """Describes how INI documents are scanned and patched.

    :param comment_prefixes: Strings that start a comment line.
    :param separator: Single character between key and value.
    :param case_sensitive_sections: Compare section names exactly.
    :param case_sensitive_keys: Compare keys exactly.
    :param line_ending: Terminator for inserted lines. ``None`` reuses the
        first terminator found in the source, falling back to ``"\\n"``.
    :param trim_policy: Whitespace handling around the separator.
    :param missing_policy: Create or refuse missing sections/keys on write.
    :param pre_header_policy: Whether entries before the first header form
        the global section.
    :param trailing_comments: Treat ``<whitespace><prefix>...`` after a value
        as a comment rather than part of the value.
    :param strip_quotes: Remove one pair of surrounding double quotes when a
        value is read as ``str``.
    :param encoding: Text encoding of names and values.
    :param chunk_size: Bytes requested per physical read.
    :param spool_size: In-memory bound of the writer's held tail.
    """

    comment_prefixes: tuple[str, ...] = (";", "#")
    separator: str = "="
    case_sensitive_sections: bool = True
    case_sensitive_keys: bool = True
    line_ending: Optional[str] = None
    trim_policy: TrimPolicy = TrimPolicy.STRIP
    missing_policy: MissingPolicy = MissingPolicy.CREATE
    pre_header_policy: PreHeaderPolicy = PreHeaderPolicy.GLOBAL
    trailing_comments: bool = False
    strip_quotes: bool = True
    encoding: str = "utf-8"
    chunk_size: int = 8192
    spool_size: int = 1024 * 1024

    def validate(self) -> None:
        """Check option consistency.

        :raises ValueError: If an option is out of range or contradicts another.
        """
        if len(self.separator) != 1 or self.separator.isspace() or self.separator in "[]\r\n":
            raise ValueError(f"Separator must be a single non-whitespace, non-bracket character, got {self.separator!r}")
        for prefix in self.comment_prefixes:
            if not prefix or prefix != prefix.strip():
                raise ValueError(f"Comment prefixes must be non-empty and unpadded, got {prefix!r}")
            if prefix.startswith(("[", self.separator)):
                raise ValueError(f"Comment prefix {prefix!r} clashes with header or separator syntax")
        if self.line_ending is not None and self.line_ending not in _LINE_ENDINGS:
            raise ValueError(f"line_ending must be one of {_LINE_ENDINGS!r} or None, got {self.line_ending!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding {self.encoding!r}") from None
        # Lines are split and classified on raw bytes.
        syntax = "[]\r\n \t" + self.separator + "".join(self.comment_prefixes)
        try:
            ascii_compatible = syntax.encode(self.encoding) == syntax.encode("utf-8")
        except UnicodeEncodeError:
            ascii_compatible = False
        if not ascii_compatible:
            raise ValueError(f"Encoding {self.encoding!r} cannot represent the INI syntax characters byte-for-byte")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.spool_size < 0:
            raise ValueError(f"spool_size must not be negative, got {self.spool_size}")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ParserConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        Enum options accept their string values; unknown keys are rejected.

        :param data: Mapping of option names to values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown parser options: {unknown}. Known options: {sorted(known)}"
            raise TypeError(msg)

        options: dict[str, object] = dict(data)
        prefixes = options.get("comment_prefixes")
        if prefixes is not None:
            if isinstance(prefixes, str) or not isinstance(prefixes, (list, tuple, set, frozenset)):
                msg = "Expected 'comment_prefixes' to be a list of strings"
                raise TypeError(msg)
            options["comment_prefixes"] = tuple(str(p) for p in prefixes)
        for name, enum_cls in (
            ("trim_policy", TrimPolicy),
            ("missing_policy", MissingPolicy),
            ("pre_header_policy", PreHeaderPolicy),
        ):
            raw = options.get(name)
            if isinstance(raw, str):
                try:
                    options[name] = enum_cls(raw)
                except ValueError:
                    choices = sorted(m.value for m in enum_cls)
                    raise TypeError(f"Invalid {name} {raw!r}. Choices: {choices}") from None
        return cls(**options)  # type: ignore[arg-type]
