"""EntryAddress — immutable, validated section/key target."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Optional

from ini_splice._config import PreHeaderPolicy
from ini_splice._errors import InvalidName

if TYPE_CHECKING:
    from ini_splice._config import ParserConfig

_LINE_BREAKS = ("\n", "\r")


class EntryAddress:
    """The section and key an operation targets.

    Both parts are trimmed. ``section=None`` addresses the global section
    before the first header.

    :param section: Section name without brackets, or ``None``.
    :param key: Key name.
    :raises InvalidName: If either part could not appear in an INI line.
    """

    __slots__ = ("_key", "_section")
    _section: Final[Optional[str]]  # type: ignore[misc]
    _key: Final[str]  # type: ignore[misc]

    def __init__(self, section: Optional[str], key: str) -> None:
        object.__setattr__(self, "_section", self._normalize_section(section))
        object.__setattr__(self, "_key", self._normalize_key(key, section))

    @staticmethod
    def _normalize_section(raw: Optional[str]) -> Optional[str]:
        if raw is None:
            return None
        name = raw.strip()
        if not name:
            raise InvalidName("Section name is empty; use None for the global section", section=raw)
        if any(c in name for c in ("[", "]", *_LINE_BREAKS)):
            raise InvalidName("Section name contains brackets or a line break", section=raw)
        return name

    @staticmethod
    def _normalize_key(raw: str, section: Optional[str]) -> str:
        name = raw.strip()
        if not name:
            raise InvalidName("Key is empty", section=section, key=raw)
        if any(c in name for c in _LINE_BREAKS):
            raise InvalidName("Key contains a line break", section=section, key=raw)
        if name.startswith("["):
            raise InvalidName("Key would be read as a section header", section=section, key=raw)
        return name

    def check(self, config: ParserConfig) -> None:
        """Apply the checks that depend on parser options.

        :raises InvalidName: If the key contains the separator, starts with a
            comment prefix, or the global section is disabled.
        """
        if self._section is None and config.pre_header_policy is PreHeaderPolicy.REJECT:
            raise InvalidName("Global section is disabled by pre_header_policy", key=self._key)
        if config.separator in self._key:
            raise InvalidName(f"Key contains the separator {config.separator!r}", section=self._section, key=self._key)
        if self._key.startswith(config.comment_prefixes):
            raise InvalidName("Key would be read as a comment", section=self._section, key=self._key)

    @property
    def section(self) -> Optional[str]:
        return self._section

    @property
    def key(self) -> str:
        return self._key

    def matches_section(self, name: str, config: ParserConfig) -> bool:
        """Compare a header name against the target section."""
        if self._section is None:
            return False
        if config.case_sensitive_sections:
            return name == self._section
        return name.casefold() == self._section.casefold()

    def matches_key(self, name: str, config: ParserConfig) -> bool:
        """Compare an entry key against the target key."""
        if config.case_sensitive_keys:
            return name == self._key
        return name.casefold() == self._key.casefold()

    def __str__(self) -> str:
        if self._section is None:
            return self._key
        return f"[{self._section}].{self._key}"

    def __repr__(self) -> str:
        return f"EntryAddress(section={self._section!r}, key={self._key!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EntryAddress):
            return (self._section, self._key) == (other._section, other._key)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._section, self._key))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"EntryAddress is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"EntryAddress is immutable: cannot delete '{name}'")
