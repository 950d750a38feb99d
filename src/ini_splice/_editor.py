"""IniEditor — the primary user-facing abstraction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ini_splice import _reader, _writer
from ini_splice._address import EntryAddress
from ini_splice._config import ParserConfig
from ini_splice.adapters import AsyncAdapter, BlockingAdapter

if TYPE_CHECKING:
    from ini_splice._types import AsyncByteSink, AsyncByteSource, ByteSink, ByteSource, Converter, SectionName


class IniEditor:
    """Reads and patches single values in INI streams.

    The editor holds only its configuration; every call performs a fresh
    scan over caller-supplied streams, so one editor may serve many
    threads or tasks at once. Streams are never opened, closed or seeked.

    :param config: Parser options. Validated immediately.
    :raises ValueError: If the config is invalid.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self._config = config or ParserConfig()
        self._config.validate()

    @property
    def config(self) -> ParserConfig:
        return self._config

    def __repr__(self) -> str:
        return f"IniEditor(config={self._config!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IniEditor):
            return self._config == other._config
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._config)

    def read_value(self, source: ByteSource, section: SectionName, key: str, type: Converter[Any] = str) -> Any:
        """Read and convert a value.

        :param section: Section name, or ``None`` for the global section.
        :param type: Target type or converter, ``str`` by default.
        :returns: The converted value, or ``None`` if the key is absent.
        :raises ConversionError: If the value cannot be converted.
        :raises EncodingError: If the value is not valid text.
        :raises InvalidName: If ``section`` or ``key`` is unusable.
        """
        op = _reader.read_value(self._config, EntryAddress(section, key), type)
        return BlockingAdapter(source).run(op)

    def write_value(self, source: ByteSource, dest: ByteSink, section: SectionName, key: str, value: str) -> None:
        """Copy ``source`` to ``dest`` with one value set.

        The key is replaced in place when present, inserted at the end of
        its section otherwise, and a new section is appended when missing.
        ``dest`` must be a different stream from ``source``; replacing the
        original file (e.g. temp file and rename) is up to the caller.

        :raises NotFoundPolicyError: If the target is missing under the strict policy.
        :raises InvalidValue: If ``value`` contains a line break.
        :raises EncodingError: If ``value`` cannot be encoded.
        :raises InvalidName: If ``section`` or ``key`` is unusable.
        """
        op = _writer.write_value(self._config, EntryAddress(section, key), value)
        BlockingAdapter(source, dest).run(op)

    async def read_value_async(
        self,
        source: AsyncByteSource,
        section: SectionName,
        key: str,
        type: Converter[Any] = str,
    ) -> Any:
        """Awaitable form of :meth:`read_value`."""
        op = _reader.read_value(self._config, EntryAddress(section, key), type)
        return await AsyncAdapter(source).run(op)

    async def write_value_async(
        self,
        source: AsyncByteSource,
        dest: AsyncByteSink,
        section: SectionName,
        key: str,
        value: str,
    ) -> None:
        """Awaitable form of :meth:`write_value`."""
        op = _writer.write_value(self._config, EntryAddress(section, key), value)
        await AsyncAdapter(source, dest).run(op)


def read_value(
    source: ByteSource,
    section: SectionName,
    key: str,
    type: Converter[Any] = str,
    *,
    config: Optional[ParserConfig] = None,
) -> Any:
    """Shortcut for ``IniEditor(config).read_value(...)``."""
    return IniEditor(config).read_value(source, section, key, type)


def write_value(
    source: ByteSource,
    dest: ByteSink,
    section: SectionName,
    key: str,
    value: str,
    *,
    config: Optional[ParserConfig] = None,
) -> None:
    """Shortcut for ``IniEditor(config).write_value(...)``."""
    IniEditor(config).write_value(source, dest, section, key, value)


async def read_value_async(
    source: AsyncByteSource,
    section: SectionName,
    key: str,
    type: Converter[Any] = str,
    *,
    config: Optional[ParserConfig] = None,
) -> Any:
    """Shortcut for ``IniEditor(config).read_value_async(...)``."""
    return await IniEditor(config).read_value_async(source, section, key, type)


async def write_value_async(
    source: AsyncByteSource,
    dest: AsyncByteSink,
    section: SectionName,
    key: str,
    value: str,
    *,
    config: Optional[ParserConfig] = None,
) -> None:
    """Shortcut for ``IniEditor(config).write_value_async(...)``."""
    await IniEditor(config).write_value_async(source, dest, section, key, value)
