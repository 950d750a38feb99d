"""Value reader — locate a value and convert it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ini_splice._convert import convert
from ini_splice._errors import EncodingError
from ini_splice._locator import locate

if TYPE_CHECKING:
    from ini_splice._address import EntryAddress
    from ini_splice._config import ParserConfig
    from ini_splice._io import IOOperation
    from ini_splice._types import Converter, ValueT


def read_value(
    config: ParserConfig,
    address: EntryAddress,
    target: Converter[ValueT],
) -> IOOperation[Optional[ValueT]]:
    """Return the converted value at ``address``, or ``None`` when absent."""
    address.check(config)
    result = yield from locate(config, address)
    if result.value is None:
        return None
    try:
        text = result.value.decode(config.encoding)
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Value is not valid {config.encoding}: {exc.reason}",
            section=address.section,
            key=address.key,
        ) from exc
    return convert(text, target, unquote=config.strip_quotes, section=address.section, key=address.key)
