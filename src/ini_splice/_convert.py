"""Value conversion from raw INI text to caller-requested types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ini_splice._errors import ConversionError

if TYPE_CHECKING:
    from ini_splice._types import Converter, ValueT

_TRUE = frozenset({"1", "yes", "on", "true"})
_FALSE = frozenset({"0", "no", "off", "false"})


def _to_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def is_quoted(text: str) -> bool:
    """Whether ``text`` is wrapped in one pair of double quotes."""
    return len(text) >= 2 and text[0] == text[-1] == '"'


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or type(target).__name__


def convert(
    raw: str,
    target: Converter[ValueT],
    *,
    unquote: bool = False,
    section: Optional[str] = None,
    key: Optional[str] = None,
) -> ValueT:
    """Convert ``raw`` to ``target``.

    ``str`` returns the text unchanged, or with one pair of surrounding double
    quotes removed when ``unquote`` is set. ``bool`` accepts ``1/yes/on/true``
    and ``0/no/off/false`` in any case. Any other type or callable is applied
    to the text directly, e.g. ``int``, ``float``, ``decimal.Decimal``,
    ``pathlib.Path``.

    :raises ConversionError: If the conversion rejects the text.
    """
    if target is str:
        if unquote and is_quoted(raw):
            raw = raw[1:-1]
        return raw  # type: ignore[return-value]
    try:
        if target is bool:
            return _to_bool(raw)  # type: ignore[return-value]
        return target(raw)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ConversionError(
            f"Cannot convert value to {_type_name(target)}: {exc}",
            section=section,
            key=key,
            raw_value=raw,
            target_type=_type_name(target),
        ) from exc
