"""Normalized error hierarchy for ini_splice."""

from __future__ import annotations

from typing import Optional


class IniSpliceError(Exception):
    """Base class for all ini_splice errors.

    :param message: Human-readable error description.
    :param section: The section involved in the error, if any.
    :param key: The key involved in the error, if any.
    """

    def __init__(self, message: str = "", *, section: Optional[str] = None, key: Optional[str] = None) -> None:
        self.section = section
        self.key = key
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = []
        if self.section is not None:
            parts.append(f"section={self.section!r}")
        if self.key is not None:
            parts.append(f"key={self.key!r}")
        return parts

    def __str__(self) -> str:
        parts = [super().__str__(), *self._context()]
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else ""), *self._context()]
        return f"{cls}({', '.join(args)})"


class EncodingError(IniSpliceError):
    """Raised when bytes cannot be decoded, or text encoded, where text is required."""


class ConversionError(IniSpliceError):
    """Raised when a value is present but cannot be converted to the requested type.

    :param raw_value: The value text as found in the document.
    :param target_type: Name of the requested type.
    """

    def __init__(
        self,
        message: str = "",
        *,
        section: Optional[str] = None,
        key: Optional[str] = None,
        raw_value: str = "",
        target_type: str = "",
    ) -> None:
        self.raw_value = raw_value
        self.target_type = target_type
        super().__init__(message, section=section, key=key)

    def _context(self) -> list[str]:
        return [*super()._context(), f"raw_value={self.raw_value!r}", f"target_type={self.target_type!r}"]


class NotFoundPolicyError(IniSpliceError):
    """Raised when a write targets a missing section or key under the strict missing policy."""


class InvalidName(IniSpliceError):
    """Raised for section or key names that cannot be located or written safely."""


class InvalidValue(IniSpliceError):
    """Raised for values that cannot be written on a single line."""
