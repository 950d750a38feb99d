"""Format-preserving, streaming INI value editing."""

from ini_splice._address import EntryAddress
from ini_splice._classifier import LineClassifier, classify_line
from ini_splice._config import MissingPolicy, ParserConfig, PreHeaderPolicy, TrimPolicy
from ini_splice._convert import convert
from ini_splice._editor import IniEditor, read_value, read_value_async, write_value, write_value_async
from ini_splice._errors import (
    ConversionError,
    EncodingError,
    IniSpliceError,
    InvalidName,
    InvalidValue,
    NotFoundPolicyError,
)
from ini_splice._locator import Locator
from ini_splice._models import (
    Blank,
    Comment,
    Entry,
    Line,
    LocateResult,
    Malformed,
    SectionBounds,
    SectionHeader,
    Span,
    ValueLocation,
)
from ini_splice.adapters import AsyncAdapter, BlockingAdapter

__version__ = "0.1.0"

__all__ = [
    # Core
    "IniEditor",
    "read_value",
    "write_value",
    "read_value_async",
    "write_value_async",
    "convert",
    # Config
    "ParserConfig",
    "TrimPolicy",
    "MissingPolicy",
    "PreHeaderPolicy",
    # Scanning
    "EntryAddress",
    "LineClassifier",
    "classify_line",
    "Locator",
    # Models
    "Line",
    "SectionHeader",
    "Entry",
    "Comment",
    "Blank",
    "Malformed",
    "Span",
    "ValueLocation",
    "SectionBounds",
    "LocateResult",
    # Adapters
    "BlockingAdapter",
    "AsyncAdapter",
    # Errors
    "IniSpliceError",
    "EncodingError",
    "ConversionError",
    "NotFoundPolicyError",
    "InvalidName",
    "InvalidValue",
    # Version
    "__version__",
]
