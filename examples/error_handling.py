"""Error handling — conversion failures, strict writes, and invalid names.

Demonstrates the normalized error hierarchy and how to handle errors
programmatically using structured attributes.
"""

from __future__ import annotations

import io

from ini_splice import (
    ConversionError,
    IniEditor,
    IniSpliceError,
    InvalidName,
    InvalidValue,
    MissingPolicy,
    NotFoundPolicyError,
    ParserConfig,
)

DOCUMENT = b"[server]\nport = eighty\n"

if __name__ == "__main__":
    editor = IniEditor()

    # --- ConversionError ---
    try:
        editor.read_value(io.BytesIO(DOCUMENT), "server", "port", int)
    except ConversionError as exc:
        print(f"ConversionError: {exc}")
        print(f"  raw_value={exc.raw_value!r}, target_type={exc.target_type}")

    # --- NotFoundPolicyError (strict writes never create keys) ---
    strict = IniEditor(ParserConfig(missing_policy=MissingPolicy.STRICT))
    try:
        strict.write_value(io.BytesIO(DOCUMENT), io.BytesIO(), "server", "host", "example.org")
    except NotFoundPolicyError as exc:
        print(f"\nNotFoundPolicyError: {exc}")
        print(f"  section={exc.section}, key={exc.key}")

    # --- InvalidName / InvalidValue are raised before any I/O ---
    try:
        editor.read_value(io.BytesIO(DOCUMENT), "bad]name", "port")
    except InvalidName as exc:
        print(f"\nInvalidName: {exc}")
    try:
        editor.write_value(io.BytesIO(DOCUMENT), io.BytesIO(), "server", "motd", "line1\nline2")
    except InvalidValue as exc:
        print(f"\nInvalidValue: {exc}")

    # --- Catch any ini-splice error with the base class ---
    for section, key in [("server", "port"), ("", "port")]:
        try:
            editor.read_value(io.BytesIO(DOCUMENT), section, key, float)
        except IniSpliceError as exc:
            print(f"\nIniSpliceError ({type(exc).__name__}): {exc}")
