"""Configuration — ParserConfig options, from_dict(), and a reusable IniEditor.

Demonstrates dialect options such as the separator, comment prefixes,
case-insensitive matching and trailing comments.
"""

from __future__ import annotations

import io

from ini_splice import IniEditor, MissingPolicy, ParserConfig, TrimPolicy

if __name__ == "__main__":
    # --- Option 1: Config-as-code ---
    config = ParserConfig(
        separator=":",
        comment_prefixes=("#",),
        case_sensitive_keys=False,
        trailing_comments=True,
    )
    editor = IniEditor(config)
    data = b"[paths]\nRoot: /srv/app   # deployment root\n"
    print(f"root = {editor.read_value(io.BytesIO(data), 'paths', 'root')}")

    out = io.BytesIO()
    editor.write_value(io.BytesIO(data), out, "paths", "root", "/opt/app")
    print(out.getvalue().decode())

    # --- Option 2: from a plain dict (e.g. parsed from TOML or JSON) ---
    config = ParserConfig.from_dict(
        {
            "trim_policy": "preserve",
            "missing_policy": "strict",
            "line_ending": "\r\n",
        }
    )
    assert config.trim_policy is TrimPolicy.PRESERVE
    assert config.missing_policy is MissingPolicy.STRICT
    editor = IniEditor(config)
    print(repr(editor.read_value(io.BytesIO(b"[a]\r\nk =  spaced  \r\n"), "a", "k")))

    # --- Invalid options fail fast ---
    try:
        IniEditor(ParserConfig(separator="=="))
    except ValueError as exc:
        print(f"Rejected config: {exc}")
