"""Atomic writes — patch a file on disk via temp-file-and-rename.

The source is never modified in place: the patched copy is written to a
temporary file in the same directory and moved over the original only
after the write completed, so readers never see a partial file.
"""

from __future__ import annotations

import os
import pathlib
import tempfile

from ini_splice import IniEditor


def set_value(path: pathlib.Path, section: str | None, key: str, value: str, editor: IniEditor) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with path.open("rb") as source, os.fdopen(fd, "wb") as dest:
            editor.write_value(source, dest, section, key, value)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise


if __name__ == "__main__":
    editor = IniEditor()
    with tempfile.TemporaryDirectory() as tmp:
        path = pathlib.Path(tmp) / "app.ini"
        path.write_bytes(b"[db]\r\nhost = localhost\r\n")

        set_value(path, "db", "port", "5432", editor)
        set_value(path, "db", "host", "db.internal", editor)
        print(path.read_bytes().decode())

        with path.open("rb") as f:
            print(f"port = {editor.read_value(f, 'db', 'port', int)}")

    print("Done! Temp directory cleaned up automatically.")
