"""Quickstart — read and patch a single value with ini-splice.

Demonstrates:
- Reading a typed value from a binary stream
- Writing a new value to a second stream
- Comments, spacing and unrelated lines surviving the edit
"""

from __future__ import annotations

import io

from ini_splice import read_value, write_value

DOCUMENT = b"""\
; application settings
[server]
host = localhost   ; loopback only
port = 8080

[user]
first_name = Bob
"""

if __name__ == "__main__":
    # Read a value, converted to int
    port = read_value(io.BytesIO(DOCUMENT), "server", "port", int)
    print(f"Port: {port}")

    # Absent keys read as None
    print(f"Timeout: {read_value(io.BytesIO(DOCUMENT), 'server', 'timeout')}")

    # Replace a value; everything else is copied byte-for-byte
    out = io.BytesIO()
    write_value(io.BytesIO(DOCUMENT), out, "user", "first_name", "Alice")
    print(out.getvalue().decode())

    # A missing key is inserted at the end of its section
    patched = io.BytesIO()
    write_value(io.BytesIO(out.getvalue()), patched, "server", "timeout", "30")
    print(patched.getvalue().decode())
