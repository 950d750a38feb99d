"""Streaming I/O — async streams, pipes and chunk-sized reads.

Demonstrates that sources and sinks are consumed strictly forward, so
asyncio streams and other non-seekable transports work unchanged.
"""

from __future__ import annotations

import asyncio
import io

from ini_splice import IniEditor, ParserConfig

DOCUMENT = b"[cache]\nsize = 64\n" + b"".join(b"[shard%d]\nweight = 1\n" % i for i in range(1000))


async def main() -> None:
    editor = IniEditor(ParserConfig(chunk_size=4096))

    reader = asyncio.StreamReader()
    reader.feed_data(DOCUMENT)
    reader.feed_eof()
    size = await editor.read_value_async(reader, "cache", "size", int)
    print(f"cache.size = {size}")

    # Any object with read()/write() works; coroutines are awaited.
    source = asyncio.StreamReader()
    source.feed_data(DOCUMENT)
    source.feed_eof()
    sink = io.BytesIO()
    await editor.write_value_async(source, sink, "shard999", "weight", "5")
    print(sink.getvalue()[-40:].decode())


if __name__ == "__main__":
    asyncio.run(main())
