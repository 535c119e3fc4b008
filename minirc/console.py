"""Console helpers: bounded line input and hex dumps of buffers."""

from __future__ import annotations

from typing import TextIO

_HEX_TOP = "\n----------BUFFER----------\n"
_HEX_BOTTOM = "\n--------------------------\n"


def read_line(stream: TextIO, limit: int, flush: bool = False) -> str:
    """Read at most ``limit`` characters up to a newline or end of input.

    The newline is consumed but not returned. With ``flush`` set, whatever
    remains of the current line after the limit is discarded.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    chars: list[str] = []
    ended = False
    while len(chars) < limit:
        c = stream.read(1)
        if not c or c == "\n":
            ended = True
            break
        chars.append(c)

    if flush and not ended:
        stream.readline()
    return "".join(chars)


def format_buffer_hex(data: bytes) -> str:
    """Render bytes as a hex dump: groups of four, four groups per row."""
    parts = [_HEX_TOP]
    for i, byte in enumerate(bytes(data)):
        if i and i % 4 == 0:
            parts.append(" ")
            if i % 16 == 0:
                parts.append("\n")
        parts.append(f"{byte:02x} ")
    parts.append(_HEX_BOTTOM)
    return "".join(parts)