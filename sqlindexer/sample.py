"""Lookup of the first row inserted into a table of an SQL dump."""

from __future__ import annotations

import os
from functools import partial

CHUNK_SIZE = 4096
SAMPLE_LIMIT = 300
BLOB_SAMPLE = "BLOB"

_QUOTES = b"'\"`"
_NOISE = b"-/"


def _is_space(data: bytes, pos: int) -> bool:
    return data[pos:pos + 1].isspace()


def _skip_space(data: bytes, pos: int) -> int:
    while pos < len(data) and _is_space(data, pos):
        pos += 1
    return pos


def _skip_noise(chunk: bytes, pos: int) -> int:
    """Skip whitespace, dashes, slashes and the comments they start."""
    end = len(chunk)
    while pos < end and (_is_space(chunk, pos) or chunk[pos] in _NOISE):
        pair = chunk[pos:pos + 2]
        if pair == b"--":
            eol = chunk.find(b"\n", pos)
            pos = eol + 1 if eol != -1 else end
        elif pair == b"/*":
            close = chunk.find(b"*/", pos + 2)
            pos = close + 2 if close != -1 else end
        else:
            pos += 1
    return pos


def _values_start(chunk: bytes, pos: int, name: bytes) -> int | None:
    """Return where the row data starts if ``pos`` follows INSERT INTO for ``name``."""
    pos = _skip_space(chunk, pos)
    quoted = b"`" + name + b"`"
    if chunk.startswith(quoted, pos):
        pos += len(quoted)
    elif chunk.startswith(name, pos):
        pos += len(name)
    else:
        return None
    pos = _skip_space(chunk, pos)
    if chunk[pos:pos + 6].upper() != b"VALUES":
        return None
    pos = _skip_space(chunk, pos + 6)
    if chunk[pos:pos + 1] != b"(":
        return None
    return pos + 1


def _find_insert(chunk: bytes, name: bytes) -> int | None:
    pos = 0
    end = len(chunk)
    while pos < end:
        pos = _skip_noise(chunk, pos)
        if pos >= end:
            break
        if chunk[pos:pos + 11].upper() == b"INSERT INTO":
            start = _values_start(chunk, pos + 11, name)
            if start is not None:
                return start
        eol = chunk.find(b"\n", pos)
        pos = eol + 1 if eol != -1 else end
    return None


def _row_end(chunk: bytes, start: int) -> int | None:
    """Return the position of the parenthesis closing the row, quotes respected."""
    depth = 1
    quote: int | None = None
    prev: int | None = None
    for pos, byte in enumerate(chunk[start:], start=start):
        escaped = prev == 0x5C
        prev = byte
        if quote is None and byte in _QUOTES and not escaped:
            quote = byte
        elif quote is not None and byte == quote and not escaped:
            quote = None
        elif quote is None:
            if byte == 0x28:
                depth += 1
            elif byte == 0x29:
                depth -= 1
                if depth == 0:
                    return pos
    return None


def get_first_row_sample(
    filename: str | os.PathLike[str], start_offset: int, table_name: str
) -> str | None:
    """Return the first row inserted into ``table_name`` after ``start_offset``.

    The row is cut to ``SAMPLE_LIMIT`` bytes, or given as ``"BLOB"`` when it
    starts with binary data. Returns None when no complete row is found in
    the chunk holding the INSERT statement or when the offset is negative.
    """
    if start_offset < 0:
        return None
    name = table_name.encode("utf-8")
    with open(filename, "rb") as stream:
        stream.seek(start_offset)
        for chunk in iter(partial(stream.read, CHUNK_SIZE), b""):
            start = _find_insert(chunk, name)
            if start is not None:
                break
        else:
            return None
    end = _row_end(chunk, start)
    if end is None:
        return None
    row = chunk[start:end]
    if row.startswith(b"_binary "):
        return BLOB_SAMPLE
    return row[:SAMPLE_LIMIT].decode("utf-8", errors="replace")