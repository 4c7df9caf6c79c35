"""Scanner that indexes the CREATE TABLE statements of an SQL file."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from functools import partial
from typing import BinaryIO

from .columns import parse_table_columns
from .models import SqlIndex

CHUNK_SIZE = 4096
_KEYWORD = b"CREATE TABLE"
_KEYWORD_LEN = len(_KEYWORD)
_TOKEN_STOP = b" \t\n\v\f\r,("


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _is_space(chunk: bytes, pos: int) -> bool:
    return chunk[pos:pos + 1].isspace()


def _skip_space(chunk: bytes, pos: int) -> int:
    while pos < len(chunk) and _is_space(chunk, pos):
        pos += 1
    return pos


def _token_end(chunk: bytes, pos: int) -> int:
    while pos < len(chunk) and chunk[pos] not in _TOKEN_STOP:
        pos += 1
    return pos


def _find_body_end(chunk: bytes, pos: int) -> int | None:
    """Return the position after the parenthesis closing the body, if any."""
    depth = 1
    for offset, byte in enumerate(chunk[pos:], start=pos):
        if byte == 0x28:
            depth += 1
        elif byte == 0x29:
            depth -= 1
            if depth == 0:
                return offset + 1
    return None


def _handle_create(
    chunk: bytes, after: int, base: int, line: int, index: SqlIndex
) -> int:
    """Record the table whose keyword ends at ``after``; return where to resume."""
    token_start = _skip_space(chunk, after)
    if token_start >= len(chunk):
        return after
    token_end = _token_end(chunk, token_start)
    if token_end == token_start:
        return after

    raw_name = chunk[token_start:token_end]
    if raw_name.startswith(b"`") and raw_name.endswith(b"`"):
        raw_name = raw_name[1:-1]
    info = index.add_table(_decode(raw_name), line).table_info

    paren = chunk.find(b"(", token_end)
    if paren == -1:
        info.end_offset = base + token_end
        return token_end
    body_start = paren + 1
    body_end = _find_body_end(chunk, body_start)
    if body_end is None:
        info.end_offset = base + body_start
        return body_start
    info.end_offset = base + body_end
    parse_table_columns(info, _decode(chunk[body_start:body_end]))
    return body_end


def _scan_chunk(chunk: bytes, base: int, line: int, index: SqlIndex) -> int:
    """Scan one chunk, adding tables to ``index``; return the updated line."""
    pos = 0
    end = len(chunk)
    while pos < end:
        if chunk[pos] == 0x0A:
            line += 1
        if (
            end - pos >= _KEYWORD_LEN
            and chunk[pos:pos + _KEYWORD_LEN].upper() == _KEYWORD
        ):
            after = pos + _KEYWORD_LEN
            if after == end or _is_space(chunk, after):
                pos = _handle_create(chunk, after, base, line, index)
                continue
        pos += 1
    return line


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    return iter(partial(stream.read, CHUNK_SIZE), b"")


def _parse_stream(stream: BinaryIO) -> SqlIndex:
    index = SqlIndex()
    line = 1
    offset = 0
    for chunk in _chunks(stream):
        line = _scan_chunk(chunk, offset, line, index)
        offset += len(chunk)
    return index


def parse_sql(data: bytes | str) -> SqlIndex:
    """Index the CREATE TABLE statements found in ``data``.

    The data is scanned in chunks of ``CHUNK_SIZE`` bytes; a statement split
    across two chunks is only partly seen.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _parse_stream(io.BytesIO(data))


def parse_sql_file(path: str | os.PathLike[str]) -> SqlIndex:
    """Index the CREATE TABLE statements of the file at ``path``."""
    with open(path, "rb") as stream:
        return _parse_stream(stream)