"""Reading, writing and printing of index files.

An index file holds one object per line, ``TYPE,NAME,LINE``. Table lines also
carry the byte offset where the table definition ends, and are followed by
one ``COLUMN,TABLE,NAME,TYPE,PK,NOT_NULL,AUTO_INC,DEFAULT`` line per column.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from .models import TABLE_TYPE, IndexEntry, SqlIndex

logger = logging.getLogger(__name__)

# Longest line (in characters, without the newline) read from an index file.
MAX_LINE_LENGTH = 1023

_COLUMN_PREFIX = "COLUMN,"
_ENTRY_RE = re.compile(
    r"([^,]{1,255})(?:,([^,]{1,511})(?:,\s*([+-]?\d+)(?:,\s*([+-]?\d+))?)?)?"
)
_COLUMN_RE = re.compile(
    r"COLUMN,([^,]{1,255})(?:,([^,]{1,255})(?:,([^,]{1,255})"
    r"(?:,\s*([+-]?\d+)(?:,\s*([+-]?\d+)(?:,\s*([+-]?\d+)"
    r"(?:,(.{1,255}))?)?)?)?)?)?"
)


class IndexFileError(Exception):
    """Raised when an index file cannot be read or written."""


def _lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield the lines of ``stream`` without newlines, cut to the maximum length."""
    for raw in stream:
        has_newline = raw.endswith("\n")
        text = raw[:-1] if has_newline else raw
        if len(text) > MAX_LINE_LENGTH or (
            len(text) == MAX_LINE_LENGTH and has_newline
        ):
            logger.warning(
                "Line in index file exceeds buffer size (%d)", MAX_LINE_LENGTH + 1
            )
            text = text[:MAX_LINE_LENGTH]
        yield text


def _flag(value: str | None) -> bool:
    return value is not None and int(value) != 0


def _read_column(index: SqlIndex, line: str, last_name: str | None) -> None:
    match = _COLUMN_RE.match(line)
    if match is None or match.group(3) is None or match.group(1) != last_name:
        logger.warning("Malformed column entry in index file: %s", line)
        return
    table, name, col_type, pk, not_null, auto_inc, default = match.groups()
    if not index.entries or index.entries[-1].table_info is None:
        raise IndexFileError(
            f"column '{name}' of '{table}' does not follow a table entry"
        )
    index.entries[-1].table_info.add_column(
        name, col_type, _flag(pk), _flag(not_null), _flag(auto_inc), default
    )


def _parse_lines(lines: Iterable[str]) -> SqlIndex:
    index = SqlIndex()
    last_name: str | None = None
    for line in lines:
        if line.startswith(_COLUMN_PREFIX):
            _read_column(index, line, last_name)
            continue
        match = _ENTRY_RE.match(line)
        if match is not None and match.group(2) is not None:
            last_name = match.group(2)
        if match is None or match.group(3) is None:
            if line:
                logger.warning("Malformed line in index file: %s", line)
            continue
        type_, name, line_number, end_offset = match.groups()
        if type_ == TABLE_TYPE:
            info = index.add_table(name, int(line_number)).table_info
            if end_offset is not None:
                info.end_offset = int(end_offset)
        else:
            index.add_entry(type_, name, int(line_number))
    return index


def read_index(path: str | os.PathLike[str]) -> SqlIndex:
    """Load the index stored at ``path``.

    Malformed lines are logged and skipped. Raises IndexFileError when the
    file cannot be read or a column line belongs to a non-table entry.
    """
    try:
        with open(path, encoding="utf-8", errors="replace", newline="\n") as stream:
            index = _parse_lines(_lines(stream))
    except OSError as exc:
        raise IndexFileError(f"cannot read index file '{path}': {exc}") from exc
    logger.info(
        "Successfully loaded %d entries from index file '%s'.", len(index), path
    )
    return index


def _entry_lines(entry: IndexEntry) -> Iterator[str]:
    if not entry.is_table:
        yield f"{entry.type},{entry.name},{entry.line_number}\n"
        return
    table = entry.table_info
    yield f"{entry.type},{entry.name},{entry.line_number},{table.end_offset}\n"
    for col in table.columns:
        yield (
            f"COLUMN,{table.name},{col.name},{col.type},"
            f"{int(col.is_primary_key)},{int(col.is_not_null)},"
            f"{int(col.is_auto_increment)},{col.default_value or ''}\n"
        )


def write_index(index: SqlIndex, path: str | os.PathLike[str]) -> None:
    """Store ``index`` at ``path``; raises IndexFileError on failure."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as stream:
            for entry in index:
                stream.writelines(_entry_lines(entry))
    except OSError as exc:
        raise IndexFileError(f"cannot write index file '{path}': {exc}") from exc


def _result_lines(index: SqlIndex) -> Iterator[str]:
    yield "Indexed Objects:"
    yield f"{'Line':<10} {'Type':<10} Name"
    yield "-" * 50
    if not len(index):
        yield "No indexable objects found or index is empty."
        return
    for entry in index:
        yield f"{entry.line_number:<10} {entry.type:<10} {entry.name}"
        table = entry.table_info
        if entry.type != TABLE_TYPE or table is None or not table.columns:
            continue
        yield "   Columns:"
        for col in table.columns:
            text = f"     {col.name:<20} {col.type:<15}"
            if col.is_primary_key:
                text += " PK"
            if col.is_not_null:
                text += " NOT NULL"
            if col.is_auto_increment:
                text += " AUTO_INCREMENT"
            if col.default_value:
                text += f" DEFAULT {col.default_value}"
            yield text
        yield ""


def format_results(index: SqlIndex) -> str:
    """Return the listing of ``index`` as printed by ``print_results``."""
    return "".join(f"{line}\n" for line in _result_lines(index))


def print_results(index: SqlIndex, file: TextIO | None = None) -> None:
    """Write the listing of ``index`` to ``file`` (standard output by default)."""
    (file or sys.stdout).write(format_results(index))