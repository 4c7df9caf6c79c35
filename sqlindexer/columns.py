"""Extraction of column definitions from the body of a CREATE TABLE statement."""

from __future__ import annotations

import re
from collections.abc import Iterator

from .models import ColumnInfo, TableInfo

# Longest column definition (in bytes) that is still parsed.
MAX_DEFINITION_LENGTH = 1022

_WHITESPACE = " \t\n\v\f\r"
_QUOTES = "'\"`"
_TOKEN_SEPARATORS = re.compile(r"[ \t\n\r]+")


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _keyword(token: str | None, word: str) -> bool:
    return token is not None and token.isascii() and token.upper() == word


def _split_definitions(body: str) -> Iterator[str]:
    """Yield the comma separated definitions of a table body.

    Commas inside quotes do not split. The last character of the body (the
    closing parenthesis) is never part of a definition.
    """
    end = len(body)
    pos = _skip_space(body, 0)
    start = pos
    quote: str | None = None
    while pos < end:
        char = body[pos]
        if char in _QUOTES and (pos == 0 or body[pos - 1] != "\\"):
            if quote is None:
                quote = char
            elif quote == char:
                quote = None
        if quote is None and (char == "," or pos == end - 1):
            definition = body[start:pos]
            if 0 < len(definition.encode("utf-8")) <= MAX_DEFINITION_LENGTH:
                yield definition
            pos = _skip_space(body, pos + 1)
            start = pos
        else:
            pos += 1


def _parse_definition(definition: str) -> ColumnInfo | None:
    tokens = iter(t for t in _TOKEN_SEPARATORS.split(definition) if t)

    name = next(tokens, None)
    if name is None:
        return None
    if name.startswith("`"):
        name = name[1:].split("`", 1)[0]

    col_type = next(tokens, None)
    if col_type is None:
        return None
    if "(" in col_type and ")" not in col_type:
        parts = [col_type]
        for token in tokens:
            parts.append(token)
            if ")" in token:
                break
        col_type = " ".join(parts)

    column = ColumnInfo(name=name, type=col_type)
    for token in tokens:
        if _keyword(token, "PRIMARY"):
            if _keyword(next(tokens, None), "KEY"):
                column.is_primary_key = True
        elif _keyword(token, "NOT"):
            if _keyword(next(tokens, None), "NULL"):
                column.is_not_null = True
        elif _keyword(token, "AUTO_INCREMENT"):
            column.is_auto_increment = True
        elif _keyword(token, "DEFAULT"):
            column.default_value = next(tokens, None)
    return column


def parse_table_columns(table_info: TableInfo, body: str) -> list[ColumnInfo]:
    """Parse the column definitions of ``body`` into ``table_info``.

    ``body`` is the text following the opening parenthesis of the table
    definition, up to and including its closing parenthesis. Returns the
    columns that were appended.
    """
    added: list[ColumnInfo] = []
    for definition in _split_definitions(body):
        column = _parse_definition(definition)
        if column is not None:
            table_info.columns.append(column)
            added.append(column)
    return added