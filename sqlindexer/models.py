"""Data structures describing an index of objects found in an SQL dump."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

TABLE_TYPE = "TABLE"


@dataclass
class ColumnInfo:
    """One column of a table definition."""

    name: str
    type: str
    is_primary_key: bool = False
    is_not_null: bool = False
    is_auto_increment: bool = False
    default_value: str | None = None


@dataclass
class TableInfo:
    """A table together with its columns and where its definition ends."""

    name: str
    line_number: int
    end_offset: int = -1
    columns: list[ColumnInfo] = field(default_factory=list)

    def add_column(
        self,
        name: str,
        type_: str,
        is_primary_key: bool = False,
        is_not_null: bool = False,
        is_auto_increment: bool = False,
        default_value: str | None = None,
    ) -> ColumnInfo:
        """Append a column and return it."""
        column = ColumnInfo(
            name=name,
            type=type_,
            is_primary_key=bool(is_primary_key),
            is_not_null=bool(is_not_null),
            is_auto_increment=bool(is_auto_increment),
            default_value=default_value,
        )
        self.columns.append(column)
        return column


@dataclass
class IndexEntry:
    """One indexed object; ``table_info`` is set for tables only."""

    type: str
    name: str
    line_number: int
    table_info: TableInfo | None = None

    @property
    def is_table(self) -> bool:
        return self.type == TABLE_TYPE and self.table_info is not None


@dataclass
class SqlIndex:
    """An ordered collection of index entries."""

    entries: list[IndexEntry] = field(default_factory=list)

    def add_entry(self, type_: str, name: str, line_number: int) -> IndexEntry:
        """Append a non-table entry and return it."""
        entry = IndexEntry(type=type_, name=name, line_number=line_number)
        self.entries.append(entry)
        return entry

    def add_table(self, name: str, line_number: int) -> IndexEntry:
        """Append a table entry with an empty column list and return it."""
        info = TableInfo(name=name, line_number=line_number)
        entry = IndexEntry(
            type=TABLE_TYPE, name=name, line_number=line_number, table_info=info
        )
        self.entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries)