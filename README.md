# sqlindexer

`sqlindexer` finds the tables in a large SQL dump file. It scans the file
for `CREATE TABLE` statements. For each table it lists the line where the
statement starts and the columns it defines. It also shows the first row
that an `INSERT INTO ... VALUES (...)` statement adds to the first table.

## Installation

```
pip install .
```

The package uses only the standard library. Python 3.10 or later is
required.

## Command line

```
sqlindexer [-v] dump.sql
```

- `dump.sql` is the SQL file to scan. Give exactly one.
- `-v` or `--verbose` writes debug messages to standard error.

Any other option, a second file name, or no file name prints an error and
the usage text to standard error. The exit status is then 1.

On the first run the SQL file is parsed and the index is saved next to it
as `dump.sql.index`. If that file already exists, later runs load it and do
not parse the SQL file again. Delete the `.index` file to make the next run
parse the SQL file. If the index cannot be saved, the command reports the
error and still prints its results.

Given this `dump.sql`:

```
-- dump
-- users
CREATE TABLE users (
  id INT NOT NULL AUTO_INCREMENT PRIMARY KEY,
  username VARCHAR(50) NOT NULL
);
INSERT INTO users VALUES (1,'alice');
```

the command prints:

```
Indexed Objects:
Line       Type       Name
--------------------------------------------------
3          TABLE      users
   Columns:
     id                   INT             PK NOT NULL AUTO_INCREMENT
     username             VARCHAR(50)     NOT NULL


--- Sample First Row for users (Offset: 117) ---
1,'alice'
------------------------------------------
```

The exit status is 0 on success. It is 1 if the SQL file cannot be opened
or the index file cannot be read.

## Library use

```python
from sqlindexer.parser import parse_sql, parse_sql_file
from sqlindexer.indexfile import read_index, write_index, print_results, format_results
from sqlindexer.sample import get_first_row_sample

index = parse_sql_file("dump.sql")          # or parse_sql(b"...") / parse_sql("...")
write_index(index, "dump.sql.index")

for entry in index:
    print(entry.line_number, entry.type, entry.name)
    if entry.table_info is not None:
        for column in entry.table_info.columns:
            print("  ", column.name, column.type, column.is_not_null)

print_results(read_index("dump.sql.index"))   # or format_results(...) for a string

first = next(iter(index), None)
if first is not None and first.table_info is not None:
    print(get_first_row_sample("dump.sql", first.table_info.end_offset, first.name))
```

- `sqlindexer.models` holds the data classes `SqlIndex`, `IndexEntry`,
  `TableInfo` and `ColumnInfo`. `SqlIndex.add_table`, `SqlIndex.add_entry` and
  `TableInfo.add_column` build an index by hand.
- `sqlindexer.columns.parse_table_columns(table_info, body)` parses the text
  after a table's opening parenthesis into columns. It records the name,
  the type, `PRIMARY KEY`, `NOT NULL`, `AUTO_INCREMENT` and `DEFAULT`.
- `read_index` and `write_index` raise `sqlindexer.indexfile.IndexFileError`
  when the file cannot be read or written. `read_index` logs malformed lines
  as warnings and skips them.
- `get_first_row_sample` returns the row data, cut to 300 bytes. It returns
  `"BLOB"` when the row starts with `_binary `. It returns `None` when no
  complete row is found or the offset is negative. It raises `OSError` if
  the file cannot be opened.

## Index file format

The index file is plain text with one line per entry:

```
TABLE,<name>,<line>,<end offset>
COLUMN,<table>,<column>,<type>,<pk>,<not null>,<auto increment>,<default>
```

Each table line is followed by one `COLUMN` line per column. The flags are
`0` or `1`, and the default is empty when the column has none. Any other
object is written as `TYPE,NAME,LINE`.

## Limitations

- Only `CREATE TABLE` statements are indexed. Views, indexes, functions and
  procedures are not detected.
- The scanner ignores comments and string literals. A `CREATE TABLE` inside
  either one is still indexed.
- The file is read in 4096-byte chunks. A statement split across two chunks
  is only partly seen. The same holds for an `INSERT` row in
  `get_first_row_sample`.
- Column parsing splits definitions on top-level commas, so table
  constraints such as `PRIMARY KEY (id)` may be listed as columns.
- There is no interactive browser for tables and columns. Output is the
  plain listing shown above.