# tubdb

Building blocks of a small relational database engine, in plain Python with
no dependencies outside the standard library.

## What it provides

- `tubdb.types`: SQL type identifiers (`TypeId`), three-valued comparison
  results (`CmpBool`) and `Value`, an immutable typed value that may be NULL.
  `Value` compares (`compare_equals`, `compare_less_than`, ...), does
  range-checked integer and decimal arithmetic (`add`, `subtract`,
  `multiply`, `divide`, `modulo`, `min`, `max`, `sqrt`) and prints itself
  with `str()`. Module functions `type_size`, `type_id_to_string`,
  `is_coercable`, `min_value` and `max_value` describe each type. Errors are
  raised as `DatabaseError` and its subclasses `OutOfRangeError`,
  `DivisionByZeroError` (also a `ZeroDivisionError`) and `UnknownTypeError`.
- `tubdb.value_factory`: constructors for each type (`integer_value`,
  `varchar_value`, `timestamp_value`, ...), `null_value`, `zero_value`, and
  conversions between types (`cast_as_integer`, `cast_as_timestamp`, ...,
  or `cast(value, type_id)`). Timestamps are read from text of the form
  `YYYY-MM-DD HH:MM:SS[.ffffff]+TZ`.
- `tubdb.catalog`: `Column` and `Schema`, which lays columns out one after
  another and records each column's offset, and `parse_create_statement`,
  which turns text such as `"a bigint,b varchar(16)"` into a schema.
- `tubdb.lru_replacer.LRUReplacer`: tracks unpinned frames and hands back
  the least recently unpinned one as the victim. It is safe to share
  between threads.
- `tubdb.string_util`: small string helpers (`split`, `join`,
  `prefix_lines`, `format_size`, `bold`, ...).

## Installing

```
pip install .
```

## Examples

Values and casts:

```python
from tubdb.types import CmpBool, TypeId
from tubdb.value_factory import cast, integer_value, varchar_value

print(integer_value(40).add(integer_value(2)))       # 42
print(varchar_value("32").compare_equals(integer_value(32)) is CmpBool.TRUE)
print(cast(varchar_value("17"), TypeId.SMALLINT))    # 17
```

Arithmetic that leaves the range of its type raises `OutOfRangeError`;
dividing by zero raises `DivisionByZeroError`.

Schemas:

```python
from tubdb.catalog import parse_create_statement

schema = parse_create_statement("id integer,name varchar(20)")
print(len(schema), schema.column_index("name"))      # 2 1
print(schema.length)                                 # 16
print(schema)
```

Columns in the statement are separated by a bare comma; a `varchar` without
a length gets 32.

Choosing a frame to evict:

```python
from tubdb.lru_replacer import LRUReplacer

replacer = LRUReplacer(3)
for frame in (0, 1, 2):
    replacer.unpin(frame)
replacer.pin(0)
print(replacer.victim(), len(replacer))              # 1 1
```

`victim()` returns `None` when no frame is unpinned.

## What it does not do

There is no storage layer here: nothing reads or writes pages in a file,
there is no buffer pool that holds pages in memory (the `LRUReplacer` only
decides which frame to give up), and there is no write-ahead log. Tables,
tuples, indexes, transactions and query execution are not part of the
package either.

## Running the tests

```
pip install ".[test]"
pytest
```