"""Column and schema descriptions of tables and index keys."""

from __future__ import annotations

import copy
import re
from typing import Iterable, Sequence

from tubdb.string_util import lower, split_on_char
from tubdb.types import TypeId, UnknownTypeError, type_id_to_string, type_size

# Bytes a varchar column occupies inside the fixed-length part of a tuple.
VARCHAR_INLINE_SIZE = 12
DEFAULT_VARCHAR_LENGTH = 32

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_TYPE_NAMES = {
    "bool": TypeId.BOOLEAN,
    "boolean": TypeId.BOOLEAN,
    "tinyint": TypeId.TINYINT,
    "smallint": TypeId.SMALLINT,
    "int": TypeId.INTEGER,
    "integer": TypeId.INTEGER,
    "bigint": TypeId.BIGINT,
    "double": TypeId.DECIMAL,
    "float": TypeId.DECIMAL,
    "varchar": TypeId.VARCHAR,
    "char": TypeId.VARCHAR,
}


def _inline_size(type_id: TypeId) -> int:
    if type_id is TypeId.VARCHAR:
        return VARCHAR_INLINE_SIZE
    return type_size(type_id)


class Column:
    """One column of a schema: name, type, sizes and offset within a tuple."""

    def __init__(
        self,
        name: str,
        type_id: TypeId,
        length: int | None = None,
        expr=None,
    ) -> None:
        type_id = TypeId(type_id)
        if type_id is TypeId.VARCHAR and length is None:
            raise ValueError("A VARCHAR column needs a length.")
        if type_id is not TypeId.VARCHAR and length is not None:
            raise ValueError("Only VARCHAR columns take a length.")
        self.name = name
        self.type_id = type_id
        self.fixed_length = _inline_size(type_id)
        self.variable_length = 0 if length is None else length
        self.offset = 0
        self.expr = expr

    @property
    def is_inlined(self) -> bool:
        """True unless the column holds variable-length data."""
        return self.type_id is not TypeId.VARCHAR

    @property
    def length(self) -> int:
        """The fixed length for inlined columns, the variable length otherwise."""
        return self.fixed_length if self.is_inlined else self.variable_length

    def _placed_at(self, offset: int) -> Column:
        placed = copy.copy(self)
        placed.offset = offset
        return placed

    def __str__(self) -> str:
        if self.is_inlined:
            size = f"FixedLength:{self.fixed_length}"
        else:
            size = f"VarLength:{self.variable_length}"
        return (
            f"Column[{self.name}, {type_id_to_string(self.type_id)}, "
            f"Offset:{self.offset}, {size}]"
        )

    def __repr__(self) -> str:
        return (
            f"Column({self.name!r}, {self.type_id.name}, "
            f"offset={self.offset}, length={self.length})"
        )


class Schema:
    """An ordered set of columns laid out one after another in a tuple."""

    def __init__(self, columns: Iterable[Column]) -> None:
        placed: list[Column] = []
        uninlined: list[int] = []
        offset = 0
        for index, column in enumerate(columns):
            if not column.is_inlined:
                uninlined.append(index)
            placed.append(column._placed_at(offset))
            offset += column.fixed_length
        self.columns: tuple[Column, ...] = tuple(placed)
        self.uninlined_columns: tuple[int, ...] = tuple(uninlined)
        self.is_inlined = not uninlined
        self.length = offset

    def project(self, attrs: Sequence[int]) -> Schema:
        """A new schema made of the columns at the given indices."""
        return Schema(self.columns[i] for i in attrs)

    def column_index(self, name: str) -> int:
        """Index of the first column called ``name``."""
        for index, column in enumerate(self.columns):
            if column.name == name:
                return index
        raise KeyError(f"Column does not exist: {name}")

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    def __getitem__(self, index: int) -> Column:
        return self.columns[index]

    def __str__(self) -> str:
        header = (
            f"Schema[NumColumns:{len(self)}, IsInlined:{int(self.is_inlined)}, "
            f"Length:{self.length}]"
        )
        body = ", ".join(str(column) for column in self.columns)
        return f"{header} :: ({body})"

    def __repr__(self) -> str:
        return f"Schema({list(self.columns)!r})"


def parse_create_statement(sql: str) -> Schema:
    """Build a schema from text such as ``"a bigint,b varchar(16)"``."""
    columns: list[Column] = []
    for token in split_on_char(lower(sql), ","):
        space = token.find(" ")
        if space == -1:
            name, type_text = token, token
        else:
            name, type_text = token[:space], token[space + 1 :]
        length = 0
        paren = type_text.find("(")
        if paren != -1:
            match = _LEADING_INT.match(type_text, paren + 1)
            if match is None:
                raise ValueError(f"Invalid column length in: {token!r}")
            length = int(match.group(1))
            type_text = type_text[:paren]
        type_id = _TYPE_NAMES.get(type_text)
        if type_id is None:
            raise UnknownTypeError("unknown type for create table")
        if type_id is TypeId.VARCHAR:
            columns.append(Column(name, type_id, length or DEFAULT_VARCHAR_LENGTH))
        else:
            columns.append(Column(name, type_id))
    return Schema(columns)