"""Constructors for typed values and conversions between SQL types."""

from __future__ import annotations

import math
import re
from typing import Callable

from tubdb.types import (
    DECIMAL_MAX,
    DECIMAL_MIN,
    INT8_MAX,
    INT8_MIN,
    INT16_MAX,
    INT16_MIN,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    CmpBool,
    DatabaseError,
    OutOfRangeError,
    TypeId,
    UnknownTypeError,
    Value,
    is_coercable,
)

_OUT_OF_RANGE = "Numeric value out of range."
_TIMESTAMP_FORMAT_ERROR = "Timestamp format error."
_TIMESTAMP_RANGE_ERROR = "Timestamp value out of range."

_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")
_DECIMAL_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_INTEGER_TYPES = (TypeId.TINYINT, TypeId.SMALLINT, TypeId.INTEGER, TypeId.BIGINT)
_INTEGER_BOUNDS = {
    TypeId.TINYINT: (INT8_MIN, INT8_MAX),
    TypeId.SMALLINT: (INT16_MIN, INT16_MAX),
    TypeId.INTEGER: (INT32_MIN, INT32_MAX),
    TypeId.BIGINT: (INT64_MIN, INT64_MAX),
}

# Positions in "YYYY-MM-DD HH:MM:SS.ffffff+TZ" that must hold a digit.
_TIMESTAMP_DIGITS = (
    0, 1, 2, 3, 5, 6, 8, 9, 11, 12, 14, 15, 17, 18,
    20, 21, 22, 23, 24, 25, 27, 28,
)
_MAX_DAY = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_MAX_DAY_LEAP = (0, 31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


# Constructors


def tinyint_value(value: int) -> Value:
    """A TINYINT value."""
    return Value(TypeId.TINYINT, value)


def smallint_value(value: int) -> Value:
    """A SMALLINT value."""
    return Value(TypeId.SMALLINT, value)


def integer_value(value: int) -> Value:
    """An INTEGER value."""
    return Value(TypeId.INTEGER, value)


def bigint_value(value: int) -> Value:
    """A BIGINT value."""
    return Value(TypeId.BIGINT, value)


def timestamp_value(value: int) -> Value:
    """A TIMESTAMP value from its packed integer form."""
    return Value(TypeId.TIMESTAMP, value)


def decimal_value(value: float) -> Value:
    """A DECIMAL value."""
    return Value(TypeId.DECIMAL, float(value))


def boolean_value(value: bool | int | CmpBool) -> Value:
    """A BOOLEAN value; CmpBool.NULL gives the NULL boolean."""
    return Value(TypeId.BOOLEAN, value)


def varchar_value(value: str | None) -> Value:
    """A VARCHAR value; None gives the NULL varchar."""
    return Value(TypeId.VARCHAR, value)


def null_value(type_id: TypeId) -> Value:
    """The NULL value of ``type_id``."""
    type_id = TypeId(type_id)
    if type_id in (
        TypeId.BOOLEAN,
        TypeId.TINYINT,
        TypeId.SMALLINT,
        TypeId.INTEGER,
        TypeId.BIGINT,
        TypeId.DECIMAL,
        TypeId.VARCHAR,
    ):
        return Value.null(type_id)
    raise UnknownTypeError("Attempting to create invalid null type")


def zero_value(type_id: TypeId) -> Value:
    """The zero (or false, or "0") value of ``type_id``."""
    type_id = TypeId(type_id)
    if type_id is TypeId.BOOLEAN:
        return boolean_value(False)
    if type_id in _INTEGER_TYPES:
        return Value(type_id, 0)
    if type_id is TypeId.DECIMAL:
        return decimal_value(0.0)
    if type_id is TypeId.VARCHAR:
        return varchar_value("0")
    raise UnknownTypeError("Unknown type for GetZeroValueType")


# Conversions


def _require_coercable(value: Value, target: TypeId) -> None:
    if not is_coercable(target, value.type_id):
        raise DatabaseError(f"{value} is not coercable to {target.name}.")


def _not_coercable(value: Value, target: TypeId) -> DatabaseError:
    return DatabaseError(f"{value} is not coercable to {target.name}.")


def _parse_integer(text: str, target: TypeId) -> int:
    match = _INTEGER_PREFIX.match(text)
    if match is None:
        raise DatabaseError(f"Invalid input syntax for {target.name.lower()}: '{text}'")
    return int(match.group(1))


def _cast_integer(value: Value, target: TypeId) -> Value:
    _require_coercable(value, target)
    if value.is_null():
        return Value.null(target)
    low, high = _INTEGER_BOUNDS[target]
    source = value.type_id
    if source in _INTEGER_TYPES:
        number = value.payload
    elif source is TypeId.DECIMAL:
        real = value.payload
        if math.isnan(real) or real > high or real < low:
            raise OutOfRangeError(_OUT_OF_RANGE)
        number = int(real)
    elif source is TypeId.VARCHAR:
        number = _parse_integer(value.payload, target)
    else:
        raise _not_coercable(value, target)
    if not low <= number <= high:
        raise OutOfRangeError(_OUT_OF_RANGE)
    return Value(target, number)


def cast_as_bigint(value: Value) -> Value:
    """Convert ``value`` to BIGINT."""
    return _cast_integer(value, TypeId.BIGINT)


def cast_as_integer(value: Value) -> Value:
    """Convert ``value`` to INTEGER."""
    return _cast_integer(value, TypeId.INTEGER)


def cast_as_smallint(value: Value) -> Value:
    """Convert ``value`` to SMALLINT."""
    return _cast_integer(value, TypeId.SMALLINT)


def cast_as_tinyint(value: Value) -> Value:
    """Convert ``value`` to TINYINT."""
    return _cast_integer(value, TypeId.TINYINT)


def _parse_decimal(text: str) -> float:
    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        raise DatabaseError(f"Invalid input syntax for decimal: '{text}'")
    token = match.group(1)
    number = float(token)
    if math.isinf(number) and "inf" not in token.lower():
        raise OutOfRangeError(_OUT_OF_RANGE)
    return number


def cast_as_decimal(value: Value) -> Value:
    """Convert ``value`` to DECIMAL."""
    _require_coercable(value, TypeId.DECIMAL)
    if value.is_null():
        return Value.null(TypeId.DECIMAL)
    source = value.type_id
    if source in _INTEGER_TYPES or source is TypeId.DECIMAL:
        return decimal_value(float(value.payload))
    if source is TypeId.VARCHAR:
        number = _parse_decimal(value.payload)
        if number > DECIMAL_MAX or number < DECIMAL_MIN:
            raise OutOfRangeError(_OUT_OF_RANGE)
        return decimal_value(number)
    raise _not_coercable(value, TypeId.DECIMAL)


def cast_as_varchar(value: Value) -> Value:
    """Convert ``value`` to its VARCHAR text."""
    _require_coercable(value, TypeId.VARCHAR)
    if value.is_null():
        return Value.null(TypeId.VARCHAR)
    if value.type_id in (
        TypeId.BOOLEAN,
        TypeId.TINYINT,
        TypeId.SMALLINT,
        TypeId.INTEGER,
        TypeId.BIGINT,
        TypeId.DECIMAL,
        TypeId.VARCHAR,
    ):
        return varchar_value(str(value))
    raise _not_coercable(value, TypeId.VARCHAR)


def _parse_timestamp(text: str) -> int:
    if len(text) == 22:
        text = text[:19] + ".000000" + text[19:22]
    if len(text) != 29:
        raise DatabaseError(_TIMESTAMP_FORMAT_ERROR)
    if (
        text[10] != " "
        or text[4] != "-"
        or text[7] != "-"
        or text[13] != ":"
        or text[16] != ":"
        or text[19] != "."
        or text[26] not in ("+", "-")
    ):
        raise DatabaseError(_TIMESTAMP_FORMAT_ERROR)
    if any(not "0" <= text[i] <= "9" for i in _TIMESTAMP_DIGITS):
        raise DatabaseError(_TIMESTAMP_FORMAT_ERROR)

    year = int(text[0:4])
    month = int(text[5:7])
    day = int(text[8:10])
    hour = int(text[11:13])
    minute = int(text[14:16])
    second = int(text[17:19])
    micro = int(text[20:26])
    tz = int(text[26:29])

    if (
        year > 9999
        or month > 12
        or day > 31
        or hour > 23
        or minute > 59
        or second > 59
        or micro > 999999
        or day == 0
        or month == 0
    ):
        raise OutOfRangeError(_TIMESTAMP_RANGE_ERROR)
    leap = (year % 4 == 0 and year % 100 != 0) or year % 400 == 0
    max_day = _MAX_DAY_LEAP if leap else _MAX_DAY
    if day > max_day[month]:
        raise OutOfRangeError(_TIMESTAMP_RANGE_ERROR)
    if tz > 26 or tz < -12:
        raise DatabaseError(_TIMESTAMP_FORMAT_ERROR)

    packed = month
    packed = packed * 32 + day
    packed = packed * 27 + (tz + 12)
    packed = packed * 10000 + year
    packed = packed * 100000 + hour * 3600 + minute * 60 + second
    packed = packed * 1000000 + micro
    return packed


def cast_as_timestamp(value: Value) -> Value:
    """Convert ``value`` to TIMESTAMP, parsing "YYYY-MM-DD HH:MM:SS[.ffffff]+TZ" text."""
    _require_coercable(value, TypeId.TIMESTAMP)
    if value.is_null():
        return Value.null(TypeId.TIMESTAMP)
    if value.type_id is TypeId.TIMESTAMP:
        return timestamp_value(value.payload)
    if value.type_id is TypeId.VARCHAR:
        return timestamp_value(_parse_timestamp(value.payload))
    raise _not_coercable(value, TypeId.TIMESTAMP)


def cast_as_boolean(value: Value) -> Value:
    """Convert ``value`` to BOOLEAN; text may be true/t/1 or false/f/0."""
    _require_coercable(value, TypeId.BOOLEAN)
    if value.is_null():
        return Value.null(TypeId.BOOLEAN)
    if value.type_id is TypeId.BOOLEAN:
        return boolean_value(value.payload)
    if value.type_id is TypeId.VARCHAR:
        word = value.payload.lower()
        if word in ("true", "1", "t"):
            return boolean_value(True)
        if word in ("false", "0", "f"):
            return boolean_value(False)
        raise DatabaseError("Boolean value format error.")
    raise _not_coercable(value, TypeId.BOOLEAN)


_CASTS: dict[TypeId, Callable[[Value], Value]] = {
    TypeId.BOOLEAN: cast_as_boolean,
    TypeId.TINYINT: cast_as_tinyint,
    TypeId.SMALLINT: cast_as_smallint,
    TypeId.INTEGER: cast_as_integer,
    TypeId.BIGINT: cast_as_bigint,
    TypeId.DECIMAL: cast_as_decimal,
    TypeId.VARCHAR: cast_as_varchar,
    TypeId.TIMESTAMP: cast_as_timestamp,
}


def cast(value: Value, type_id: TypeId) -> Value:
    """Convert ``value`` to ``type_id``."""
    type_id = TypeId(type_id)
    try:
        converter = _CASTS[type_id]
    except KeyError:
        raise UnknownTypeError(f"Cannot cast to {type_id.name}") from None
    return converter(value)