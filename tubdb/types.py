"""SQL value types: type ids, typed values, comparison and arithmetic."""

from __future__ import annotations

import enum
import math
import operator
import re
import sys
from typing import Callable


class TypeId(enum.IntEnum):
    """Identifiers of the SQL types the engine knows."""

    INVALID = 0
    BOOLEAN = 1
    TINYINT = 2
    SMALLINT = 3
    INTEGER = 4
    BIGINT = 5
    DECIMAL = 6
    VARCHAR = 7
    TIMESTAMP = 8


class CmpBool(enum.IntEnum):
    """Three-valued result of a SQL comparison."""

    FALSE = 0
    TRUE = 1
    NULL = 2


class DatabaseError(Exception):
    """Base class for errors raised by value operations."""


class OutOfRangeError(DatabaseError):
    """A numeric value does not fit the type it must be stored in."""


class DivisionByZeroError(DatabaseError, ZeroDivisionError):
    """Division or modulo by zero."""


class UnknownTypeError(DatabaseError):
    """An operation was asked of a type that does not support it."""


INT8_NULL = -(2**7)
INT8_MIN = INT8_NULL + 1
INT8_MAX = 2**7 - 1
INT16_NULL = -(2**15)
INT16_MIN = INT16_NULL + 1
INT16_MAX = 2**15 - 1
INT32_NULL = -(2**31)
INT32_MIN = INT32_NULL + 1
INT32_MAX = 2**31 - 1
INT64_NULL = -(2**63)
INT64_MIN = INT64_NULL + 1
INT64_MAX = 2**63 - 1
BOOLEAN_NULL = INT8_NULL
DECIMAL_NULL = -sys.float_info.max
DECIMAL_MIN = math.nextafter(DECIMAL_NULL, 0.0)
DECIMAL_MAX = sys.float_info.max
TIMESTAMP_NULL = 2**64 - 1
TIMESTAMP_MIN = 0
TIMESTAMP_MAX = TIMESTAMP_NULL - 1

_INTEGER_LIMITS: dict[TypeId, tuple[int, int, int]] = {
    TypeId.TINYINT: (INT8_NULL, INT8_MIN, INT8_MAX),
    TypeId.SMALLINT: (INT16_NULL, INT16_MIN, INT16_MAX),
    TypeId.INTEGER: (INT32_NULL, INT32_MIN, INT32_MAX),
    TypeId.BIGINT: (INT64_NULL, INT64_MIN, INT64_MAX),
}
_NUMERIC = frozenset(_INTEGER_LIMITS) | {TypeId.DECIMAL}

_TYPE_SIZES = {
    TypeId.BOOLEAN: 1,
    TypeId.TINYINT: 1,
    TypeId.SMALLINT: 2,
    TypeId.INTEGER: 4,
    TypeId.BIGINT: 8,
    TypeId.DECIMAL: 8,
    TypeId.TIMESTAMP: 8,
    TypeId.VARCHAR: 0,
}

_NULL_NAMES = {
    TypeId.INVALID: "invalid_null",
    TypeId.BOOLEAN: "boolean_null",
    TypeId.TINYINT: "tinyint_null",
    TypeId.SMALLINT: "smallint_null",
    TypeId.INTEGER: "integer_null",
    TypeId.BIGINT: "bigint_null",
    TypeId.DECIMAL: "decimal_null",
    TypeId.VARCHAR: "varlen_null",
    TypeId.TIMESTAMP: "timestamp_null",
}

_OUT_OF_RANGE = "Numeric value out of range."
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")


def type_size(type_id: TypeId) -> int:
    """Size in bytes of a value of ``type_id`` stored inline."""
    try:
        return _TYPE_SIZES[TypeId(type_id)]
    except KeyError:
        raise UnknownTypeError(f"Unknown type: {type_id_to_string(type_id)}") from None


def type_id_to_string(type_id: TypeId) -> str:
    """Upper-case name of a type id."""
    return TypeId(type_id).name


def is_coercable(to_type: TypeId, from_type: TypeId) -> bool:
    """True if a value of ``from_type`` may be converted to ``to_type``."""
    to_type, from_type = TypeId(to_type), TypeId(from_type)
    if to_type is TypeId.INVALID:
        return False
    if to_type is TypeId.BOOLEAN:
        return from_type in (TypeId.BOOLEAN, TypeId.VARCHAR)
    if to_type in _NUMERIC:
        return from_type in _NUMERIC or from_type is TypeId.VARCHAR
    if to_type is TypeId.TIMESTAMP:
        return from_type in (TypeId.TIMESTAMP, TypeId.VARCHAR)
    if to_type is TypeId.VARCHAR:
        return from_type is not TypeId.INVALID
    return to_type is from_type


def min_value(type_id: TypeId) -> Value:
    """Smallest non-null value of ``type_id``."""
    type_id = TypeId(type_id)
    if type_id is TypeId.BOOLEAN:
        return Value(type_id, False)
    if type_id in _INTEGER_LIMITS:
        return Value(type_id, _INTEGER_LIMITS[type_id][1])
    if type_id is TypeId.DECIMAL:
        return Value(type_id, DECIMAL_MIN)
    if type_id is TypeId.TIMESTAMP:
        return Value(type_id, TIMESTAMP_MIN)
    raise UnknownTypeError(f"Cannot get minimal value of type {type_id.name}")


def max_value(type_id: TypeId) -> Value:
    """Largest non-null value of ``type_id``."""
    type_id = TypeId(type_id)
    if type_id is TypeId.BOOLEAN:
        return Value(type_id, True)
    if type_id in _INTEGER_LIMITS:
        return Value(type_id, _INTEGER_LIMITS[type_id][2])
    if type_id is TypeId.DECIMAL:
        return Value(type_id, DECIMAL_MAX)
    if type_id is TypeId.TIMESTAMP:
        return Value(type_id, TIMESTAMP_MAX)
    raise UnknownTypeError(f"Cannot get maximal value of type {type_id.name}")


def _normalise(type_id: TypeId, payload):
    """Validate ``payload`` for ``type_id``; None stands for SQL NULL."""
    if payload is None:
        return None
    if type_id is TypeId.INVALID:
        raise UnknownTypeError("An INVALID value cannot hold data")
    if type_id is TypeId.BOOLEAN:
        if isinstance(payload, CmpBool):
            return None if payload is CmpBool.NULL else int(payload)
        if not isinstance(payload, int):
            raise TypeError(f"boolean payload must be bool or int, not {type(payload).__name__}")
        flag = int(payload)
        if flag == BOOLEAN_NULL:
            return None
        if flag not in (0, 1):
            raise OutOfRangeError(f"Boolean value out of range: {flag}")
        return flag
    if type_id in _INTEGER_LIMITS:
        if not isinstance(payload, int):
            raise TypeError(f"{type_id.name} payload must be int, not {type(payload).__name__}")
        null, low, high = _INTEGER_LIMITS[type_id]
        number = int(payload)
        if number == null:
            return None
        if not low <= number <= high:
            raise OutOfRangeError(_OUT_OF_RANGE)
        return number
    if type_id is TypeId.DECIMAL:
        number = float(payload)
        return None if number == DECIMAL_NULL else number
    if type_id is TypeId.TIMESTAMP:
        if not isinstance(payload, int):
            raise TypeError(f"timestamp payload must be int, not {type(payload).__name__}")
        stamp = int(payload)
        if stamp == TIMESTAMP_NULL:
            return None
        if not TIMESTAMP_MIN <= stamp <= TIMESTAMP_MAX:
            raise OutOfRangeError("Timestamp value out of range.")
        return stamp
    if type_id is TypeId.VARCHAR:
        if not isinstance(payload, str):
            raise TypeError(f"varchar payload must be str, not {type(payload).__name__}")
        return payload
    raise UnknownTypeError(f"Unknown type: {type_id!r}")


def _comparable(left: TypeId, right: TypeId) -> bool:
    if left is TypeId.INVALID or right is TypeId.INVALID:
        return False
    if left is TypeId.VARCHAR:
        return right is not TypeId.TIMESTAMP
    if left in _NUMERIC:
        return right in _NUMERIC or right is TypeId.VARCHAR
    if left is TypeId.BOOLEAN:
        return right in (TypeId.BOOLEAN, TypeId.VARCHAR)
    if left is TypeId.TIMESTAMP:
        return right is TypeId.TIMESTAMP
    return False


def _from_varchar(text: str, target: TypeId) -> Value:
    """Read a varchar's text as a value of ``target``."""
    name = target.name.lower()
    if target in _INTEGER_LIMITS:
        match = _INTEGER_PREFIX.match(text)
        if match is None:
            raise DatabaseError(f"Invalid input syntax for {name}: '{text}'")
        number = int(match.group(1))
        _, low, high = _INTEGER_LIMITS[target]
        if not low <= number <= high:
            raise OutOfRangeError(_OUT_OF_RANGE)
        return Value(target, number)
    if target is TypeId.DECIMAL:
        try:
            number = float(text.strip())
        except ValueError:
            raise DatabaseError(f"Invalid input syntax for decimal: '{text}'") from None
        if not DECIMAL_MIN <= number <= DECIMAL_MAX:
            raise OutOfRangeError(_OUT_OF_RANGE)
        return Value(target, number)
    if target is TypeId.BOOLEAN:
        word = text.lower()
        if word in ("true", "1", "t"):
            return Value(target, True)
        if word in ("false", "0", "f"):
            return Value(target, False)
        raise DatabaseError("Boolean value format error.")
    raise UnknownTypeError(f"Cannot read varchar as {target.name}")


def _result_type(left: TypeId, right: TypeId) -> TypeId:
    if TypeId.DECIMAL in (left, right):
        return TypeId.DECIMAL
    return left if _TYPE_SIZES[left] >= _TYPE_SIZES[right] else right


def _truncating_div(x: int, y: int) -> int:
    quotient = abs(x) // abs(y)
    return -quotient if (x < 0) != (y < 0) else quotient


def _int_add(x: int, y: int) -> int:
    return x + y


def _int_sub(x: int, y: int) -> int:
    return x - y


def _int_mul(x: int, y: int) -> int:
    return x * y


def _int_div(x: int, y: int) -> int:
    if y == 0:
        raise DivisionByZeroError("Division by zero.")
    return _truncating_div(x, y)


def _int_mod(x: int, y: int) -> int:
    if y == 0:
        raise DivisionByZeroError("Division by zero.")
    return x - y * _truncating_div(x, y)


def _dec_div(x: float, y: float) -> float:
    if y == 0:
        raise DivisionByZeroError("Division by zero.")
    return x / y


def _dec_mod(x: float, y: float) -> float:
    if y == 0:
        raise DivisionByZeroError("Division by zero.")
    return math.fmod(x, y)


_ARITHMETIC: dict[str, tuple[Callable[[int, int], int], Callable[[float, float], float]]] = {
    "add": (_int_add, operator.add),
    "subtract": (_int_sub, operator.sub),
    "multiply": (_int_mul, operator.mul),
    "divide": (_int_div, _dec_div),
    "modulo": (_int_mod, _dec_mod),
}


def _format_timestamp(stamp: int) -> str:
    micro = stamp % 1_000_000
    stamp //= 1_000_000
    seconds = stamp % 100_000
    stamp //= 100_000
    year = stamp % 10_000
    stamp //= 10_000
    tz = stamp % 27 - 12
    stamp //= 27
    day = stamp % 32
    month = stamp // 32
    hour, rest = divmod(seconds, 3600)
    minute, second = divmod(rest, 60)
    hour %= 24
    sign = "+" if tz >= 0 else "-"
    return (
        f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"
        f".{micro:06d}{sign}{abs(tz):02d}"
    )


class Value:
    """An immutable SQL value of a given type, possibly NULL."""

    __slots__ = ("_type_id", "_raw")

    def __init__(self, type_id: TypeId = TypeId.INVALID, payload=None) -> None:
        type_id = TypeId(type_id)
        self._type_id = type_id
        self._raw = _normalise(type_id, payload)

    @classmethod
    def null(cls, type_id: TypeId) -> Value:
        """The NULL value of ``type_id``."""
        return cls(type_id, None)

    @property
    def type_id(self) -> TypeId:
        return self._type_id

    @property
    def payload(self):
        """The Python value held, or None for NULL."""
        if self._raw is not None and self._type_id is TypeId.BOOLEAN:
            return bool(self._raw)
        return self._raw

    def is_null(self) -> bool:
        return self._raw is None

    def is_zero(self) -> bool:
        """True if this numeric value equals zero."""
        if self._type_id not in _NUMERIC:
            raise UnknownTypeError(f"{self._type_id.name} has no notion of zero")
        return self._raw is not None and self._raw == 0

    # Comparison

    def _compare_operands(self, other: Value):
        if not _comparable(self._type_id, other._type_id):
            raise DatabaseError(
                f"Cannot compare {self._type_id.name} with {other._type_id.name}"
            )
        if self.is_null() or other.is_null():
            return None
        if self._type_id is TypeId.VARCHAR:
            return self._raw, str(other)
        if other._type_id is TypeId.VARCHAR:
            other = _from_varchar(other._raw, self._type_id)
        return self._raw, other._raw

    def _compare(self, other: Value, op: Callable) -> CmpBool:
        operands = self._compare_operands(other)
        if operands is None:
            return CmpBool.NULL
        return CmpBool.TRUE if op(*operands) else CmpBool.FALSE

    def compare_equals(self, other: Value) -> CmpBool:
        return self._compare(other, operator.eq)

    def compare_not_equals(self, other: Value) -> CmpBool:
        return self._compare(other, operator.ne)

    def compare_less_than(self, other: Value) -> CmpBool:
        return self._compare(other, operator.lt)

    def compare_less_than_equals(self, other: Value) -> CmpBool:
        return self._compare(other, operator.le)

    def compare_greater_than(self, other: Value) -> CmpBool:
        return self._compare(other, operator.gt)

    def compare_greater_than_equals(self, other: Value) -> CmpBool:
        return self._compare(other, operator.ge)

    # Arithmetic

    def _numeric_operand(self, other: Value) -> Value:
        if self._type_id not in _NUMERIC:
            raise UnknownTypeError(f"{self._type_id.name} does not support arithmetic")
        if other._type_id is TypeId.VARCHAR:
            if other.is_null():
                return Value.null(self._type_id)
            return _from_varchar(other._raw, self._type_id)
        if other._type_id not in _NUMERIC:
            raise UnknownTypeError(
                f"Cannot combine {self._type_id.name} with {other._type_id.name}"
            )
        return other

    def _arithmetic(self, other: Value, name: str) -> Value:
        other = self._numeric_operand(other)
        result_type = _result_type(self._type_id, other._type_id)
        if self.is_null() or other.is_null():
            return Value.null(result_type)
        int_op, dec_op = _ARITHMETIC[name]
        if result_type is TypeId.DECIMAL:
            return Value(result_type, dec_op(float(self._raw), float(other._raw)))
        result = int_op(self._raw, other._raw)
        _, low, high = _INTEGER_LIMITS[result_type]
        if not low <= result <= high:
            raise OutOfRangeError(_OUT_OF_RANGE)
        return Value(result_type, result)

    def add(self, other: Value) -> Value:
        return self._arithmetic(other, "add")

    def subtract(self, other: Value) -> Value:
        return self._arithmetic(other, "subtract")

    def multiply(self, other: Value) -> Value:
        return self._arithmetic(other, "multiply")

    def divide(self, other: Value) -> Value:
        return self._arithmetic(other, "divide")

    def modulo(self, other: Value) -> Value:
        return self._arithmetic(other, "modulo")

    def _null_of_combination(self, other: Value) -> Value:
        if self._type_id in _NUMERIC and other._type_id in _NUMERIC:
            return Value.null(_result_type(self._type_id, other._type_id))
        return Value.null(self._type_id)

    def min(self, other: Value) -> Value:
        """The smaller of the two values; NULL if either is NULL."""
        if self.is_null() or other.is_null():
            return self._null_of_combination(other)
        return self if self.compare_less_than(other) is CmpBool.TRUE else other

    def max(self, other: Value) -> Value:
        """The larger of the two values; NULL if either is NULL."""
        if self.is_null() or other.is_null():
            return self._null_of_combination(other)
        return self if self.compare_greater_than_equals(other) is CmpBool.TRUE else other

    def sqrt(self) -> Value:
        """Square root as a DECIMAL value."""
        if self._type_id not in _NUMERIC:
            raise UnknownTypeError(f"{self._type_id.name} does not support sqrt")
        if self.is_null():
            return Value.null(TypeId.DECIMAL)
        if self._raw < 0:
            raise OutOfRangeError("Cannot take square root of a negative number.")
        return Value(TypeId.DECIMAL, math.sqrt(self._raw))

    # Presentation and identity

    def __str__(self) -> str:
        if self.is_null():
            return _NULL_NAMES[self._type_id]
        if self._type_id is TypeId.BOOLEAN:
            return "true" if self._raw else "false"
        if self._type_id is TypeId.DECIMAL:
            return f"{self._raw:f}"
        if self._type_id is TypeId.TIMESTAMP:
            return _format_timestamp(self._raw)
        return str(self._raw)

    def __repr__(self) -> str:
        return f"Value({self._type_id.name}, {self.payload!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._type_id is other._type_id and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((self._type_id, self._raw))