import pytest

from tubdb.types import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    CmpBool,
    DatabaseError,
    OutOfRangeError,
    TypeId,
    UnknownTypeError,
)
from tubdb.value_factory import (
    bigint_value,
    boolean_value,
    cast,
    cast_as_bigint,
    cast_as_boolean,
    cast_as_decimal,
    cast_as_integer,
    cast_as_smallint,
    cast_as_timestamp,
    cast_as_tinyint,
    cast_as_varchar,
    decimal_value,
    integer_value,
    null_value,
    smallint_value,
    timestamp_value,
    tinyint_value,
    varchar_value,
    zero_value,
)


def test_constructors_set_type_and_payload():
    assert tinyint_value(5).type_id is TypeId.TINYINT
    assert tinyint_value(5).payload == 5
    assert smallint_value(-300).payload == -300
    assert integer_value(INT32_MAX).payload == INT32_MAX
    assert bigint_value(INT64_MAX).type_id is TypeId.BIGINT
    assert decimal_value(2).payload == 2.0
    assert timestamp_value(0).type_id is TypeId.TIMESTAMP


def test_boolean_value_from_cmpbool():
    assert boolean_value(CmpBool.NULL).is_null()
    assert boolean_value(CmpBool.TRUE).payload is True
    assert boolean_value(CmpBool.FALSE).payload is False


def test_varchar_value_none_is_null():
    assert varchar_value(None).is_null()
    assert varchar_value("abc").payload == "abc"


@pytest.mark.parametrize(
    "type_id",
    [
        TypeId.BOOLEAN,
        TypeId.TINYINT,
        TypeId.SMALLINT,
        TypeId.INTEGER,
        TypeId.BIGINT,
        TypeId.DECIMAL,
        TypeId.VARCHAR,
    ],
)
def test_null_value(type_id):
    value = null_value(type_id)
    assert value.is_null()
    assert value.type_id is type_id


@pytest.mark.parametrize("type_id", [TypeId.TIMESTAMP, TypeId.INVALID])
def test_null_value_unsupported(type_id):
    with pytest.raises(UnknownTypeError):
        null_value(type_id)


@pytest.mark.parametrize(
    "type_id", [TypeId.TINYINT, TypeId.SMALLINT, TypeId.INTEGER, TypeId.BIGINT, TypeId.DECIMAL]
)
def test_zero_value_numeric(type_id):
    value = zero_value(type_id)
    assert value.is_zero()
    assert value.type_id is type_id


def test_zero_value_boolean_and_varchar():
    assert zero_value(TypeId.BOOLEAN).payload is False
    assert str(zero_value(TypeId.VARCHAR)) == "0"


def test_zero_value_unsupported():
    with pytest.raises(UnknownTypeError):
        zero_value(TypeId.TIMESTAMP)


def test_widening_casts():
    assert cast_as_bigint(integer_value(42)) == bigint_value(42)
    assert cast_as_integer(tinyint_value(-7)) == integer_value(-7)
    assert cast_as_decimal(integer_value(7)) == decimal_value(7.0)


def test_narrowing_out_of_range():
    with pytest.raises(OutOfRangeError):
        cast_as_integer(bigint_value(INT32_MAX + 1))
    with pytest.raises(OutOfRangeError):
        cast_as_integer(bigint_value(INT32_MIN - 1))
    with pytest.raises(OutOfRangeError):
        cast_as_tinyint(integer_value(128))
    with pytest.raises(OutOfRangeError):
        cast_as_bigint(decimal_value(2.0**63))


def test_narrowing_in_range_keeps_value():
    assert cast_as_smallint(bigint_value(1234)) == smallint_value(1234)
    assert cast_as_integer(bigint_value(INT32_MIN)) == integer_value(INT32_MIN)


def test_decimal_to_integer_truncates_toward_zero():
    assert cast_as_tinyint(decimal_value(3.9)) == tinyint_value(3)
    assert cast_as_tinyint(decimal_value(-3.9)) == tinyint_value(-3)


def test_varchar_to_integer():
    assert cast_as_integer(varchar_value("123")) == integer_value(123)
    assert cast_as_integer(varchar_value(" 77abc")) == integer_value(77)


def test_varchar_to_integer_invalid_syntax():
    with pytest.raises(DatabaseError, match="Invalid input syntax for integer: 'abc'"):
        cast_as_integer(varchar_value("abc"))


def test_varchar_to_smallint_out_of_range():
    with pytest.raises(OutOfRangeError):
        cast_as_smallint(varchar_value("40000"))
    with pytest.raises(OutOfRangeError):
        cast_as_bigint(varchar_value("99999999999999999999"))


def test_varchar_to_decimal():
    assert cast_as_decimal(varchar_value("2.5")) == decimal_value(2.5)
    with pytest.raises(OutOfRangeError):
        cast_as_decimal(varchar_value("1e400"))
    with pytest.raises(DatabaseError, match="Invalid input syntax for decimal"):
        cast_as_decimal(varchar_value("x1"))


def test_null_casts_keep_null_with_target_type():
    value = cast_as_integer(null_value(TypeId.BIGINT))
    assert value.is_null()
    assert value.type_id is TypeId.INTEGER
    assert cast_as_varchar(null_value(TypeId.DECIMAL)).is_null()


def test_not_coercable():
    with pytest.raises(DatabaseError, match="is not coercable to INTEGER."):
        cast_as_integer(boolean_value(True))
    with pytest.raises(DatabaseError, match="is not coercable to VARCHAR."):
        cast_as_varchar(timestamp_value(0))
    with pytest.raises(DatabaseError, match="is not coercable to TIMESTAMP."):
        cast_as_timestamp(integer_value(1))


def test_varchar_of_values():
    assert cast_as_varchar(integer_value(12)).payload == "12"
    assert cast_as_varchar(boolean_value(True)).payload == "true"


@pytest.mark.parametrize("number", [0, 1, -1, INT32_MAX, INT32_MIN, 4096])
def test_integer_varchar_round_trip(number):
    assert cast_as_integer(cast_as_varchar(integer_value(number))) == integer_value(number)


def test_decimal_varchar_round_trip():
    original = decimal_value(2.5)
    assert cast_as_decimal(cast_as_varchar(original)) == original


@pytest.mark.parametrize(
    "text", ["2020-01-15 10:20:30.123456+05", "1999-12-31 23:59:59.999999-08", "2020-02-29 00:00:00.000000+00"]
)
def test_timestamp_round_trip(text):
    assert str(cast_as_timestamp(varchar_value(text))) == text


def test_timestamp_short_form():
    value = cast_as_timestamp(varchar_value("2020-01-15 10:20:30+05"))
    assert str(value) == "2020-01-15 10:20:30.000000+05"


def test_timestamp_identity():
    value = cast_as_timestamp(varchar_value("2020-01-15 10:20:30+05"))
    assert cast_as_timestamp(value) == value


@pytest.mark.parametrize(
    "text",
    ["2021-02-29 00:00:00+00", "2020-13-01 00:00:00+00", "2020-00-01 00:00:00+00", "2020-01-01 24:00:00+00"],
)
def test_timestamp_out_of_range(text):
    with pytest.raises(OutOfRangeError, match="Timestamp value out of range."):
        cast_as_timestamp(varchar_value(text))


@pytest.mark.parametrize(
    "text",
    ["bad", "2020/01/01 00:00:00+00", "2020-01-01 00:00:00*00", "2020-01-01 0a:00:00+00", "2020-01-01 00:00:00+30"],
)
def test_timestamp_format_error(text):
    with pytest.raises(DatabaseError, match="Timestamp format error."):
        cast_as_timestamp(varchar_value(text))


def test_cast_as_boolean():
    assert cast_as_boolean(varchar_value("T")).payload is True
    assert cast_as_boolean(varchar_value("1")).payload is True
    assert cast_as_boolean(varchar_value("false")).payload is False
    assert cast_as_boolean(boolean_value(False)) == boolean_value(False)
    with pytest.raises(DatabaseError, match="Boolean value format error."):
        cast_as_boolean(varchar_value("yes"))


@pytest.mark.parametrize(
    "value, type_id, converter",
    [
        (integer_value(5), TypeId.BIGINT, cast_as_bigint),
        (bigint_value(5), TypeId.SMALLINT, cast_as_smallint),
        (varchar_value("9"), TypeId.TINYINT, cast_as_tinyint),
        (integer_value(5), TypeId.DECIMAL, cast_as_decimal),
        (integer_value(5), TypeId.VARCHAR, cast_as_varchar),
        (varchar_value("t"), TypeId.BOOLEAN, cast_as_boolean),
    ],
)
def test_cast_dispatch(value, type_id, converter):
    result = cast(value, type_id)
    assert result == converter(value)
    assert result.type_id is type_id


def test_cast_to_invalid():
    with pytest.raises(UnknownTypeError):
        cast(integer_value(1), TypeId.INVALID)