import struct

import pytest

from rmdb.defs import (
    ColType,
    CompOp,
    Condition,
    PAGE_SIZE,
    Rid,
    SetClause,
    TabCol,
    Value,
    coltype2str,
)
from rmdb.errors import InternalError, StringOverflowError


def test_coltype_names():
    assert coltype2str(ColType.INT) == "INT"
    assert coltype2str(ColType.FLOAT) == "FLOAT"
    assert coltype2str(ColType.STRING) == "STRING"


def test_coltype_unknown_raises():
    with pytest.raises(KeyError):
        coltype2str(99)


def test_rid_equality_and_hash():
    assert Rid(1, 2) == Rid(1, 2)
    assert Rid(1, 2) != Rid(2, 1)
    assert len({Rid(1, 2), Rid(1, 2), Rid(1, 3)}) == 2


def test_tabcol_ordering():
    cols = [TabCol("b", "a"), TabCol("a", "z"), TabCol("a", "b")]
    assert sorted(cols) == [TabCol("a", "b"), TabCol("a", "z"), TabCol("b", "a")]


def test_value_setters():
    v = Value()
    v.set_int(42)
    assert v.type is ColType.INT and v.int_val == 42
    v.set_float(1.5)
    assert v.type is ColType.FLOAT and v.float_val == 1.5
    v.set_str("abc")
    assert v.type is ColType.STRING and v.str_val == "abc"


def test_init_raw_int_round_trip():
    v = Value()
    v.set_int(-123456)
    raw = v.init_raw(4)
    assert v.raw == raw
    assert struct.unpack("<i", raw)[0] == -123456


def test_init_raw_float_round_trip():
    v = Value()
    v.set_float(2.5)
    assert struct.unpack("<f", v.init_raw(4))[0] == 2.5


def test_init_raw_string_is_zero_padded():
    v = Value()
    v.set_str("hi")
    raw = v.init_raw(6)
    assert len(raw) == 6
    assert raw.rstrip(b"\0") == b"hi"
    assert raw[2:] == bytes(4)


def test_init_raw_string_overflow():
    v = Value()
    v.set_str("toolong")
    with pytest.raises(StringOverflowError):
        v.init_raw(3)


def test_init_raw_twice_rejected():
    v = Value()
    v.set_int(1)
    v.init_raw(4)
    with pytest.raises(InternalError):
        v.init_raw(4)


def test_init_raw_wrong_int_length():
    v = Value()
    v.set_int(1)
    with pytest.raises(InternalError):
        v.init_raw(8)


def test_condition_and_set_clause():
    rhs = Value()
    rhs.set_int(3)
    cond = Condition(TabCol("t", "a"), CompOp.LT, True, rhs_val=rhs)
    assert cond.rhs_col is None
    assert cond.rhs_val.int_val == 3
    clause = SetClause(TabCol("t", "a"), rhs)
    assert clause.lhs.col_name == "a"
    assert clause.rhs is rhs


def test_init_raw_fills_a_whole_page():
    v = Value()
    v.set_str("x")
    raw = v.init_raw(PAGE_SIZE)
    assert len(raw) == 4096
    assert raw[:1] == b"x"
    assert raw[1:] == bytes(4095)