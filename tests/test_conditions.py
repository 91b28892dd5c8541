import pytest

from knotweave.domain.conditions import Op, compare, is_scalar, scalar_kind


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("==", Op.EQ),
        ("!=", Op.NE),
        ("~=", Op.NE),
        (">", Op.GT),
        ("<=", Op.LE),
        ("GE", Op.GE),
        ("lt", Op.LT),
        (Op.NE, Op.NE),
    ],
)
def test_op_parse_accepts_symbols_and_names(raw, expected) -> None:
    assert Op.parse(raw) is expected


@pytest.mark.parametrize("raw", ["=~", "", "between", 3])
def test_op_parse_rejects_unknown(raw) -> None:
    with pytest.raises(ValueError):
        Op.parse(raw)


def test_scalar_kind_distinguishes_booleans_from_numbers() -> None:
    assert scalar_kind(True) == "boolean"
    assert scalar_kind(1) == "number"
    assert scalar_kind(1.5) == "number"
    assert scalar_kind("1") == "string"
    assert scalar_kind(None) == "nil"
    assert scalar_kind([1]) is None
    assert not is_scalar({"a": 1})


def test_equality_never_crosses_kinds() -> None:
    assert compare(None, Op.EQ, None)
    assert not compare(True, Op.EQ, 1)
    assert not compare(0, Op.EQ, False)
    assert not compare("1", Op.EQ, 1)
    assert compare(1, Op.EQ, 1.0)
    assert compare(True, Op.NE, 1)


def test_ordering_numbers_and_strings() -> None:
    assert compare(3, Op.GT, 2)
    assert compare(2, Op.LE, 2.0)
    assert compare("apple", Op.LT, "banana")
    assert not compare("b", Op.GE, "c")


@pytest.mark.parametrize(
    "left, right",
    [(None, 1), (1, None), ("1", 1), (True, False), (True, 0)],
)
def test_ordering_across_kinds_raises_type_error(left, right) -> None:
    with pytest.raises(TypeError):
        compare(left, Op.GT, right)
