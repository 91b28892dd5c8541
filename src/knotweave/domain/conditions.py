"""Scalar comparison rules used by conditional story content."""
from __future__ import annotations

import operator as _operator
from enum import Enum
from typing import Callable, Dict

from knotweave.core.types import Scalar, ScalarKind


class Op(Enum):
    """Comparison operators available to condition items."""

    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    @classmethod
    def parse(cls, raw: "Op | str") -> "Op":
        """Resolve an operator from its enum value, symbol, or member name."""
        if isinstance(raw, Op):
            return raw
        if isinstance(raw, str):
            symbol = raw.strip()
            if symbol in _SYMBOL_ALIASES:
                return _SYMBOL_ALIASES[symbol]
            try:
                return cls(symbol)
            except ValueError:
                pass
            try:
                return cls[symbol.upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown comparison operator: {raw!r}")

    @property
    def is_ordering(self) -> bool:
        return self not in (Op.EQ, Op.NE)


_SYMBOL_ALIASES: Dict[str, Op] = {"~=": Op.NE, "=": Op.EQ}

_ORDERING: Dict[Op, Callable[[object, object], bool]] = {
    Op.GT: _operator.gt,
    Op.LT: _operator.lt,
    Op.GE: _operator.ge,
    Op.LE: _operator.le,
}


def scalar_kind(value: object) -> ScalarKind | None:
    """Return the scalar kind of a value, or None when it is not a scalar."""
    if value is None:
        return "nil"
    # bool must be checked before int; it is an int subclass.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def is_scalar(value: object) -> bool:
    return scalar_kind(value) is not None


def compare(left: Scalar, op: Op, right: Scalar) -> bool:
    """Compare two scalars.

    Equality never crosses kinds: ``True`` does not equal ``1`` and nil only
    equals nil. Ordering is defined for two numbers or two strings; any other
    pairing raises ``TypeError``.
    """
    left_kind = scalar_kind(left)
    right_kind = scalar_kind(right)
    if op is Op.EQ or op is Op.NE:
        equal = left_kind == right_kind and left == right
        return equal if op is Op.EQ else not equal
    if left_kind != right_kind or left_kind not in ("number", "string"):
        raise TypeError(
            f"Cannot order {left_kind or type(left).__name__} against "
            f"{right_kind or type(right).__name__} with '{op.value}'."
        )
    return _ORDERING[op](left, right)
