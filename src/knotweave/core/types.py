"""Shared type aliases for the core and domain layers."""
from typing import Literal, Union

Scalar = Union[str, int, float, bool, None]
ScalarKind = Literal["nil", "boolean", "number", "string"]
Severity = Literal["WARN", "ERROR"]

__all__ = ["Scalar", "ScalarKind", "Severity"]
