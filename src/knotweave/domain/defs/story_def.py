"""Story content definitions consumed by the dialogue engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Sequence, Tuple, Union

from knotweave.core.types import Scalar
from knotweave.domain.conditions import Op


@dataclass(frozen=True, slots=True)
class TextItem:
    """A line of dialogue or narration."""

    body: str
    speaker: str | None = None
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChoiceOption:
    """Selectable option on a choice item."""

    label: str
    divert_target: str | None = None
    assignments: Mapping[str, Scalar] | None = None


@dataclass(frozen=True, slots=True)
class ChoiceItem:
    """Player decision point. Options may be bare label strings."""

    prompt: str | None = None
    options: Tuple[Union[ChoiceOption, str], ...] = ()


@dataclass(frozen=True, slots=True)
class DivertItem:
    target: str


@dataclass(frozen=True, slots=True)
class SetItem:
    variable: str
    value: Scalar


@dataclass(frozen=True, slots=True)
class ConditionItem:
    """Wraps another item that is only used when the comparison holds.

    ``operator`` is normally an :class:`Op`; raw symbols such as ``"=="`` are
    accepted and resolved when the condition is evaluated.
    """

    variable: str
    operand: Scalar
    then: "ContentItem"
    operator: Union[Op, str] = Op.EQ


@dataclass(frozen=True, slots=True)
class UnrecognizedItem:
    """Placeholder for an item whose kind the engine does not understand."""

    kind: str
    data: Dict[str, object] = field(default_factory=dict)


ContentItem = Union[str, TextItem, ChoiceItem, DivertItem, SetItem, ConditionItem, UnrecognizedItem]
Knot = Sequence[ContentItem]
Story = Mapping[str, Knot]


def option_label(option: Union[ChoiceOption, str]) -> str:
    """Return the display label of a choice option."""
    if isinstance(option, ChoiceOption):
        return option.label
    return option
