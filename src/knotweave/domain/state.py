"""Mutable traversal state owned by the dialogue engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from knotweave.core.types import Scalar
from knotweave.domain.defs import ChoiceItem


@dataclass(slots=True)
class Cursor:
    """Read position inside the story. Positions are 1-based."""

    knot: str
    position: int = 1


@dataclass(frozen=True, slots=True)
class ChoiceRecord:
    knot: str
    position: int
    option_index: int


@dataclass(slots=True)
class Ledger:
    """Knot visit counts and the log of committed choices."""

    visits: Dict[str, int] = field(default_factory=dict)
    choices_made: List[ChoiceRecord] = field(default_factory=list)

    def record_visit(self, knot: str) -> int:
        self.visits[knot] = self.visits.get(knot, 0) + 1
        return self.visits[knot]

    def visit_count(self, knot: str) -> int:
        return self.visits.get(knot, 0)


@dataclass(frozen=True, slots=True)
class PendingChoice:
    """A choice that has been presented but not yet committed.

    ``inline`` is True when the choice was reached through a condition, in which
    case the cursor already points past the wrapping item.
    """

    item: ChoiceItem
    knot: str
    position: int
    inline: bool = False


@dataclass
class StoryState:
    """Cursor, variable store and ledger for one story session."""

    cursor: Cursor
    variables: Dict[str, Scalar] = field(default_factory=dict)
    ledger: Ledger = field(default_factory=Ledger)
    pending_choice: PendingChoice | None = None
