"""Dialogue engine that walks a story graph and emits presentable events."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from knotweave.core.types import Scalar, Severity
from knotweave.domain.conditions import Op, compare, is_scalar
from knotweave.domain.defs import (
    ChoiceItem,
    ChoiceOption,
    ConditionItem,
    ContentItem,
    DivertItem,
    SetItem,
    Story,
    TextItem,
    UnrecognizedItem,
    option_label,
)
from knotweave.domain.state import ChoiceRecord, Cursor, PendingChoice, StoryState
from knotweave.services.errors import (
    InvalidChoiceError,
    InvalidStateError,
    InvalidValueError,
    NavigationLoopError,
    TypeMismatchError,
    UnknownDivertTargetError,
    UnknownStartKnotError,
)

logger = logging.getLogger(__name__)

DEFAULT_START_KNOT = "start"
DEFAULT_MAX_STEPS = 1000


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunable limits for a dialogue engine instance."""

    max_steps: int = DEFAULT_MAX_STEPS
    strict_types: bool = False

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            raise ValueError("max_steps must be a positive integer.")


@dataclass(slots=True)
class StoryEvent:
    """Base class for events returned to the presentation layer."""


@dataclass(slots=True)
class TextEvent(StoryEvent):
    body: str
    speaker: str | None = None
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ChoiceEvent(StoryEvent):
    prompt: str | None
    options: List[str]


@dataclass(slots=True)
class EndEvent(StoryEvent):
    pass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Non-fatal problem noticed while walking the story."""

    severity: Severity
    code: str
    message: str
    context: Dict[str, str]


@dataclass(frozen=True, slots=True)
class StoryHistory:
    visits: Dict[str, int]
    choices_made: Tuple[ChoiceRecord, ...]


def format_diagnostic(diagnostic: Diagnostic) -> str:
    context = " ".join(f"{key}={value}" for key, value in diagnostic.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{diagnostic.severity}] {diagnostic.code}: {diagnostic.message}{suffix}"


class DialogueEngine:
    """Walks knots one presentable item at a time.

    The caller drives progress with :meth:`advance` and :meth:`commit_choice`.
    Control-only items (sets, diverts and conditions) are consumed inside a
    single call, bounded by ``EngineSettings.max_steps``.
    """

    def __init__(
        self,
        story: Story,
        start_knot: str = DEFAULT_START_KNOT,
        *,
        settings: EngineSettings | None = None,
        on_diagnostic: Callable[[Diagnostic], None] | None = None,
    ) -> None:
        if start_knot not in story:
            raise UnknownStartKnotError(f"Start knot '{start_knot}' not found in story data.")
        self._story = story
        self._settings = settings or EngineSettings()
        self._on_diagnostic = on_diagnostic
        self._diagnostics: List[Diagnostic] = []
        self._state = StoryState(cursor=Cursor(knot=start_knot))
        self._state.ledger.record_visit(start_knot)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def current_knot(self) -> str:
        return self._state.cursor.knot

    @property
    def cursor(self) -> Cursor:
        """Return a copy of the current read position."""
        cursor = self._state.cursor
        return Cursor(knot=cursor.knot, position=cursor.position)

    @property
    def variables(self) -> Dict[str, Scalar]:
        return dict(self._state.variables)

    @property
    def history(self) -> StoryHistory:
        ledger = self._state.ledger
        return StoryHistory(visits=dict(ledger.visits), choices_made=tuple(ledger.choices_made))

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def advance(self) -> StoryEvent:
        """Return the next presentable event.

        A pending choice is returned again until it is committed.
        """
        pending = self._state.pending_choice
        if pending is not None:
            return self._choice_event(pending.item)
        return self._walk()

    def commit_choice(self, index: int) -> StoryEvent:
        """Commit the 1-based ``index`` of the pending choice and continue."""
        pending = self._state.pending_choice
        if pending is None:
            raise InvalidStateError("Current content is not a choice.")
        options = pending.item.options
        if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= len(options):
            raise InvalidChoiceError(
                f"Invalid choice index {index!r} for choice in knot '{pending.knot}' "
                f"with {len(options)} option(s)."
            )
        option = options[index - 1]
        self._state.ledger.choices_made.append(
            ChoiceRecord(knot=pending.knot, position=pending.position, option_index=index)
        )
        self._state.pending_choice = None
        if not pending.inline:
            self._state.cursor.position = pending.position + 1
        logger.debug("Committed choice %d (%s) in knot '%s'", index, option_label(option), pending.knot)

        if isinstance(option, ChoiceOption):
            for name, value in (option.assignments or {}).items():
                self._assign(name, value)
            if option.divert_target is not None:
                self._divert_to(option.divert_target)
        return self._walk()

    def get_variable(self, name: str) -> Scalar:
        return self._state.variables.get(name)

    def set_variable(self, name: str, value: Scalar) -> None:
        self._assign(name, value)

    def visit_count(self, knot: str) -> int:
        return self._state.ledger.visit_count(knot)

    def has_ended(self) -> bool:
        if self._state.pending_choice is not None:
            return False
        cursor = self._state.cursor
        items = self._story.get(cursor.knot)
        return items is None or cursor.position > len(items)

    def evaluate_condition(self, condition: ConditionItem) -> bool:
        """Evaluate a condition against the variable store.

        Unknown operators and ordering across incompatible kinds are reported as
        diagnostics and evaluate to False, unless strict typing is enabled.
        """
        try:
            op = Op.parse(condition.operator)
        except ValueError as exc:
            self._report("UNKNOWN_OPERATOR", str(exc), variable=condition.variable)
            return False
        value = self._state.variables.get(condition.variable)
        try:
            return compare(value, op, condition.operand)
        except TypeError as exc:
            if self._settings.strict_types:
                raise TypeMismatchError(f"Condition on '{condition.variable}': {exc}") from exc
            self._report("TYPE_MISMATCH", str(exc), variable=condition.variable)
            return False

    def _walk(self) -> StoryEvent:
        cursor = self._state.cursor
        max_steps = self._settings.max_steps
        inline: ContentItem | None = None
        steps = 0
        while True:
            steps += 1
            if steps > max_steps:
                raise NavigationLoopError(
                    f"Exceeded {max_steps} steps without reaching presentable content "
                    f"(stopped in knot '{cursor.knot}' at position {cursor.position})."
                )
            if inline is None:
                items = self._story.get(cursor.knot)
                if items is None or cursor.position > len(items):
                    return EndEvent()
                item = items[cursor.position - 1]
                # Items reached through a condition already sit past the cursor.
                step_cursor = True
            else:
                item, inline = inline, None
                step_cursor = False

            if isinstance(item, str):
                item = TextItem(body=item)

            if isinstance(item, TextItem):
                if step_cursor:
                    cursor.position += 1
                return TextEvent(body=item.body, speaker=item.speaker, tags=list(item.tags))
            if isinstance(item, ChoiceItem):
                self._state.pending_choice = PendingChoice(
                    item=item,
                    knot=cursor.knot,
                    position=cursor.position if step_cursor else cursor.position - 1,
                    inline=not step_cursor,
                )
                return self._choice_event(item)
            if isinstance(item, SetItem):
                self._assign(item.variable, item.value)
                if step_cursor:
                    cursor.position += 1
                continue
            if isinstance(item, DivertItem):
                self._divert_to(item.target)
                continue
            if isinstance(item, ConditionItem):
                if step_cursor:
                    cursor.position += 1
                if self.evaluate_condition(item):
                    inline = item.then
                continue

            kind = item.kind if isinstance(item, UnrecognizedItem) else type(item).__name__
            self._report(
                "UNRECOGNIZED_ITEM_KIND",
                f"Unknown content type '{kind}' skipped.",
                knot=cursor.knot,
                position=str(cursor.position),
            )
            if step_cursor:
                cursor.position += 1

    def _choice_event(self, item: ChoiceItem) -> ChoiceEvent:
        return ChoiceEvent(prompt=item.prompt, options=[option_label(option) for option in item.options])

    def _divert_to(self, target: str) -> None:
        if target not in self._story:
            raise UnknownDivertTargetError(f"Divert target '{target}' not found.")
        visits = self._state.ledger.record_visit(target)
        self._state.cursor.knot = target
        self._state.cursor.position = 1
        logger.debug("Diverted to knot '%s' (visit %d)", target, visits)

    def _assign(self, name: str, value: object) -> None:
        if not is_scalar(value):
            raise InvalidValueError(
                f"Variable '{name}' must be a string, number, boolean or None; got {type(value).__name__}."
            )
        self._state.variables[name] = value

    def _report(self, code: str, message: str, **context: str) -> None:
        diagnostic = Diagnostic(severity="WARN", code=code, message=message, context=dict(context))
        self._diagnostics.append(diagnostic)
        logger.warning(format_diagnostic(diagnostic))
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic)
