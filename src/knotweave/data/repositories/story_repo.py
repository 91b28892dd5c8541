"""Repository for story graphs stored as JSON."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from knotweave.core.types import Scalar
from knotweave.data.errors import DataValidationError
from knotweave.data.repositories.base import RepositoryBase
from knotweave.domain.conditions import Op, is_scalar
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
)

DEFAULT_STORY_FILE = "example_story.json"


class StoryRepository(RepositoryBase[Tuple[ContentItem, ...]]):
    """Loads knots and converts their items into typed content.

    Only the shape of each item is checked here. Divert targets and unknown
    item kinds are left for the engine to resolve when they are reached.
    """

    def __init__(self, filename: str = DEFAULT_STORY_FILE, base_path: Path | str | None = None) -> None:
        super().__init__(filename, base_path)

    @classmethod
    def from_path(cls, path: Path | str) -> "StoryRepository":
        story_path = Path(path)
        return cls(story_path.name, story_path.parent)

    def story(self) -> Story:
        """Return the immutable knot mapping for the dialogue engine."""
        return self.as_mapping()

    def _build(self, raw: dict[str, object]) -> Dict[str, Tuple[ContentItem, ...]]:
        knots: Dict[str, Tuple[ContentItem, ...]] = {}
        for knot_name, knot_payload in raw.items():
            context = f"knot '{knot_name}'"
            if not isinstance(knot_payload, list):
                raise DataValidationError(f"{context} must be a list of content items.")
            knots[knot_name] = tuple(
                self._parse_item(entry, f"{context}[{index}]") for index, entry in enumerate(knot_payload)
            )
        return knots

    def _parse_item(self, raw_item: object, context: str) -> ContentItem:
        if isinstance(raw_item, str):
            return raw_item
        if not isinstance(raw_item, dict):
            return UnrecognizedItem(kind=type(raw_item).__name__, data={"value": raw_item})
        data = raw_item
        item_type = data.get("type")
        if not isinstance(item_type, str):
            # Reported by the engine when the item is reached.
            kind = "nil" if item_type is None else type(item_type).__name__
            return UnrecognizedItem(kind=kind, data=dict(data))
        if item_type == "text":
            return self._parse_text(data, context)
        if item_type == "choice":
            return ChoiceItem(
                prompt=self._require_optional_str(data.get("prompt"), f"{context} prompt"),
                options=self._parse_options(data.get("options"), context),
            )
        if item_type == "divert":
            return DivertItem(target=self._require_str(data.get("target"), f"{context} target"))
        if item_type == "set":
            if "value" not in data:
                raise DataValidationError(f"{context} value is required.")
            return SetItem(
                variable=self._require_str(_first_of(data, "var", "variable"), f"{context} var"),
                value=self._require_scalar(data["value"], f"{context} value"),
            )
        if item_type == "condition":
            return self._parse_condition(data, context)
        payload = {key: value for key, value in data.items() if key != "type"}
        return UnrecognizedItem(kind=item_type, data=payload)

    def _parse_text(self, data: dict[str, object], context: str) -> TextItem:
        body = self._require_str(_first_of(data, "body", "content"), f"{context} body")
        speaker = self._require_optional_str(data.get("speaker"), f"{context} speaker")
        raw_tags = data.get("tags")
        if raw_tags is None:
            return TextItem(body=body, speaker=speaker)
        if not isinstance(raw_tags, list):
            raise DataValidationError(f"{context} tags must be a list if provided.")
        tags = tuple(self._require_str(tag, f"{context} tags[{index}]") for index, tag in enumerate(raw_tags))
        return TextItem(body=body, speaker=speaker, tags=tags)

    def _parse_condition(self, data: dict[str, object], context: str) -> ConditionItem:
        then_raw = _first_of(data, "then", "content")
        if then_raw is None:
            raise DataValidationError(f"{context} content is required.")
        raw_operator = data.get("operator", "==")
        if not isinstance(raw_operator, str):
            raise DataValidationError(f"{context} operator must be a string.")
        try:
            operator: Op | str = Op.parse(raw_operator)
        except ValueError:
            # Unknown operators are reported when the condition is evaluated.
            operator = raw_operator
        return ConditionItem(
            variable=self._require_str(_first_of(data, "var", "variable"), f"{context} var"),
            operand=self._require_scalar(_first_of(data, "value", "operand"), f"{context} value"),
            then=self._parse_item(then_raw, f"{context} content"),
            operator=operator,
        )

    def _parse_options(self, raw_options: object, context: str) -> Tuple[ChoiceOption | str, ...]:
        if not isinstance(raw_options, list):
            raise DataValidationError(f"{context} options must be a list.")
        options: List[ChoiceOption | str] = []
        for index, entry in enumerate(raw_options):
            option_ctx = f"{context} options[{index}]"
            if isinstance(entry, str):
                options.append(entry)
                continue
            option_data = self._require_mapping(entry, option_ctx)
            options.append(
                ChoiceOption(
                    label=self._require_str(option_data.get("label"), f"{option_ctx} label"),
                    divert_target=self._require_optional_str(option_data.get("divert"), f"{option_ctx} divert"),
                    assignments=self._parse_assignments(option_data.get("set"), option_ctx),
                )
            )
        return tuple(options)

    def _parse_assignments(self, raw_set: object, context: str) -> Dict[str, Scalar] | None:
        if raw_set is None:
            return None
        mapping = self._require_mapping(raw_set, f"{context} set")
        return {name: self._require_scalar(value, f"{context} set.{name}") for name, value in mapping.items()}

    @staticmethod
    def _require_scalar(value: object, context: str) -> Scalar:
        if not is_scalar(value):
            raise DataValidationError(f"{context} must be a string, number, boolean or null.")
        return value


def _first_of(data: dict[str, object], *keys: str) -> object:
    for key in keys:
        if key in data:
            return data[key]
    return None
