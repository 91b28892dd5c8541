"""Domain definition exports."""

from .story_def import (
    ChoiceItem,
    ChoiceOption,
    ConditionItem,
    ContentItem,
    DivertItem,
    Knot,
    SetItem,
    Story,
    TextItem,
    UnrecognizedItem,
    option_label,
)

__all__ = [
    "ChoiceItem",
    "ChoiceOption",
    "ConditionItem",
    "ContentItem",
    "DivertItem",
    "Knot",
    "SetItem",
    "Story",
    "TextItem",
    "UnrecognizedItem",
    "option_label",
]
