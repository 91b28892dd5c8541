"""Service layer exports."""

from .errors import (
    InvalidChoiceError,
    InvalidStateError,
    InvalidValueError,
    NavigationLoopError,
    StoryError,
    TypeMismatchError,
    UnknownDivertTargetError,
    UnknownStartKnotError,
)
from .dialogue_engine import (
    ChoiceEvent,
    Diagnostic,
    DialogueEngine,
    EndEvent,
    EngineSettings,
    StoryEvent,
    StoryHistory,
    TextEvent,
    format_diagnostic,
)

__all__ = [
    "ChoiceEvent",
    "Diagnostic",
    "DialogueEngine",
    "EndEvent",
    "EngineSettings",
    "InvalidChoiceError",
    "InvalidStateError",
    "InvalidValueError",
    "NavigationLoopError",
    "StoryError",
    "StoryEvent",
    "StoryHistory",
    "TextEvent",
    "TypeMismatchError",
    "UnknownDivertTargetError",
    "UnknownStartKnotError",
    "format_diagnostic",
]
