"""Service-layer exceptions raised by the dialogue engine."""


class StoryError(Exception):
    """Base exception for story traversal failures."""


class UnknownStartKnotError(StoryError):
    """Raised when the engine is constructed with a start knot missing from the story."""


class UnknownDivertTargetError(StoryError):
    """Raised when a divert or choice divert names a knot that does not exist."""


class InvalidStateError(StoryError):
    """Raised when a choice is committed while no choice is pending."""


class InvalidChoiceError(StoryError):
    """Raised when a committed choice index is out of range."""


class NavigationLoopError(StoryError):
    """Raised when a single advance exceeds the configured step budget."""


class InvalidValueError(StoryError):
    """Raised when a variable is assigned something other than a scalar."""


class TypeMismatchError(StoryError):
    """Raised in strict mode when a condition orders incompatible values."""
