"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Mapping, Sequence

from knotweave.core.types import Scalar

DEFAULT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when KNOTWEAVE_DEBUG is explicitly set to '1'."""
    return os.getenv("KNOTWEAVE_DEBUG") == "1"


def wrap_text(text: str, width: int = DEFAULT_WIDTH, *, prefix: str = "") -> list[str]:
    """
    Wrap text on word boundaries, hanging continuation lines under the prefix.

    Args:
        text: The text to wrap
        width: Maximum width per line, prefix included
        prefix: Leading label for the first line (e.g. a speaker name)

    Returns:
        List of wrapped lines, each <= width characters unless a single word is longer
    """
    if not text:
        return [prefix.rstrip()] if prefix else [""]
    wrapped = textwrap.fill(
        text,
        width=max(width, len(prefix) + 1),
        initial_indent=prefix,
        subsequent_indent=" " * len(prefix),
        break_long_words=False,
        break_on_hyphens=False,
    )
    return wrapped.split("\n")


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_text(
    body: str,
    speaker: str | None = None,
    tags: Sequence[str] = (),
    *,
    show_speaker: bool = True,
    show_tags: bool = False,
) -> None:
    """Print one line of dialogue."""
    prefix = f"{speaker}: " if speaker and show_speaker else ""
    for line in wrap_text(body, prefix=prefix):
        print(line)
    if show_tags and tags:
        print(f"  [{', '.join(tags)}]")


def render_choices(prompt: str | None, options: Sequence[str]) -> None:
    """Display numbered story choices."""
    render_heading(prompt or "Choices")
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_debug_state(knot: str, variables: Mapping[str, Scalar]) -> None:
    """Dump the current knot and variables when debug output is enabled."""
    if not debug_enabled():
        return
    print(f"[knot: {knot}]")
    for name in sorted(variables):
        print(f"  {name} = {variables[name]!r}")
