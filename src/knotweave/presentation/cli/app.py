"""Console-driven story player for knotweave."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Sequence

from knotweave.data import DataError, get_stories_path
from knotweave.data.repositories import StoryRepository
from knotweave.data.repositories.story_repo import DEFAULT_STORY_FILE
from knotweave.presentation.cli.config import ConfigValue, get_default_config_path, load_config, save_config
from knotweave.presentation.cli.render import (
    debug_enabled,
    render_choices,
    render_debug_state,
    render_heading,
    render_text,
)
from knotweave.services import (
    ChoiceEvent,
    DialogueEngine,
    EngineSettings,
    InvalidChoiceError,
    StoryError,
    StoryEvent,
    TextEvent,
)
from knotweave.services.dialogue_engine import DEFAULT_START_KNOT

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Play a story in the terminal and return a process exit code."""
    args = _create_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if debug_enabled() else logging.WARNING)
    config = _apply_overrides(load_config(args.config), args)
    max_steps = int(config["max_steps"])
    if args.save_config:
        config_path = args.config or get_default_config_path()
        save_config(config, config_path)
        print(f"Saved settings to {config_path}")

    try:
        engine = _build_engine(args.story, args.start, max_steps)
    except (DataError, StoryError, ValueError) as exc:
        print(f"Unable to start story: {exc}")
        return 1

    render_heading(f"knotweave: {args.story.stem}")
    try:
        _run_story_loop(engine, config)
    except StoryError as exc:
        logger.debug("Story session aborted", exc_info=True)
        print(f"\nStory stopped: {exc}")
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
        return 0
    return 0


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="knotweave", description="Play a knot-based story in the terminal.")
    parser.add_argument(
        "story",
        nargs="?",
        type=Path,
        default=get_stories_path() / DEFAULT_STORY_FILE,
        help="Path to a story JSON file (defaults to the bundled example).",
    )
    parser.add_argument("--start", default=DEFAULT_START_KNOT, help="Knot to start from.")
    parser.add_argument("--max-steps", type=int, default=None, help="Step budget for a single advance.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a CLI config JSON file.")
    parser.add_argument("--show-tags", action="store_true", help="Print tags attached to each line.")
    parser.add_argument("--hide-speaker", action="store_true", help="Omit speaker names.")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings back to the config file before playing.",
    )
    return parser


def _apply_overrides(config: Dict[str, ConfigValue], args: argparse.Namespace) -> Dict[str, ConfigValue]:
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    if args.show_tags:
        config["show_tags"] = True
    if args.hide_speaker:
        config["show_speaker"] = False
    return config


def _build_engine(story_path: Path, start_knot: str, max_steps: int) -> DialogueEngine:
    """Load the story file and construct the engine."""
    story = StoryRepository.from_path(story_path).story()
    return DialogueEngine(story, start_knot, settings=EngineSettings(max_steps=max_steps))


def _run_story_loop(engine: DialogueEngine, config: Dict[str, ConfigValue]) -> None:
    event: StoryEvent = engine.advance()
    while True:
        render_debug_state(engine.current_knot, engine.variables)
        if isinstance(event, TextEvent):
            render_text(
                event.body,
                event.speaker,
                event.tags,
                show_speaker=bool(config["show_speaker"]),
                show_tags=bool(config["show_tags"]),
            )
            event = engine.advance()
        elif isinstance(event, ChoiceEvent):
            if not event.options:
                raise InvalidChoiceError("Choice has no options to select.")
            render_choices(event.prompt, event.options)
            event = engine.commit_choice(_prompt_choice(len(event.options)))
            print()
        else:
            render_heading("THE END")
            return


def _prompt_choice(choice_count: int) -> int:
    while True:
        raw = input("Select an option: ").strip()
        try:
            index = int(raw)
        except ValueError:
            print("Please enter a number.")
            continue
        if 1 <= index <= choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")
