"""Entry-point for launching the CLI application."""
from __future__ import annotations

import sys

from .presentation.cli.app import main as cli_main


def main() -> None:
    """Run the CLI story player."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
