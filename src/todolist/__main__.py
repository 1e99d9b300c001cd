"""Entry point: python -m todolist <command> [args]

- show                              List all items
- add <text>                        Append an item
- remove <text|index>               Delete the first matching item
- update <text|index> [<new text>]  Replace an item's text, or toggle it done
"""

from __future__ import annotations

import logging
import sys

from todolist.actions import run
from todolist.config import load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    config = load_config()
    _setup_logging(config.log_level)
    sys.exit(run(sys.argv[1:], config))


if __name__ == "__main__":
    main()
