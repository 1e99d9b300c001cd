"""Command handlers for the todo CLI.

Each handler applies one operation to a loaded store and returns the text to
show the user. ``run`` wires them together: load, apply, save, print.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from todolist.store import ItemStore, TodoError, codec_for

if TYPE_CHECKING:
    from todolist.config import TodoConfig

logger = logging.getLogger(__name__)

USAGE = """\
Usage: todo <command> [args]
  show                              List all items
  add <text>                        Append an item
  remove <text|index>               Delete the first matching item
  update <text|index> [<new text>]  Replace an item's text, or toggle it done
                                    (the selector is one argument: quote
                                    multi-word text, e.g. update "walk dog")
  help                              Show this message"""

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def show(store: ItemStore) -> str:
    return "\n".join(store.show())


def add(store: ItemStore, text: str) -> str:
    index = store.add(text)
    return f"Todo item saved! -> {index} : {store.items[index].text}"


def remove(store: ItemStore, selector: str) -> str:
    index, item = store.remove(selector)
    return f"Todo item deleted with success! -> {index} : {item.text}"


def update(store: ItemStore, selector: str, new_text: str | None = None) -> str:
    index, item = store.update(selector, new_text)
    if new_text is None:
        state = "done" if item.done else "not done"
        return f"Todo item marked {state}! -> {index} : {item.text}"
    return f"Todo item updated with success! -> {index} : {item.text}"


def _dispatch(store: ItemStore, cmd: str, args: list[str]) -> str:
    if cmd == "show":
        return show(store)
    if cmd == "add":
        return add(store, " ".join(args))
    if cmd == "remove":
        return remove(store, " ".join(args))
    # update: first argument selects, the rest is the replacement text
    new_text = " ".join(args[1:]) if len(args) > 1 else None
    return update(store, args[0], new_text)


def run(argv: list[str], config: TodoConfig) -> int:
    """Execute one command and return the process exit code."""
    if not argv:
        print("Please specify an action", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    cmd, args = argv[0], argv[1:]
    if cmd in ("help", "-h", "--help"):
        print(USAGE)
        return EXIT_OK
    if cmd not in ("show", "add", "remove", "update"):
        print(f"The given command: {cmd} is invalid!", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE
    if cmd != "show" and not " ".join(args).strip():
        print("Please specify an item", file=sys.stderr)
        return EXIT_USAGE
    if cmd == "update" and len(args) > 1 and not " ".join(args[1:]).strip():
        print("Please specify the new text", file=sys.stderr)
        return EXIT_USAGE

    try:
        codec = codec_for(config.store.path, config.store.format)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    try:
        store = ItemStore(config.store.path, codec)
        message = _dispatch(store, cmd, args)
        store.save()
    except TodoError as e:
        logger.warning("%s failed: %s", cmd, e)
        print(str(e), file=sys.stderr)
        return EXIT_ERROR

    if message:
        print(message)
    return EXIT_OK
