"""The item store: an ordered list of to-do items backed by a single file.

The whole file is read when the store is created and written back in one
piece by ``save()``, only if an operation changed something. There is no
locking: two processes saving the same file race and the last writer wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

from todolist.store.base import Codec, CodecError, Item
from todolist.store.codecs import codec_for

logger = logging.getLogger(__name__)


def _is_index(key: str) -> bool:
    return key.isascii() and key.isdigit()


def _clean_text(text: str) -> str:
    """Strip surrounding whitespace; item text may not be blank."""
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("Item text cannot be empty")
    return cleaned


class TodoError(Exception):
    """Base class for errors reported to the user."""


class FileAccessError(TodoError):
    """The backing file could not be read, decoded or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot access {path}: {reason}")
        self.path = path


class NotFoundError(TodoError):
    """A selector matched no item."""

    def __init__(self, selector: str) -> None:
        self.selector = selector.strip()
        if _is_index(self.selector):
            msg = f"There is no item with the given id: {self.selector} !"
        else:
            msg = f"There is no item with the given description: {self.selector} !"
        super().__init__(msg)


class ItemStore:
    """Read/write access to the to-do list file."""

    def __init__(self, path: Path, codec: Codec | None = None) -> None:
        self.path = path
        self.codec = codec or codec_for(path)
        self._items: list[Item] = []
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("No store at %s, starting empty", self.path)
            return
        try:
            # No newline translation: CSV fields may hold a bare \r
            with self.path.open(encoding="utf-8", newline="") as f:
                content = f.read()
            self._items = self.codec.loads(content)
        except OSError as e:
            raise FileAccessError(self.path, e.strerror or str(e)) from e
        except (CodecError, UnicodeDecodeError) as e:
            raise FileAccessError(self.path, str(e)) from e
        logger.debug("Loaded %d items from %s (%s)", len(self._items), self.path, self.codec.name)

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._items)

    # ── Selectors ────────────────────────────────────────────

    def find(self, selector: str) -> int:
        """Resolve a selector to an index.

        ASCII all-digit selectors are zero-based indexes. Anything else is compared
        case-insensitively against each item's text; the first exact match wins.
        """
        key = selector.strip()
        if _is_index(key):
            index = int(key)
            if index < len(self._items):
                return index
            raise NotFoundError(selector)

        wanted = key.casefold()
        for index, item in enumerate(self._items):
            if item.text.strip().casefold() == wanted:
                return index
        raise NotFoundError(selector)

    # ── Operations ───────────────────────────────────────────

    def show(self) -> list[str]:
        return [
            f"{index} [{'x' if item.done else ' '}] {item.text}"
            for index, item in enumerate(self._items)
        ]

    def add(self, text: str) -> int:
        """Append an item and return its index."""
        self._items.append(Item(text=_clean_text(text)))
        self._dirty = True
        return len(self._items) - 1

    def remove(self, selector: str) -> tuple[int, Item]:
        index = self.find(selector)
        item = self._items.pop(index)
        self._dirty = True
        return index, item

    def update(self, selector: str, new_text: str | None = None) -> tuple[int, Item]:
        """Replace the matched item's text, or toggle it done when no text is given."""
        if new_text is not None:
            new_text = _clean_text(new_text)
        index = self.find(selector)
        item = self._items[index]
        if new_text is None:
            item.done = not item.done
        else:
            item.text = new_text
        self._dirty = True
        return index, item

    def save(self) -> bool:
        """Write the list back if anything changed. Returns True if written."""
        if not self._dirty:
            return False
        content = self.codec.dumps(self._items)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise FileAccessError(self.path, e.strerror or str(e)) from e
        self._dirty = False
        logger.info("Saved %d items to %s", len(self._items), self.path)
        return True
