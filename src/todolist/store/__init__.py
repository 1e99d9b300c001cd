"""Item store and its storage formats.

Layout:
    todo_list.json     [{"index": 0, "text": "...", "done": false}, ...]
    todo_list.csv      index,text,done
    todo_list.md       YAML front matter + "- [ ] text" task lines

The format is picked from the file suffix unless configured explicitly.
Stored indexes are display-only; positions are rebuilt on load.
"""

from todolist.store.base import Codec, CodecError, Item
from todolist.store.codecs import CsvCodec, JsonCodec, MarkdownCodec, codec_for
from todolist.store.item_store import FileAccessError, ItemStore, NotFoundError, TodoError

__all__ = [
    "Codec",
    "CodecError",
    "CsvCodec",
    "FileAccessError",
    "Item",
    "ItemStore",
    "JsonCodec",
    "MarkdownCodec",
    "NotFoundError",
    "TodoError",
    "codec_for",
]
