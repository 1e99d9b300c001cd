"""Storage formats for the item store: JSON, CSV and Markdown task lists."""

from __future__ import annotations

import csv
import io
import json
import logging
import re
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import frontmatter

from todolist.store.base import Codec, CodecError, Item

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "1", "yes", "x"}
_TASK_LINE = re.compile(r"^\s*[-*] \[([ xX])\] ?(.*)$")


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


class JsonCodec:
    """JSON array of ``{"index", "text", "done"}`` records."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def suffixes(self) -> tuple[str, ...]:
        return (".json",)

    def dumps(self, items: Sequence[Item]) -> str:
        records = [
            {"index": i, "text": item.text, "done": item.done} for i, item in enumerate(items)
        ]
        return json.dumps(records, indent=2, ensure_ascii=False) + "\n"

    def loads(self, text: str) -> list[Item]:
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CodecError(f"invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise CodecError("expected a JSON array of items")

        items = []
        for record in data:
            if not isinstance(record, dict) or not isinstance(record.get("text"), str):
                raise CodecError(f"malformed item record: {record!r}")
            items.append(Item(text=record["text"], done=_parse_bool(record.get("done", False))))
        return items


class CsvCodec:
    """CSV with an ``index,text,done`` header row."""

    header = ("index", "text", "done")

    @property
    def name(self) -> str:
        return "csv"

    @property
    def suffixes(self) -> tuple[str, ...]:
        return (".csv",)

    def dumps(self, items: Sequence[Item]) -> str:
        buf = io.StringIO()
        # Quote text so embedded \r or \n survive the "\n" row terminator
        writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_NONNUMERIC)
        buf.write(",".join(self.header) + "\n")
        for i, item in enumerate(items):
            writer.writerow([i, item.text, "true" if item.done else "false"])
        return buf.getvalue()

    def loads(self, text: str) -> list[Item]:
        if not text.strip():
            return []
        reader = csv.DictReader(io.StringIO(text))
        if not reader.fieldnames or "text" not in reader.fieldnames:
            raise CodecError(f"CSV header must contain a 'text' column, got {reader.fieldnames}")

        items = []
        try:
            for row in reader:
                if row["text"] is None:
                    raise CodecError(f"line {reader.line_num}: missing text field")
                items.append(Item(text=row["text"], done=_parse_bool(row.get("done") or "")))
        except csv.Error as e:
            raise CodecError(f"invalid CSV: {e}") from e
        return items


class MarkdownCodec:
    """Markdown task list with YAML front matter.

    The front matter only holds bookkeeping (``updated``, ``count``); the
    ``- [ ] text`` lines in the body are the source of truth. Lines that are
    not task items are ignored on load.
    """

    @property
    def name(self) -> str:
        return "markdown"

    @property
    def suffixes(self) -> tuple[str, ...]:
        return (".md", ".markdown")

    def dumps(self, items: Sequence[Item]) -> str:
        lines = []
        for item in items:
            mark = "x" if item.done else " "
            # Task lines cannot span lines
            text = " ".join(item.text.splitlines())
            lines.append(f"- [{mark}] {text}")
        post = frontmatter.Post(
            "\n".join(lines),
            updated=datetime.now().isoformat(timespec="seconds"),
            count=len(items),
        )
        return frontmatter.dumps(post) + "\n"

    def loads(self, text: str) -> list[Item]:
        try:
            post = frontmatter.loads(text)
        except Exception as e:
            raise CodecError(f"invalid front matter: {e}") from e

        items = []
        for line in post.content.splitlines():
            m = _TASK_LINE.match(line)
            if m:
                items.append(Item(text=m.group(2), done=m.group(1) != " "))

        count = post.metadata.get("count")
        if isinstance(count, int) and count != len(items):
            logger.warning("Front matter count %d does not match %d task lines", count, len(items))
        return items


CODECS: dict[str, Codec] = {
    codec.name: codec for codec in (JsonCodec(), CsvCodec(), MarkdownCodec())
}
_ALIASES = {"md": "markdown"}


def codec_for(path: Path, fmt: str | None = None) -> Codec:
    """Pick a codec by explicit format name, else by file suffix."""
    if fmt:
        key = _ALIASES.get(fmt.lower(), fmt.lower())
        if key not in CODECS:
            raise ValueError(f"Unknown storage format: {fmt!r} (known: {', '.join(CODECS)})")
        return CODECS[key]

    suffix = path.suffix.lower()
    for codec in CODECS.values():
        if suffix in codec.suffixes:
            return codec
    raise ValueError(f"Cannot infer storage format from {path.name!r}; set TODO_FORMAT")
