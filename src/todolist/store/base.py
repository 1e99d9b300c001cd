"""Codec protocol and shared types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class Item:
    """A single to-do record. Its index is its position in the store."""

    text: str
    done: bool = False


class CodecError(ValueError):
    """Backing file content could not be decoded."""


@runtime_checkable
class Codec(Protocol):
    """Protocol that all storage formats must implement."""

    @property
    def name(self) -> str: ...

    @property
    def suffixes(self) -> tuple[str, ...]: ...

    def dumps(self, items: Sequence[Item]) -> str:
        """Serialize items, in order, to file content."""
        ...

    def loads(self, text: str) -> list[Item]:
        """Parse file content. Stored indexes are ignored; order is what counts."""
        ...
