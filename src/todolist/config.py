"""Configuration loading from environment variables and todo.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_FILENAME = "todo_list.json"
_CONFIG_FILENAME = "todo.toml"


@dataclass
class StoreConfig:
    """Backing file configuration."""

    path: Path = field(default_factory=lambda: Path.cwd() / _DEFAULT_FILENAME)
    format: str | None = None


@dataclass
class TodoConfig:
    """Top-level configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    log_level: str = "WARNING"


def load_config(config_path: Path | None = None) -> TodoConfig:
    """Load configuration from environment variables and optional todo.toml.

    Priority: environment variables > todo.toml > defaults. A relative
    ``[store] path`` is taken relative to the todo.toml that sets it;
    a relative ``TODO_FILE`` is taken relative to the working directory.
    """
    file_data: dict = {}
    config_dir = Path.cwd()
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
        config_dir = config_path.parent
    else:
        # Search current dir and ~/.todo/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".todo" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                config_dir = candidate.parent
                break

    store_data = file_data.get("store", {})
    if "TODO_FILE" in os.environ:
        store_path = Path(os.environ["TODO_FILE"]).expanduser()
    elif "path" in store_data:
        store_path = config_dir / Path(store_data["path"]).expanduser()
    else:
        store_path = Path.cwd() / _DEFAULT_FILENAME

    config = TodoConfig(
        store=StoreConfig(
            path=store_path,
            format=os.getenv("TODO_FORMAT", store_data.get("format")) or None,
        ),
        log_level=os.getenv("TODO_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
