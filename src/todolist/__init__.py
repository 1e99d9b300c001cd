"""todo-list: a terminal to-do list manager backed by a flat file."""

__version__ = "0.1.0"
