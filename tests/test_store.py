"""Tests for the item store."""

from __future__ import annotations

import pytest
from pathlib import Path

from todolist.store import (
    CsvCodec,
    FileAccessError,
    Item,
    ItemStore,
    JsonCodec,
    MarkdownCodec,
    NotFoundError,
)


@pytest.fixture
def path(tmp_path: Path) -> Path:
    return tmp_path / "todo_list.json"


@pytest.fixture
def store(path: Path) -> ItemStore:
    s = ItemStore(path)
    for text in ["Buy milk", "Walk dog", "Write report"]:
        s.add(text)
    s.save()
    return ItemStore(path)


class TestLoad:
    def test_missing_file_is_empty(self, path: Path):
        s = ItemStore(path)
        assert len(s) == 0
        assert s.show() == []
        assert not path.exists()

    def test_codec_from_suffix(self, tmp_path: Path):
        assert isinstance(ItemStore(tmp_path / "a.csv").codec, CsvCodec)
        assert isinstance(ItemStore(tmp_path / "a.md").codec, MarkdownCodec)
        assert isinstance(ItemStore(tmp_path / "a.json").codec, JsonCodec)

    def test_unknown_suffix(self, tmp_path: Path):
        with pytest.raises(ValueError):
            ItemStore(tmp_path / "todo.txt")

    def test_malformed_file(self, path: Path):
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FileAccessError) as exc:
            ItemStore(path)
        assert exc.value.path == path

    def test_unreadable_file(self, tmp_path: Path):
        # A directory in place of the file cannot be read
        path = tmp_path / "dir.json"
        path.mkdir()
        with pytest.raises(FileAccessError):
            ItemStore(path)


class TestShow:
    def test_lines_prefixed_with_index(self, store: ItemStore):
        assert store.show() == ["0 [ ] Buy milk", "1 [ ] Walk dog", "2 [ ] Write report"]

    def test_done_marker(self, store: ItemStore):
        store.update("1")
        assert store.show()[1] == "1 [x] Walk dog"

    def test_show_does_not_dirty(self, store: ItemStore, path: Path):
        before = path.read_text(encoding="utf-8")
        store.show()
        assert not store.dirty
        assert store.save() is False
        assert path.read_text(encoding="utf-8") == before


class TestAdd:
    def test_appends_at_next_index(self, store: ItemStore):
        index = store.add("Call mom")
        assert index == 3
        assert store.show()[-1] == "3 [ ] Call mom"

    def test_add_to_empty(self, path: Path):
        s = ItemStore(path)
        assert s.add("First") == 0
        assert s.show() == ["0 [ ] First"]

    def test_strips_whitespace(self, store: ItemStore):
        index = store.add("  Call mom  ")
        assert store.items[index].text == "Call mom"

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_text_rejected(self, store: ItemStore, text: str):
        with pytest.raises(ValueError):
            store.add(text)
        assert len(store) == 3
        assert not store.dirty

    def test_duplicates_allowed(self, store: ItemStore):
        store.add("Buy milk")
        assert [i.text for i in store.items].count("Buy milk") == 2

    def test_persisted(self, store: ItemStore, path: Path):
        store.add("Call mom")
        assert store.save() is True
        assert ItemStore(path).items[-1] == Item("Call mom")


class TestFind:
    def test_by_index(self, store: ItemStore):
        assert store.find("2") == 2
        assert store.find(" 0 ") == 0

    def test_by_text_case_insensitive(self, store: ItemStore):
        assert store.find("walk DOG") == 1

    def test_text_is_exact_not_substring(self, store: ItemStore):
        with pytest.raises(NotFoundError):
            store.find("walk")

    def test_first_match_wins(self, store: ItemStore):
        store.add("buy milk")
        assert store.find("BUY MILK") == 0

    def test_out_of_bounds(self, store: ItemStore):
        with pytest.raises(NotFoundError) as exc:
            store.find("3")
        assert "id: 3" in str(exc.value)

    def test_non_ascii_digits_are_text(self, path: Path):
        s = ItemStore(path)
        s.add("١")
        assert s.find("١") == 0
        with pytest.raises(NotFoundError) as exc:
            s.find("²")
        assert "description: ²" in str(exc.value)

    def test_negative_number_is_text(self, store: ItemStore):
        with pytest.raises(NotFoundError) as exc:
            store.find("-1")
        assert "description: -1" in str(exc.value)


class TestRemove:
    def test_by_index_renumbers(self, store: ItemStore):
        index, item = store.remove("0")
        assert (index, item.text) == (0, "Buy milk")
        assert store.show() == ["0 [ ] Walk dog", "1 [ ] Write report"]

    def test_by_text(self, store: ItemStore):
        index, item = store.remove("write report")
        assert index == 2
        assert item.text == "Write report"
        assert len(store) == 2

    def test_removes_only_first_match(self, store: ItemStore):
        store.add("Buy milk")
        store.remove("buy milk")
        assert [i.text for i in store.items] == ["Walk dog", "Write report", "Buy milk"]

    def test_not_found_leaves_store_unchanged(self, store: ItemStore, path: Path):
        before = store.items
        with pytest.raises(NotFoundError):
            store.remove("Feed cat")
        with pytest.raises(NotFoundError):
            store.remove("17")
        assert store.items == before
        assert not store.dirty

    def test_empty_store(self, path: Path):
        s = ItemStore(path)
        for selector in ["0", "anything"]:
            with pytest.raises(NotFoundError):
                s.remove(selector)


class TestUpdate:
    def test_replaces_text_in_place(self, store: ItemStore):
        index, item = store.update("walk dog", "Walk the dog")
        assert index == 1
        assert [i.text for i in store.items] == ["Buy milk", "Walk the dog", "Write report"]

    def test_by_index(self, store: ItemStore):
        store.update("2", "Send report")
        assert store.items[2].text == "Send report"

    def test_without_text_toggles_done(self, store: ItemStore):
        _, item = store.update("0")
        assert item.done is True
        assert item.text == "Buy milk"
        _, item = store.update("0")
        assert item.done is False

    def test_not_found(self, store: ItemStore):
        before = store.items
        with pytest.raises(NotFoundError):
            store.update("Feed cat", "Feed the cat")
        assert store.items == before

    def test_blank_text_rejected(self, store: ItemStore):
        with pytest.raises(ValueError):
            store.update("0", "  ")
        assert store.items[0].text == "Buy milk"
        assert not store.dirty

    def test_empty_store(self, path: Path):
        with pytest.raises(NotFoundError):
            ItemStore(path).update("0", "x")


class TestSave:
    @pytest.mark.parametrize("name", ["todo.json", "todo.csv", "todo.md"])
    def test_round_trip(self, tmp_path: Path, name: str):
        path = tmp_path / name
        s = ItemStore(path)
        s.add("Buy milk, eggs")
        s.add("Ünïcode ✓")
        s.add("Walk dog")
        s.update("2")
        s.save()
        assert ItemStore(path).items == s.items

    @pytest.mark.parametrize("name", ["todo.json", "todo.csv"])
    def test_round_trip_line_breaks(self, tmp_path: Path, name: str):
        path = tmp_path / name
        s = ItemStore(path)
        s.add("x\ry")
        s.add("a\nb")
        s.add("c\r\nd")
        s.save()
        assert ItemStore(path).items == (Item("x\ry"), Item("a\nb"), Item("c\r\nd"))

    def test_markdown_keeps_padded_text(self, tmp_path: Path):
        path = tmp_path / "todo.md"
        s = ItemStore(path)
        s.add("a")
        s.add("b  ")
        s.save()
        assert ItemStore(path).items == (Item("a"), Item("b"))

    def test_creates_parent_directory(self, tmp_path: Path):
        path = tmp_path / "nested" / "dir" / "todo.json"
        s = ItemStore(path)
        s.add("x")
        assert s.save() is True
        assert path.exists()

    def test_save_clears_dirty(self, store: ItemStore):
        store.add("x")
        assert store.save() is True
        assert store.save() is False

    def test_unwritable(self, tmp_path: Path):
        # Parent "directory" is a regular file
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        s = ItemStore(blocker / "todo.json")
        s.add("x")
        with pytest.raises(FileAccessError):
            s.save()
