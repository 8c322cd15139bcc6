"""Tests for layout discovery scanners."""

from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from gifdex.collation import (
    CollectionFound,
    DescriptorNotFoundError,
    DescriptorReadError,
    ItemFound,
    NestedLayoutScanner,
    SiblingLayoutScanner,
    scanner_for_layout,
)


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}", encoding="utf-8")


def test_sibling_scanner_reports_collections_and_items(tmp_path: Path) -> None:
    _touch(tmp_path / "ABC.json")
    _touch(tmp_path / "ABC" / "one.json")
    _touch(tmp_path / "ABC" / "two.json")
    _touch(tmp_path / "ABC" / "one.gif")
    _touch(tmp_path / "XYZ.json")
    (tmp_path / "XYZ").mkdir()

    events = list(SiblingLayoutScanner().scan(tmp_path))

    collections = [event for event in events if isinstance(event, CollectionFound)]
    items = [event for event in events if isinstance(event, ItemFound)]

    assert sorted(event.directory.name for event in collections) == ["ABC", "XYZ"]
    abc = next(event for event in collections if event.directory.name == "ABC")
    assert abc.descriptor_path == tmp_path / "ABC.json"
    assert sorted(event.descriptor_name for event in items) == ["one.json", "two.json"]
    assert all(event.collection_directory == tmp_path / "ABC" for event in items)


def test_sibling_scanner_ignores_top_level_descriptors(tmp_path: Path) -> None:
    _touch(tmp_path / "stray.json")

    assert list(SiblingLayoutScanner().scan(tmp_path)) == []


def test_sibling_scanner_recurses(tmp_path: Path) -> None:
    _touch(tmp_path / "ABC" / "Season1" / "one.json")

    events = list(SiblingLayoutScanner().scan(tmp_path))

    directories = [event.directory for event in events if isinstance(event, CollectionFound)]
    assert directories == [tmp_path / "ABC", tmp_path / "ABC" / "Season1"]
    items = [event for event in events if isinstance(event, ItemFound)]
    assert items == [ItemFound(tmp_path / "ABC" / "Season1", "one.json")]


def test_sibling_scanner_yields_collection_before_its_items(tmp_path: Path) -> None:
    _touch(tmp_path / "ABC" / "one.json")

    events = list(SiblingLayoutScanner().scan(tmp_path))

    assert isinstance(events[0], CollectionFound)
    assert isinstance(events[1], ItemFound)


def test_nested_scanner_reads_one_level(tmp_path: Path) -> None:
    _touch(tmp_path / "ABC" / "ABC.json")
    _touch(tmp_path / "ABC" / "one.json")
    _touch(tmp_path / "ABC" / "deeper" / "ignored.json")
    _touch(tmp_path / "notes.json")

    events = list(NestedLayoutScanner().scan(tmp_path))

    assert events == [
        CollectionFound(tmp_path / "ABC", tmp_path / "ABC" / "ABC.json"),
        ItemFound(tmp_path / "ABC", "one.json"),
    ]


def test_scanners_reject_missing_root(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(DescriptorNotFoundError):
        list(SiblingLayoutScanner().scan(missing))
    with pytest.raises(DescriptorNotFoundError):
        list(NestedLayoutScanner().scan(missing))


def test_scanner_for_layout() -> None:
    assert isinstance(scanner_for_layout("sibling"), SiblingLayoutScanner)
    assert isinstance(scanner_for_layout("nested"), NestedLayoutScanner)
    with pytest.raises(ValueError):
        scanner_for_layout("flat")


def _deny(path: Path) -> PermissionError:
    return PermissionError(errno.EACCES, "Permission denied", str(path))


def test_sibling_scanner_unlistable_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    locked = tmp_path / "ABC" / "Locked"
    locked.mkdir(parents=True)
    real_scandir = os.scandir

    def _scandir(path):
        if Path(path) == locked:
            raise _deny(locked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", _scandir)

    with pytest.raises(DescriptorReadError) as excinfo:
        list(SiblingLayoutScanner().scan(tmp_path))

    assert excinfo.value.path == locked
    assert "Permission denied" in str(excinfo.value)


def test_nested_scanner_unlistable_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    locked = tmp_path / "Locked"
    locked.mkdir()
    real_iterdir = Path.iterdir

    def _iterdir(self: Path):
        if self == locked:
            raise _deny(locked)
        return real_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", _iterdir)

    with pytest.raises(DescriptorReadError) as excinfo:
        list(NestedLayoutScanner().scan(tmp_path))

    assert excinfo.value.path == locked
