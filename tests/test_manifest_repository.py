"""Manifest repository tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gifdex.collation.models import CollationResult, Collection, Item
from gifdex.manifest import ManifestError, ManifestRepository, MissingManifestError


def _result() -> CollationResult:
    return CollationResult(
        collections=[
            Collection(identifier="ABC", display_name="A", vocabulary={"alice": "Alice"}),
        ],
        items=[
            Item(
                identifier="ABC/one.gif",
                collection_reference="ABC",
                tags=["alice"],
                attributes=["happy"],
                resource_locator="http://x",
            )
        ],
    )


def test_save_writes_pretty_manifests(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "out"

    paths = ManifestRepository().save(output, _result())

    assert paths.collections == output / "shows.json"
    assert paths.items == output / "gifs.json"
    text = paths.items.read_text(encoding="utf-8")
    assert text.startswith("[\n    {\n")
    records = json.loads(text)
    assert list(records[0].keys()) == [
        "identifier",
        "collection_reference",
        "tags",
        "attributes",
        "resource_locator",
    ]
    shows = json.loads(paths.collections.read_text(encoding="utf-8"))
    assert shows == [{"identifier": "ABC", "display_name": "A", "vocabulary": {"alice": "Alice"}}]


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    repo = ManifestRepository(collections_filename="c.json", items_filename="i.json", indent=2)
    result = _result()

    repo.save(tmp_path, result)
    loaded = repo.load(tmp_path)

    assert loaded == result


def test_save_overwrites_existing_manifest(tmp_path: Path) -> None:
    (tmp_path / "gifs.json").write_text("stale", encoding="utf-8")

    ManifestRepository().save(tmp_path, CollationResult())

    assert json.loads((tmp_path / "gifs.json").read_text(encoding="utf-8")) == []


def test_load_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingManifestError):
        ManifestRepository().load(tmp_path)


def test_load_invalid_manifest_raises(tmp_path: Path) -> None:
    (tmp_path / "shows.json").write_text("{}", encoding="utf-8")
    (tmp_path / "gifs.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ManifestError):
        ManifestRepository().load(tmp_path)


def test_load_unreadable_manifest_raises(tmp_path: Path) -> None:
    (tmp_path / "shows.json").mkdir()
    (tmp_path / "gifs.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ManifestError) as excinfo:
        ManifestRepository().load(tmp_path)

    assert not isinstance(excinfo.value, MissingManifestError)


def test_load_non_utf8_manifest_raises(tmp_path: Path) -> None:
    (tmp_path / "shows.json").write_bytes(b'["\xff"]')
    (tmp_path / "gifs.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ManifestError):
        ManifestRepository().load(tmp_path)


def test_load_invalid_records_message_is_single_line(tmp_path: Path) -> None:
    (tmp_path / "shows.json").write_text('[{"display_name": "A"}]', encoding="utf-8")
    (tmp_path / "gifs.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ManifestError) as excinfo:
        ManifestRepository().load(tmp_path)

    assert "identifier" in str(excinfo.value)
    assert "\n" not in str(excinfo.value)
