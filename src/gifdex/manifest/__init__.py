"""Manifest persistence for collated collections and items."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import BaseModel, ValidationError

from gifdex.collation.models import CollationResult, Collection, Item
from gifdex.validation import summarize_validation_error

from .errors import ManifestError, MissingManifestError

LOGGER = logging.getLogger(__name__)

DEFAULT_COLLECTIONS_FILENAME = "shows.json"
DEFAULT_ITEMS_FILENAME = "gifs.json"
DEFAULT_INDENT = 4


@dataclass(frozen=True, slots=True)
class ManifestPaths:
    """Locations of the two manifest files."""

    collections: Path
    items: Path


class ManifestRepository:
    """Write and read the collection and item manifests."""

    def __init__(
        self,
        collections_filename: str = DEFAULT_COLLECTIONS_FILENAME,
        items_filename: str = DEFAULT_ITEMS_FILENAME,
        indent: int = DEFAULT_INDENT,
    ) -> None:
        """Initialize the repository.

        Args:
            collections_filename: File name of the collections manifest.
            items_filename: File name of the items manifest.
            indent: Indentation width for the pretty-printed JSON.
        """
        self.collections_filename = collections_filename
        self.items_filename = items_filename
        self.indent = indent

    def paths(self, output_directory: Path) -> ManifestPaths:
        """Return the manifest paths inside output_directory."""
        return ManifestPaths(
            collections=output_directory / self.collections_filename,
            items=output_directory / self.items_filename,
        )

    def save(self, output_directory: Path, result: CollationResult) -> ManifestPaths:
        """Persist both manifests, replacing any existing files.

        Args:
            output_directory: Directory receiving the manifests; created if absent.
            result: Validated collation output.

        Returns:
            ManifestPaths: Paths of the written manifests.

        Raises:
            ManifestError: If the directory or files cannot be written.
        """
        paths = self.paths(output_directory)
        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ManifestError(
                f"Unable to create output directory '{output_directory}': {exc}"
            ) from exc

        self._write(paths.collections, result.collections)
        self._write(paths.items, result.items)
        LOGGER.info("Wrote manifests %s and %s", paths.collections, paths.items)
        return paths

    def load(self, output_directory: Path) -> CollationResult:
        """Read both manifests back from output_directory.

        Raises:
            MissingManifestError: If either manifest is absent.
            ManifestError: If a manifest cannot be parsed.
        """
        paths = self.paths(output_directory)
        collection_data = self._read(paths.collections)
        item_data = self._read(paths.items)
        try:
            return CollationResult(
                collections=[Collection.model_validate(entry) for entry in collection_data],
                items=[Item.model_validate(entry) for entry in item_data],
            )
        except ValidationError as exc:
            raise ManifestError(
                f"Invalid manifest records in '{output_directory}': "
                f"{summarize_validation_error(exc)}"
            ) from exc

    def _write(self, path: Path, records: Sequence[BaseModel]) -> None:
        payload = [record.model_dump(mode="json") for record in records]
        try:
            path.write_text(json.dumps(payload, indent=self.indent), encoding="utf-8")
        except OSError as exc:
            raise ManifestError(f"Unable to write manifest '{path}': {exc}") from exc

    def _read(self, path: Path) -> List[Any]:
        if not path.exists():
            raise MissingManifestError(f"No manifest found at {path}")
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Invalid manifest data in '{path}': {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ManifestError(f"Manifest '{path}' is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise ManifestError(f"Unable to read manifest '{path}': {exc}") from exc
        if not isinstance(data, list):
            raise ManifestError(f"Manifest '{path}' must contain a JSON array")
        return data


__all__ = [
    "DEFAULT_COLLECTIONS_FILENAME",
    "DEFAULT_ITEMS_FILENAME",
    "DEFAULT_INDENT",
    "ManifestPaths",
    "ManifestRepository",
    "ManifestError",
    "MissingManifestError",
]
