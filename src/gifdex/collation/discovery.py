"""Directory layout discovery for collection trees."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Protocol, Union

from .errors import DescriptorNotFoundError, DescriptorReadError
from .loader import DESCRIPTOR_SUFFIX, sibling_descriptor_path
from .models import Layout

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollectionFound:
    """A collection directory together with the descriptor that describes it."""

    directory: Path
    descriptor_path: Path


@dataclass(frozen=True, slots=True)
class ItemFound:
    """An item descriptor discovered inside a collection directory."""

    collection_directory: Path
    descriptor_name: str


DiscoveryEvent = Union[CollectionFound, ItemFound]


def _require_directory(root: Path) -> None:
    if not root.is_dir():
        raise DescriptorNotFoundError(f"Collection root '{root}' is not a directory", path=root)


def _listing_error(exc: OSError) -> DescriptorReadError:
    location = Path(exc.filename) if exc.filename else Path()
    return DescriptorReadError(f"Unable to list '{location}': {exc.strerror or exc}", path=location)


def _list_directory(directory: Path) -> List[Path]:
    try:
        return list(directory.iterdir())
    except OSError as exc:
        raise _listing_error(exc) from exc


class SiblingLayoutScanner:
    """Walk a tree where each collection descriptor sits beside its directory.

    ``root/Show.json`` describes ``root/Show/``; every ``*.json`` file inside a
    directory below ``root`` is an item of that directory. Descriptors directly
    in ``root`` are never reported as items.
    """

    layout: Layout = "sibling"

    def scan(self, root: Path) -> Iterator[DiscoveryEvent]:
        """Yield discovery events for the tree under root in listing order."""
        _require_directory(root)

        def _raise(exc: OSError) -> None:
            raise _listing_error(exc) from exc

        for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
            directory = Path(dirpath)
            if directory == root:
                skipped = [name for name in filenames if name.endswith(DESCRIPTOR_SUFFIX)]
                LOGGER.debug("Skipping %d top-level descriptor(s) in %s", len(skipped), root)
                continue

            yield CollectionFound(directory, sibling_descriptor_path(directory))
            for name in filenames:
                if name.endswith(DESCRIPTOR_SUFFIX):
                    yield ItemFound(directory, name)


class NestedLayoutScanner:
    """Scan a tree where each collection directory holds its own descriptor.

    ``root/Show/Show.json`` describes ``root/Show/``; the remaining ``*.json``
    files directly inside ``root/Show/`` are its items. Nothing deeper is read.
    """

    layout: Layout = "nested"

    def scan(self, root: Path) -> Iterator[DiscoveryEvent]:
        """Yield discovery events for the immediate subdirectories of root."""
        _require_directory(root)

        for entry in _list_directory(root):
            if not entry.is_dir():
                LOGGER.debug("Ignoring non-directory entry %s", entry)
                continue

            descriptor_name = entry.name + DESCRIPTOR_SUFFIX
            yield CollectionFound(entry, entry / descriptor_name)
            for child in _list_directory(entry):
                if child.name == descriptor_name or not child.name.endswith(DESCRIPTOR_SUFFIX):
                    continue
                if not child.is_file():
                    continue
                yield ItemFound(entry, child.name)


class LayoutScanner(Protocol):
    """Anything that turns a root directory into discovery events."""

    def scan(self, root: Path) -> Iterator[DiscoveryEvent]: ...


def scanner_for_layout(layout: str) -> LayoutScanner:
    """Return the scanner implementing the named layout.

    Raises:
        ValueError: If the layout name is not recognized.
    """
    if layout == "sibling":
        return SiblingLayoutScanner()
    if layout == "nested":
        return NestedLayoutScanner()
    raise ValueError(f"Unsupported layout '{layout}'; expected 'sibling' or 'nested'.")


__all__ = [
    "CollectionFound",
    "ItemFound",
    "DiscoveryEvent",
    "SiblingLayoutScanner",
    "NestedLayoutScanner",
    "LayoutScanner",
    "scanner_for_layout",
]
