"""Collate descriptors into collection and item sequences."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from .discovery import CollectionFound, ItemFound, LayoutScanner, scanner_for_layout
from .errors import (
    DanglingCollectionReferenceError,
    DuplicateCollectionError,
    UnknownTagError,
)
from .loader import DEFAULT_ARTIFACT_EXTENSION, MetadataLoader
from .models import CollationRequest, CollationResult, Collection, Item

LOGGER = logging.getLogger(__name__)


class Collator:
    """Discover a collection tree, load every descriptor, and cross-check tags."""

    def __init__(self, loader: MetadataLoader, scanner: LayoutScanner) -> None:
        self.loader = loader
        self.scanner = scanner

    def collate(self, root_directory: Path) -> CollationResult:
        """Collate the tree under root_directory.

        Collections and items are returned in discovery order. The first error
        raised while walking, loading, or validating aborts the whole run.

        Args:
            root_directory: Directory holding the collection tree.

        Returns:
            CollationResult: Validated collections and items.

        Raises:
            CollationError: On the first problem found.
        """
        collections: List[Collection] = []
        items: List[Item] = []
        index: Dict[str, Collection] = {}

        for event in self.scanner.scan(root_directory):
            if isinstance(event, CollectionFound):
                collection = self.loader.load_collection(event.directory, event.descriptor_path)
                if collection.identifier in index:
                    raise DuplicateCollectionError(
                        f"Collection '{collection.identifier}' is defined more than once "
                        f"(again at '{event.directory}')",
                        collection_id=collection.identifier,
                    )
                collections.append(collection)
                index[collection.identifier] = collection
            elif isinstance(event, ItemFound):
                item = self.loader.load_item(event.collection_directory, event.descriptor_name)
                items.append(
                    item.model_copy(
                        update={"collection_reference": event.collection_directory.name}
                    )
                )

        for item in items:
            self._validate_item(item, index)

        LOGGER.info(
            "Collated %d collection(s) and %d item(s) from %s",
            len(collections),
            len(items),
            root_directory,
        )
        return CollationResult(collections=collections, items=items)

    def _validate_item(self, item: Item, index: Dict[str, Collection]) -> None:
        reference = item.collection_reference
        collection = index.get(reference) if reference is not None else None
        if collection is None:
            raise DanglingCollectionReferenceError(
                f"did not find collection-level metadata for '{item.identifier}'",
                item_id=item.identifier,
                collection_id=reference,
            )

        for tag in item.tags:
            if tag not in collection.vocabulary:
                raise UnknownTagError(
                    f"did not find listing for '{tag}' in '{item.identifier}'",
                    item_id=item.identifier,
                    collection_id=collection.identifier,
                    tag=tag,
                )


def collate_tree(
    request: CollationRequest,
    *,
    artifact_extension: str = DEFAULT_ARTIFACT_EXTENSION,
) -> CollationResult:
    """Collate the tree described by a request using its layout."""
    collator = Collator(
        MetadataLoader(artifact_extension=artifact_extension),
        scanner_for_layout(request.layout),
    )
    return collator.collate(request.root_directory)


__all__ = ["Collator", "collate_tree"]
