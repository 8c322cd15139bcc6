"""Collection and item data models."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Layout = Literal["sibling", "nested"]


class CollectionDescriptor(BaseModel):
    """Fields a collection descriptor is allowed to supply.

    Attributes:
        display_name: Human-readable collection name.
        vocabulary: Mapping of valid tag keys to display labels.
    """

    display_name: str = ""
    vocabulary: Dict[str, str] = Field(default_factory=dict)


class ItemDescriptor(BaseModel):
    """Fields an item descriptor is allowed to supply.

    Attributes:
        tags: Vocabulary keys referenced by the item.
        attributes: Free-form labels attached to the item.
        resource_locator: URL pointing at the item.
    """

    tags: List[str] = Field(default_factory=list)
    attributes: List[str] = Field(default_factory=list)
    resource_locator: str = ""


class Collection(BaseModel):
    """A top-level grouping of items with a closed tag vocabulary.

    Attributes:
        identifier: Base name of the collection directory.
        display_name: Human-readable collection name.
        vocabulary: Mapping of valid tag keys to display labels.
    """

    identifier: str
    display_name: str = ""
    vocabulary: Dict[str, str] = Field(default_factory=dict)


class Item(BaseModel):
    """A single artifact belonging to a collection.

    Attributes:
        identifier: URL-shaped key of the form ``collection/artifact``.
        collection_reference: Identifier of the owning collection.
        tags: Vocabulary keys referenced by the item.
        attributes: Free-form labels attached to the item.
        resource_locator: URL pointing at the item.
    """

    identifier: str
    collection_reference: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    attributes: List[str] = Field(default_factory=list)
    resource_locator: str = ""


class CollationResult(BaseModel):
    """Collections and items gathered by a single collation pass."""

    collections: List[Collection] = Field(default_factory=list)
    items: List[Item] = Field(default_factory=list)

    @property
    def collection_count(self) -> int:
        return len(self.collections)

    @property
    def item_count(self) -> int:
        return len(self.items)


class CollationRequest(BaseModel):
    """Inputs describing one collation run.

    Attributes:
        root_directory: Directory holding the collection tree.
        output_directory: Directory receiving the manifests.
        layout: Directory layout convention of the tree.
        dry_run: Validate without writing manifests.
    """

    root_directory: Path
    output_directory: Path = Path(".")
    layout: Layout = "sibling"
    dry_run: bool = False


__all__ = [
    "Layout",
    "CollectionDescriptor",
    "ItemDescriptor",
    "Collection",
    "Item",
    "CollationResult",
    "CollationRequest",
]
