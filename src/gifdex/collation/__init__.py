"""Collation of collection and item descriptors."""

from .collator import Collator, collate_tree
from .discovery import (
    CollectionFound,
    ItemFound,
    NestedLayoutScanner,
    SiblingLayoutScanner,
    scanner_for_layout,
)
from .errors import (
    CollationError,
    DanglingCollectionReferenceError,
    DescriptorNotFoundError,
    DescriptorParseError,
    DescriptorReadError,
    DuplicateCollectionError,
    InvalidDescriptorNameError,
    MissingArtifactError,
    UnknownTagError,
)
from .loader import MetadataLoader
from .models import (
    CollationRequest,
    CollationResult,
    Collection,
    CollectionDescriptor,
    Item,
    ItemDescriptor,
)

__all__ = [
    "Collator",
    "collate_tree",
    "CollectionFound",
    "ItemFound",
    "NestedLayoutScanner",
    "SiblingLayoutScanner",
    "scanner_for_layout",
    "CollationError",
    "DanglingCollectionReferenceError",
    "DescriptorNotFoundError",
    "DescriptorParseError",
    "DescriptorReadError",
    "DuplicateCollectionError",
    "InvalidDescriptorNameError",
    "MissingArtifactError",
    "UnknownTagError",
    "MetadataLoader",
    "CollationRequest",
    "CollationResult",
    "Collection",
    "CollectionDescriptor",
    "Item",
    "ItemDescriptor",
]
