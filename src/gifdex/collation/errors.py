"""Collation errors."""

from __future__ import annotations

from pathlib import Path


class CollationError(Exception):
    """Base exception for collation failures."""


class DescriptorNotFoundError(CollationError):
    """Raised when an expected descriptor file or directory is missing."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class MissingArtifactError(DescriptorNotFoundError):
    """Raised when an item descriptor has no companion artifact file."""

    def __init__(self, message: str, *, path: Path, item_id: str) -> None:
        super().__init__(message, path=path)
        self.item_id = item_id


class DescriptorReadError(CollationError):
    """Raised when a descriptor exists but cannot be read."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class DescriptorParseError(CollationError):
    """Raised when a descriptor is not valid JSON or has the wrong shape."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class InvalidDescriptorNameError(CollationError):
    """Raised when an item descriptor name has no usable stem."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class DuplicateCollectionError(CollationError):
    """Raised when two directories resolve to the same collection identifier."""

    def __init__(self, message: str, *, collection_id: str) -> None:
        super().__init__(message)
        self.collection_id = collection_id


class DanglingCollectionReferenceError(CollationError):
    """Raised when an item points at a collection that was never loaded."""

    def __init__(self, message: str, *, item_id: str, collection_id: str | None) -> None:
        super().__init__(message)
        self.item_id = item_id
        self.collection_id = collection_id


class UnknownTagError(CollationError):
    """Raised when an item tag is absent from its collection vocabulary."""

    def __init__(self, message: str, *, item_id: str, collection_id: str, tag: str) -> None:
        super().__init__(message)
        self.item_id = item_id
        self.collection_id = collection_id
        self.tag = tag


__all__ = [
    "CollationError",
    "DescriptorNotFoundError",
    "MissingArtifactError",
    "DescriptorReadError",
    "DescriptorParseError",
    "InvalidDescriptorNameError",
    "DuplicateCollectionError",
    "DanglingCollectionReferenceError",
    "UnknownTagError",
]
