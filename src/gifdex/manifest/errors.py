"""Manifest persistence errors."""


class ManifestError(Exception):
    """Base exception for manifest read/write operations."""


class MissingManifestError(ManifestError):
    """Raised when an expected manifest file is absent."""
