"""Top-level package for the gifdex metadata collator."""

from importlib import metadata as _metadata

from gifdex.collation import CollationRequest, CollationResult, Collator, collate_tree

__all__ = ["__version__", "CollationRequest", "CollationResult", "Collator", "collate_tree"]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("gifdex")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
