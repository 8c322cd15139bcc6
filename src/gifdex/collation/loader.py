"""Load collection and item descriptors from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gifdex.validation import summarize_validation_error

from .errors import (
    DescriptorNotFoundError,
    DescriptorParseError,
    DescriptorReadError,
    InvalidDescriptorNameError,
    MissingArtifactError,
)
from .models import Collection, CollectionDescriptor, Item, ItemDescriptor

LOGGER = logging.getLogger(__name__)

DESCRIPTOR_SUFFIX = ".json"
DEFAULT_ARTIFACT_EXTENSION = ".gif"

_DescriptorT = TypeVar("_DescriptorT", bound=BaseModel)


def sibling_descriptor_path(directory: Path) -> Path:
    """Return the ``{directory}.json`` path placed next to a collection directory."""
    return directory.with_name(directory.name + DESCRIPTOR_SUFFIX)


class MetadataLoader:
    """Turn descriptor files into collection and item records."""

    def __init__(self, artifact_extension: str = DEFAULT_ARTIFACT_EXTENSION) -> None:
        self.artifact_extension = artifact_extension

    def load_collection(self, directory: Path, descriptor_path: Path | None = None) -> Collection:
        """Load the descriptor for a collection directory.

        Args:
            directory: The collection directory; its base name becomes the identifier.
            descriptor_path: Explicit descriptor location. Defaults to the sibling
                ``{directory}.json`` file.

        Returns:
            Collection: Collection record keyed by the directory name.

        Raises:
            DescriptorNotFoundError: If the descriptor file does not exist.
            DescriptorParseError: If the descriptor is malformed.
            DescriptorReadError: If the descriptor cannot be read.
        """
        path = descriptor_path if descriptor_path is not None else sibling_descriptor_path(directory)
        descriptor = self._read_descriptor(path, CollectionDescriptor, kind="collection")
        LOGGER.debug("Loaded collection descriptor %s", path)
        return Collection(
            identifier=directory.name,
            display_name=descriptor.display_name,
            vocabulary=descriptor.vocabulary,
        )

    def load_item(self, collection_directory: Path, descriptor_name: str) -> Item:
        """Load one item descriptor stored inside a collection directory.

        The owning collection is not recorded here; the caller stamps
        ``collection_reference`` once it knows which collection it is walking.

        Args:
            collection_directory: Directory containing the descriptor and artifact.
            descriptor_name: Base file name of the descriptor, e.g. ``foo.json``.

        Returns:
            Item: Item record with its derived identifier.

        Raises:
            InvalidDescriptorNameError: If the name has no stem before ``.json``.
            MissingArtifactError: If the companion artifact file is absent.
            DescriptorParseError: If the descriptor is malformed.
            DescriptorReadError: If the descriptor cannot be read.
        """
        stem = self._descriptor_stem(descriptor_name)
        path = collection_directory / descriptor_name
        descriptor = self._read_descriptor(path, ItemDescriptor, kind="item")

        artifact_name = stem + self.artifact_extension
        # URL component, always joined with "/".
        identifier = f"{collection_directory.name}/{artifact_name}"

        artifact_path = collection_directory / artifact_name
        if not artifact_path.exists():
            raise MissingArtifactError(
                f"Artifact for '{identifier}' should exist at '{artifact_path}'",
                path=artifact_path,
                item_id=identifier,
            )

        LOGGER.debug("Loaded item descriptor %s as %s", path, identifier)
        return Item(
            identifier=identifier,
            tags=descriptor.tags,
            attributes=descriptor.attributes,
            resource_locator=descriptor.resource_locator,
        )

    def _descriptor_stem(self, descriptor_name: str) -> str:
        if not descriptor_name.endswith(DESCRIPTOR_SUFFIX):
            raise InvalidDescriptorNameError(
                f"Item descriptor '{descriptor_name}' should end with '{DESCRIPTOR_SUFFIX}'",
                name=descriptor_name,
            )
        stem = descriptor_name[: -len(DESCRIPTOR_SUFFIX)]
        if not stem:
            raise InvalidDescriptorNameError(
                f"Item descriptor '{descriptor_name}' should contain a non-empty name "
                f"before '{DESCRIPTOR_SUFFIX}'",
                name=descriptor_name,
            )
        return stem

    def _read_descriptor(
        self, path: Path, model: Type[_DescriptorT], *, kind: str
    ) -> _DescriptorT:
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw: Any = json.load(handle)
        except FileNotFoundError as exc:
            raise DescriptorNotFoundError(
                f"No {kind} descriptor found at '{path}'", path=path
            ) from exc
        except json.JSONDecodeError as exc:
            raise DescriptorParseError(
                f"Invalid JSON in {kind} descriptor '{path}': {exc}", path=path
            ) from exc
        except UnicodeDecodeError as exc:
            raise DescriptorParseError(
                f"{kind.capitalize()} descriptor '{path}' is not valid UTF-8: {exc}", path=path
            ) from exc
        except OSError as exc:
            raise DescriptorReadError(
                f"Unable to read {kind} descriptor '{path}': {exc}", path=path
            ) from exc

        if not isinstance(raw, dict):
            raise DescriptorParseError(
                f"{kind.capitalize()} descriptor '{path}' must contain a JSON object", path=path
            )

        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise DescriptorParseError(
                f"Invalid {kind} descriptor '{path}': {summarize_validation_error(exc)}",
                path=path,
            ) from exc


__all__ = [
    "DESCRIPTOR_SUFFIX",
    "DEFAULT_ARTIFACT_EXTENSION",
    "MetadataLoader",
    "sibling_descriptor_path",
]
