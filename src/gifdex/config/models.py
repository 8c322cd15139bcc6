"""Configuration models describing gifdex settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GifdexBaseModel(BaseModel):
    """Shared configuration for gifdex settings models."""

    model_config = ConfigDict(extra="forbid")


class CollationOptions(GifdexBaseModel):
    """Options controlling how a collection tree is read.

    Attributes:
        layout: Directory layout used when none is given on the command line.
        artifact_extension: Extension of the artifact paired with each item descriptor.
    """

    layout: Literal["sibling", "nested"] = "sibling"
    artifact_extension: str = ".gif"

    @field_validator("artifact_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if len(value) < 2 or not value.startswith(".") or "/" in value:
            raise ValueError("artifact_extension must look like '.gif'")
        return value


class OutputOptions(GifdexBaseModel):
    """Manifest output settings.

    Attributes:
        collections_filename: File name of the collections manifest.
        items_filename: File name of the items manifest.
        indent: Indentation width of the pretty-printed manifests.
    """

    collections_filename: str = "shows.json"
    items_filename: str = "gifs.json"
    indent: int = Field(default=4, ge=0)


class LoggingSettings(GifdexBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class GifdexConfig(GifdexBaseModel):
    """Top-level configuration struct for gifdex.

    Attributes:
        collation: Tree discovery and loading settings.
        output: Manifest output settings.
        logging: Logging configuration.
    """

    collation: CollationOptions = Field(default_factory=CollationOptions)
    output: OutputOptions = Field(default_factory=OutputOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "GifdexBaseModel",
    "CollationOptions",
    "OutputOptions",
    "LoggingSettings",
    "GifdexConfig",
]
