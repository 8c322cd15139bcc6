"""Helpers for reporting pydantic validation failures."""

from __future__ import annotations

from pydantic import ValidationError


def summarize_validation_error(exc: ValidationError) -> str:
    """Collapse a ValidationError into ``loc: msg; loc: msg`` on a single line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(segment) for segment in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def one_line(text: str) -> str:
    """Join a multi-line message into one line."""
    return " ".join(text.split())
