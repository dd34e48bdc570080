"""Typed exceptions raised while generating documentation."""

from __future__ import annotations

from typing import Any


class SchemaMdxError(Exception):
    """Base error carrying a message and structured context.

    ``details`` holds whatever helps locate the problem (source path,
    option name, offending value).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for reporting."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class SchemaParseError(SchemaMdxError):
    """Schema source is missing, unreadable or malformed."""


class ConfigurationError(SchemaMdxError):
    """A required option is missing or invalid."""
