"""Errors raised while turning types into schemas."""

from __future__ import annotations


class SchemaReflectionError(Exception):
    """Base class for failures of one reflection call."""


class UnsupportedTypeError(SchemaReflectionError):
    """Raised when a type has no JSON Schema mapping."""

    def __init__(self, type_label: str, reason: str | None = None) -> None:
        message = f"Unsupported type: {type_label}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.type_label = type_label


class CyclicTypeError(SchemaReflectionError):
    """Raised when a type graph cannot be reflected in finite depth."""


class OverrideTargetInvalid(Exception):
    """Describes a rejected override registration."""
