"""Shared building blocks for the document models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class JsonEnum(str, Enum):
    """String enumeration stored in upper case and serialised in lower case."""

    def to_json(self) -> str:
        """Return the value as it appears in JSON documents."""
        return self.value.lower()

    @classmethod
    def from_json(cls, value: str) -> "JsonEnum":
        """Parse a JSON string value regardless of its case.

        Raises TypeError for non-string input and ValueError for unknown values.
        """
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__} expects a string, got {type(value).__name__}")
        return cls(value.upper())

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Return True if value is exactly one of the enumeration's values."""
        return any(value == member.value for member in cls)


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)