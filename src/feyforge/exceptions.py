"""
Exception hierarchy for the FeyForge character engine.

The stat calculators themselves never raise: they degrade missing data to
documented defaults. Exceptions are reserved for configuration problems and
for sheet-tracking operations that cannot be applied to a character.
"""

from __future__ import annotations

from typing import Any


class FeyforgeError(Exception):
    """Base exception for all FeyForge errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(FeyforgeError):
    """Invalid rules configuration (bad environment value, unknown policy)."""
    pass


class CharacterStateError(FeyforgeError):
    """A tracking or progression operation cannot be applied to a character.

    Raised for unknown property ids, out-of-range hit die pools and
    negative amounts.
    """

    def __init__(
        self,
        message: str,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.character_id = character_id


__all__ = [
    "FeyforgeError",
    "ConfigError",
    "CharacterStateError",
]
