"""Errors raised by the registry layer."""

from __future__ import annotations


class EasySearchError(Exception):
    """Base exception for EasySearch errors."""


class TypeConstraintViolation(EasySearchError, TypeError):
    """Raised when caller input has the wrong shape or type."""


class IndexNotFoundError(EasySearchError):
    """Raised when searching an index that was never declared."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No search index declared with name '{name}'.")
