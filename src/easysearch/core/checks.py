"""Input assertions used at the public API boundary.

``check`` validates a value against a type expression in pydantic strict mode
and turns a failed validation into ``TypeConstraintViolation``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from easysearch.core.errors import TypeConstraintViolation

# Commonly checked type expressions
Record = Mapping[str, Any]
OptionalRecord = Mapping[str, Any] | None
OptionalFunction = Callable[..., Any] | None


@lru_cache(maxsize=32)
def _adapter(expected: Any) -> TypeAdapter[Any]:
    return TypeAdapter(expected)


def check(value: Any, expected: Any, name: str = "value") -> None:
    """Assert that ``value`` matches the type expression ``expected``.

    Args:
        value: The value to validate.
        expected: A type or typing expression (e.g. ``str``, ``Record``).
        name: Argument name used in the error message.

    Raises:
        TypeConstraintViolation: If the value does not match.
    """
    try:
        _adapter(expected).validate_python(value, strict=True)
    except ValidationError as e:
        raise TypeConstraintViolation(
            f"Invalid '{name}': expected {_describe(expected)}, got {type(value).__name__}"
        ) from e


def _describe(expected: Any) -> str:
    return getattr(expected, "__name__", None) or str(expected)
