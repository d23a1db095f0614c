"""Searcher Registry — Manages registration and lookup of searchers.

The registry maps a searcher kind (the ``use`` option of an index) to the
searcher that serves it. Searchers register once at startup; registering a
kind again replaces the previous searcher. There is no unregister operation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from easysearch.core.checks import check
from easysearch.core.errors import EasySearchError, TypeConstraintViolation
from easysearch.searchers.base.searcher import REQUIRED_METHODS, FunctionSearcher, SearchBackend

logger = logging.getLogger(__name__)


class UnknownBackendError(EasySearchError):
    """Raised when an index refers to a searcher kind that is not registered."""

    code = 500

    def __init__(self, kind: str, available: list[str] | None = None) -> None:
        self.kind = kind
        message = f"Couldn't search with the type: '{kind}'"
        if available is not None:
            message += f". Available searchers: {available}"
        super().__init__(message)


class SearcherRegistry:
    """Registry of searchers keyed by kind.

    Example:
        >>> registry = SearcherRegistry()
        >>> registry.create_searcher("minimongo", MemorySearcher())
        >>> registry.require("minimongo")
    """

    def __init__(self) -> None:
        self._searchers: dict[str, SearchBackend] = {}

    def create_searcher(self, kind: str, methods: SearchBackend | Mapping[str, Any]) -> None:
        """Register a searcher under ``kind``.

        Args:
            kind: Searcher kind, e.g. ``"minimongo"`` or ``"elastic-search"``.
            methods: A ``SearchBackend`` instance, or any object or mapping
                providing callable ``search``, ``create_search_index``,
                ``default_query`` and ``default_sort`` members.

        Raises:
            TypeConstraintViolation: If ``kind`` is not a string or a required
                member is missing or not callable.
        """
        check(kind, str, "kind")
        searcher = self._coerce(kind, methods)

        if kind in self._searchers:
            logger.warning("Overwriting existing searcher registration: %s", kind)
        self._searchers[kind] = searcher
        logger.info("Registered searcher: %s", kind)

    def get(self, kind: str) -> SearchBackend | None:
        """Return the searcher registered under ``kind``, or ``None``."""
        return self._searchers.get(kind)

    def require(self, kind: str) -> SearchBackend:
        """Return the searcher registered under ``kind``.

        Raises:
            UnknownBackendError: If no searcher is registered for ``kind``.
        """
        try:
            return self._searchers[kind]
        except KeyError:
            raise UnknownBackendError(kind, self.registered_searchers) from None

    def all(self) -> dict[str, SearchBackend]:
        """Return a shallow copy of the kind → searcher mapping."""
        return dict(self._searchers)

    def close_all(self) -> None:
        """Close every searcher that holds resources (has a ``close()`` method)."""
        for kind, searcher in self._searchers.items():
            close = getattr(searcher, "close", None)
            if not callable(close):
                continue
            try:
                close()
                logger.info("Closed searcher: %s", kind)
            except Exception:
                logger.warning("Error closing searcher: %s", kind, exc_info=True)

    @property
    def registered_searchers(self) -> list[str]:
        """List all registered searcher kinds."""
        return list(self._searchers.keys())

    def __contains__(self, kind: object) -> bool:
        return kind in self._searchers

    @staticmethod
    def _coerce(kind: str, methods: Any) -> SearchBackend:
        if isinstance(methods, Mapping):
            members = {method: methods.get(method) for method in REQUIRED_METHODS}
        else:
            members = {method: getattr(methods, method, None) for method in REQUIRED_METHODS}

        missing = [method for method, member in members.items() if not callable(member)]
        if missing:
            raise TypeConstraintViolation(
                f"Searcher '{kind}' must provide callable members: {', '.join(missing)}"
            )

        if isinstance(methods, SearchBackend):
            return methods
        return FunctionSearcher(**members)
