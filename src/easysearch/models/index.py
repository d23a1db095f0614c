"""Index configuration model — An open record over a few well-known fields.

A configuration is composed from three layers (later layers win key by key):
  1. Registry defaults (format, limit, searcher kind, strategy defaults)
  2. Options passed to ``create_search_index``
  3. Options passed to ``search``

Unknown keys pass through untouched and are readable through ``option()`` and
``to_options()``. The ``sort``, ``permission`` and ``query`` entries hold
strategies: ``UseSearcherDefault`` resolves through the searcher registered
for the configuration's ``use`` kind at call time; a caller-supplied callable
or static value replaces it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

if TYPE_CHECKING:
    from easysearch.searchers.base.registry import SearcherRegistry


class UseSearcherDefault:
    """Strategy placeholder: delegate to the searcher's default builder."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UseSearcherDefault)

    def __hash__(self) -> int:
        return hash(UseSearcherDefault)

    def __repr__(self) -> str:
        return "UseSearcherDefault()"


def allow_all(search_string: str) -> bool:
    """Default permission predicate."""
    return True


def normalize_fields(value: Any) -> list[Any]:
    """Wrap a scalar field identifier into a list; copy sequences."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class IndexConfiguration(BaseModel):
    """Merged configuration of a named search index.

    Searchers receive a configuration per call and must not assume it is
    persisted or shared.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    name: str = Field(description="Index name, unique within a registry")
    field: list[Any] = Field(default_factory=list, description="Fields to search over")
    format: Any = Field(default="mongo", description="Output shape selector, passed through to the searcher")
    limit: int = Field(default=10, ge=1, strict=True, description="Maximum number of results")
    use: str = Field(default="minimongo", description="Kind of the searcher responsible for this index")
    sort: Any = Field(default_factory=UseSearcherDefault, description="Sort strategy, callable(config) or value")
    permission: Any = Field(default=allow_all, description="Predicate (search_string) -> bool, or a bool")
    query: Any = Field(default_factory=UseSearcherDefault, description="Query builder (search_string), or value")

    _searchers: Any = PrivateAttr(default=None)

    @field_validator("field", mode="before")
    @classmethod
    def _wrap_scalar_field(cls, v: Any) -> list[Any]:
        return normalize_fields(v)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def merged(
        cls,
        *layers: Mapping[str, Any],
        searchers: SearcherRegistry | None = None,
    ) -> IndexConfiguration:
        """Build a configuration by shallow, right-biased union of ``layers``."""
        data: dict[str, Any] = {}
        for layer in layers:
            data.update(layer)
        config = cls.model_validate(data)
        config._searchers = searchers
        return config

    def option(self, key: str, default: Any = None) -> Any:
        """Read an option by key.

        Unlike attribute access, this also reaches pass-through keys that share
        a name with a model method (``copy``, ``json``, ...).
        """
        return self.to_options().get(key, default)

    def to_options(self) -> dict[str, Any]:
        """Return typed fields and pass-through keys as a flat dict.

        Values are not copied, so strategies and callables keep their identity.
        """
        options = {key: getattr(self, key) for key in type(self).model_fields}
        options.update(self.model_extra or {})
        return options

    # ── Strategy resolution ──────────────────────────────────────────────

    def is_permitted(self, search_string: str) -> bool:
        """Evaluate the permission predicate for ``search_string``."""
        if callable(self.permission):
            return bool(self.permission(search_string))
        return bool(self.permission)

    def build_query(self, search_string: str) -> Any:
        """Return the searcher-native query (or selector) for ``search_string``."""
        if isinstance(self.query, UseSearcherDefault):
            return self._searcher().default_query(self, search_string)
        if callable(self.query):
            return self.query(search_string)
        return self.query

    def build_sort(self) -> Any:
        """Return the searcher-native sort specification."""
        if isinstance(self.sort, UseSearcherDefault):
            return self._searcher().default_sort(self)
        if callable(self.sort):
            return self.sort(self)
        return self.sort

    def _searcher(self) -> Any:
        if self._searchers is None:
            raise RuntimeError(
                f"Index configuration '{self.name}' is not bound to a searcher registry; "
                "default query and sort strategies cannot be resolved."
            )
        return self._searchers.require(self.use)
