"""EasySearch — Pluggable search-index registry.

Declare named indexes with per-index configuration and dispatch searches to
interchangeable searcher backends registered at runtime.
"""

from easysearch.core.easy_search import EasySearch, create_easy_search
from easysearch.models.index import IndexConfiguration
from easysearch.models.result import SearchResult

__version__ = "0.1.0"

__all__ = ["EasySearch", "IndexConfiguration", "SearchResult", "__version__", "create_easy_search"]
