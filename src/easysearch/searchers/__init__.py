"""Searcher layer — Pluggable backends that execute searches.

Built-in searchers:
  - minimongo: in-process collections of dict documents (mongo-style selectors)
  - elastic-search: Elasticsearch / OpenSearch over the REST API

Implement ``SearchBackend`` (or pass a mapping of four callables to
``create_searcher``) to plug in your own engine.
"""
