"""Data models shared by the registry and the searchers."""
