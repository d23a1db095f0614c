"""Core registry and dispatch layer."""
