"""Persistence layer: table definitions and the entity store."""

from .entity_store import EntityStore

__all__ = ["EntityStore"]
