"""Persistence collaborators for generated universes."""

from .base import InMemoryUniverseStore, UniverseStore
from .sqlite import SqliteUniverseStore

__all__ = ["InMemoryUniverseStore", "SqliteUniverseStore", "UniverseStore"]
