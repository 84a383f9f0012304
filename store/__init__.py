"""Backing store access for dashboard data."""

from .base import (
    DataStore,
    DataSnapshot,
    StoreError,
    ENTITY_MODELS,
    fetch_entities,
    load_snapshot,
)
from .memory import InMemoryStore
from .rest import RestStore

__all__ = [
    "DataStore",
    "DataSnapshot",
    "StoreError",
    "ENTITY_MODELS",
    "fetch_entities",
    "load_snapshot",
    "InMemoryStore",
    "RestStore",
]
