"""
Backing store abstraction for the hosted database.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any

from pydantic import ValidationError

from models import (
    Order,
    Customer,
    User,
    Product,
    Supplier,
    DriverAllocation,
    DriverSale,
)

logger = logging.getLogger(__name__)


# Table name -> entity model
ENTITY_MODELS = {
    "orders": Order,
    "customers": Customer,
    "users": User,
    "products": Product,
    "suppliers": Supplier,
    "driver_allocations": DriverAllocation,
    "driver_sales": DriverSale,
}


class StoreError(Exception):
    """Raised when the backing store rejects or fails a request."""

    def __init__(self, message: str, table: str = "", record_id: str = ""):
        super().__init__(message)
        self.table = table
        self.record_id = record_id


class DataStore(ABC):
    """Minimal read/update interface over the dashboard tables."""

    @abstractmethod
    def fetch(self, table: str) -> List[Dict[str, Any]]:
        """Return every row of ``table``."""

    @abstractmethod
    def update(self, table: str, fields: Dict[str, Any], record_id: str) -> Dict[str, Any]:
        """Apply ``fields`` to the row whose id is ``record_id`` and return it."""


@dataclass
class DataSnapshot:
    """Orders, customers and users as loaded in one reload."""
    orders: List[Order] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    users: List[User] = field(default_factory=list)


def fetch_entities(store: DataStore, table: str) -> list:
    """Fetch a table and parse its rows into entity models."""
    if table not in ENTITY_MODELS:
        raise KeyError(f"Unknown table: {table}")

    model = ENTITY_MODELS[table]
    entities = []
    for row in store.fetch(table):
        try:
            entities.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {table} row {row.get('id')}: {e.error_count()} errors")
    return entities


def load_snapshot(store: DataStore) -> DataSnapshot:
    """Reload orders, customers and users from the authoritative store."""
    snapshot = DataSnapshot(
        orders=fetch_entities(store, "orders"),
        customers=fetch_entities(store, "customers"),
        users=fetch_entities(store, "users"),
    )
    logger.debug(
        f"Loaded snapshot: {len(snapshot.orders)} orders, "
        f"{len(snapshot.customers)} customers, {len(snapshot.users)} users"
    )
    return snapshot
