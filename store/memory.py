"""
In-memory backing store for local runs and tests.
"""

import copy
import logging
from typing import List, Dict, Any, Optional

from .base import DataStore, StoreError

logger = logging.getLogger(__name__)


class InMemoryStore(DataStore):
    """Tables held as lists of row dicts, keyed by ``id``."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }

    def fetch(self, table: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.tables.get(table, []))

    def update(self, table: str, fields: Dict[str, Any], record_id: str) -> Dict[str, Any]:
        for row in self.tables.get(table, []):
            if str(row.get("id")) == str(record_id):
                row.update(fields)
                logger.debug(f"Updated {table}/{record_id}: {sorted(fields)}")
                return dict(row)

        raise StoreError(f"No row with id {record_id} in {table}", table=table, record_id=record_id)

    def insert(self, table: str, row: Dict[str, Any]):
        """Add a row to a table (used for seeding)."""
        self.tables.setdefault(table, []).append(dict(row))
