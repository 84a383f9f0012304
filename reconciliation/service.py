"""
Stateful collections worklist backed by the database and the completion cache.
"""

import logging
import threading
from datetime import date
from typing import List, Optional, Tuple

from models import User, CollectionRecord, CollectionStats, CollectionStatus, CollectionType
from store import DataStore, DataSnapshot, StoreError, load_snapshot
from .completion_cache import CompletionCache
from .reconciler import (
    ALL,
    derive_collections,
    filter_collections,
    compute_stats,
    require_access,
    audit_note,
    format_currency,
)

logger = logging.getLogger(__name__)

# Order column zeroed for each collection type
BALANCE_COLUMNS = {
    CollectionType.CREDIT: "creditbalance",
    CollectionType.CHEQUE: "chequebalance",
}


class CollectionNotFoundError(KeyError):
    """Raised when a collection id is not in the current worklist."""


class RecognitionError(Exception):
    """Raised when a collection could not be recognized."""

    def __init__(self, message: str = "Failed to recognize collection. Please try again."):
        super().__init__(message)


class AlreadyRecognizedError(RecognitionError):
    """Raised when recognizing a collection that is already complete."""


class CollectionsService:
    """
    Collections worklist for privileged users.

    The worklist is rebuilt from scratch on every refresh. Recognition writes
    the order update, then the customer update, then the cache entry, flips
    the record locally and reloads. Writes already applied are not rolled
    back when a later step fails.

    One instance is shared by concurrent requests; callers hold ``lock``
    across a refresh and whatever reads or recognizes against it.
    """

    def __init__(self, store: DataStore, cache: Optional[CompletionCache] = None):
        self.store = store
        self.cache = cache or CompletionCache()
        self.snapshot = DataSnapshot()
        self.records: List[CollectionRecord] = []
        self.lock = threading.RLock()

    def refresh(self, current_user: User, today: Optional[date] = None) -> List[CollectionRecord]:
        """Reload orders, customers and users, then re-derive the worklist."""
        require_access(current_user)

        with self.lock:
            self.snapshot = load_snapshot(self.store)
            self.records = derive_collections(
                self.snapshot.orders,
                self.snapshot.customers,
                self.snapshot.users,
                current_user=current_user,
                completed_ids=self.cache.load(),
                today=today,
            )
            return self.records

    def worklist(
        self,
        current_user: User,
        status: str = ALL,
        collection_type: str = ALL,
        today: Optional[date] = None,
    ) -> Tuple[List[CollectionRecord], CollectionStats]:
        """Refresh and return the filtered view with its stats, atomically."""
        with self.lock:
            self.refresh(current_user, today=today)
            records = self.list(status, collection_type)
            return records, compute_stats(records)

    def list(self, status: str = ALL, collection_type: str = ALL) -> List[CollectionRecord]:
        return filter_collections(self.records, status, collection_type)

    def stats(self, status: str = ALL, collection_type: str = ALL):
        return compute_stats(self.list(status, collection_type))

    def get(self, collection_id: str) -> CollectionRecord:
        for record in self.records:
            if record.id == collection_id:
                return record
        raise CollectionNotFoundError(collection_id)

    def recognize(
        self,
        collection_id: str,
        actor: User,
        notes: str = "",
        today: Optional[date] = None,
    ) -> CollectionRecord:
        """
        Recognize a pending collection as collected.

        Args:
            collection_id: Id of a record in the current worklist
            actor: User performing the recognition
            notes: Optional verification notes

        Returns:
            The record as flipped to complete before the reload
        """
        with self.lock:
            require_access(actor)

            record = self.get(collection_id)
            if not record.is_pending:
                raise AlreadyRecognizedError(f"Collection {collection_id} is already complete")

            order_fields = {
                "notes": audit_note(record, actor.name, notes),
                BALANCE_COLUMNS[record.collection_type]: 0,
            }

            try:
                self.store.update("orders", order_fields, record.order_id)

                customer = next((c for c in self.snapshot.customers if c.id == record.customer_id), None)
                if customer is not None:
                    new_balance = max(0, (customer.outstanding_balance or 0) - record.amount)
                    self.store.update("customers", {"outstandingbalance": new_balance}, customer.id)
            except StoreError as e:
                logger.error(f"Error recognizing collection {collection_id}: {e}")
                raise RecognitionError() from e

            self.cache.add(record.id)

            completed = record.model_copy(update={"status": CollectionStatus.COMPLETE, "notes": notes})
            self.records = [completed if r.id == record.id else r for r in self.records]

            logger.info(
                f"{record.collection_type.value.upper()} collection of {format_currency(record.amount)} "
                f"recognized by {actor.name} ({collection_id})"
            )

            try:
                self.refresh(actor, today=today)
            except StoreError as e:
                logger.error(f"Reload after recognizing {collection_id} failed: {e}")
                raise RecognitionError() from e

            return completed
