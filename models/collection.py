"""
Data models for the collections worklist.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field
from enum import Enum


class CollectionType(str, Enum):
    """Kind of outstanding balance carried on an order."""
    CREDIT = "credit"
    CHEQUE = "cheque"


class CollectionStatus(str, Enum):
    """Recognition status. Transitions only pending -> complete."""
    PENDING = "pending"
    COMPLETE = "complete"


class CollectionRecord(BaseModel):
    """An outstanding credit or cheque balance derived from an order."""

    id: str
    order_id: str
    customer_id: str
    customer_name: str
    collection_type: CollectionType
    amount: float = Field(gt=0)
    collected_by: str
    collected_at: date
    status: CollectionStatus = CollectionStatus.PENDING
    notes: Optional[str] = ""

    @staticmethod
    def make_id(order_id: str, collection_type: CollectionType) -> str:
        """Composite key used for deduplication against completion signals."""
        return f"{order_id}-{collection_type.value}"

    @property
    def is_pending(self) -> bool:
        return self.status == CollectionStatus.PENDING


class CollectionStats(BaseModel):
    """Aggregates over a filtered collections view."""
    total_pending_amount: float = 0.0
    total_completed_amount: float = 0.0
    pending_credit: float = 0.0
    pending_cheque: float = 0.0
    total_collections: int = 0
