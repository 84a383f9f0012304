"""Data models for the Sales Operations Dashboard."""

from .entities import (
    UserRole,
    Order,
    Customer,
    User,
    Product,
    Supplier,
    DriverAllocation,
    DriverSale,
)
from .collection import (
    CollectionType,
    CollectionStatus,
    CollectionRecord,
    CollectionStats,
)

__all__ = [
    "UserRole",
    "Order",
    "Customer",
    "User",
    "Product",
    "Supplier",
    "DriverAllocation",
    "DriverSale",
    "CollectionType",
    "CollectionStatus",
    "CollectionRecord",
    "CollectionStats",
]
