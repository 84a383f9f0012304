"""
Collections derivation from orders, customers and users.
Builds the worklist of outstanding credit and cheque balances, then filters,
sorts and aggregates it for display.
"""

import logging
from datetime import date
from typing import List, Dict, Optional, Set, Iterable

from config import collections_config
from models import (
    Order,
    Customer,
    User,
    CollectionRecord,
    CollectionStats,
    CollectionStatus,
    CollectionType,
)

logger = logging.getLogger(__name__)

ALL = "all"


class AccessDeniedError(Exception):
    """Raised when a user's role may not manage collections."""

    def __init__(
        self,
        message: str = "Only Admin and Manager roles can access the Collection Management page.",
    ):
        super().__init__(message)


def can_access_collections(user: Optional[User]) -> bool:
    """Return True for roles allowed to view and recognize collections."""
    if user is None:
        return False
    return user.role.value in collections_config.privileged_roles


def require_access(user: Optional[User]):
    if not can_access_collections(user):
        logger.info(f"Collections access denied for {user.email if user else 'anonymous user'}")
        raise AccessDeniedError()


def marker_completed_ids(orders: Iterable[Order], marker: Optional[str] = None) -> Set[str]:
    """Collection ids implied by the completion marker in order notes."""
    marker = marker or collections_config.completion_marker
    completed = set()
    for order in orders:
        if order.notes and marker in order.notes:
            for collection_type in CollectionType:
                completed.add(CollectionRecord.make_id(order.id, collection_type))
    return completed


def derive_collections(
    orders: List[Order],
    customers: List[Customer],
    users: List[User],
    current_user: Optional[User] = None,
    completed_ids: Optional[Set[str]] = None,
    today: Optional[date] = None,
) -> List[CollectionRecord]:
    """
    Derive the collections worklist.

    Args:
        orders: All orders
        customers: All customers
        users: All users
        current_user: Fallback collector when an order has no resolvable assignee
        completed_ids: Cached ids of already recognized collections
        today: Date used for orders without a date

    Returns:
        One record per positive credit or cheque balance
    """
    today = today or date.today()
    completed = set(completed_ids or ()) | marker_completed_ids(orders)

    customers_by_id: Dict[str, Customer] = {c.id: c for c in customers}
    users_by_id: Dict[str, User] = {u.id: u for u in users}
    fallback_user = None
    if current_user is not None:
        fallback_user = next((u for u in users if u.email == current_user.email), None)

    records = []
    for order in orders:
        customer = customers_by_id.get(order.customer_id) if order.customer_id else None
        if customer is None:
            logger.debug(f"No customer found for order {order.id}, customer_id: {order.customer_id}")
            continue

        collected_by = users_by_id.get(order.assigned_user_id) if order.assigned_user_id else None
        collected_by = collected_by or fallback_user
        if collected_by is None:
            logger.debug(f"No user found for order {order.id}, assigned_user_id: {order.assigned_user_id}")
            continue

        balances = (
            (CollectionType.CREDIT, order.credit_balance),
            (CollectionType.CHEQUE, order.cheque_balance),
        )
        for collection_type, balance in balances:
            if not balance or balance <= 0:
                continue

            collection_id = CollectionRecord.make_id(order.id, collection_type)
            is_completed = collection_id in completed
            records.append(CollectionRecord(
                id=collection_id,
                order_id=order.id,
                customer_id=order.customer_id,
                customer_name=order.customer_name or customer.name,
                collection_type=collection_type,
                amount=balance,
                collected_by=collected_by.name,
                collected_at=order.order_date or today,
                status=CollectionStatus.COMPLETE if is_completed else CollectionStatus.PENDING,
                notes="Previously completed" if is_completed else "",
            ))

    logger.debug(f"Generated {len(records)} collection records from {len(orders)} orders")
    return records


def filter_collections(
    records: List[CollectionRecord],
    status: str = ALL,
    collection_type: str = ALL,
) -> List[CollectionRecord]:
    """Filter by status and type, most recent first (ties by id)."""
    filtered = records
    if status != ALL:
        status = CollectionStatus(status)
        filtered = [r for r in filtered if r.status == status]
    if collection_type != ALL:
        collection_type = CollectionType(collection_type)
        filtered = [r for r in filtered if r.collection_type == collection_type]

    filtered = sorted(filtered, key=lambda r: r.id)
    return sorted(filtered, key=lambda r: r.collected_at, reverse=True)


def compute_stats(records: List[CollectionRecord]) -> CollectionStats:
    """Aggregate amounts over an already filtered view."""
    pending = [r for r in records if r.status == CollectionStatus.PENDING]
    completed = [r for r in records if r.status == CollectionStatus.COMPLETE]

    return CollectionStats(
        total_pending_amount=sum(r.amount for r in pending),
        total_completed_amount=sum(r.amount for r in completed),
        pending_credit=sum(r.amount for r in pending if r.collection_type == CollectionType.CREDIT),
        pending_cheque=sum(r.amount for r in pending if r.collection_type == CollectionType.CHEQUE),
        total_collections=len(records),
    )


def format_currency(amount: float, currency: Optional[str] = None) -> str:
    """Format an amount with Indian digit grouping, e.g. ``LKR 1,23,456.5``."""
    currency = currency or collections_config.currency
    rounded = round(amount, 2)
    sign = "-" if rounded < 0 else ""

    text = f"{abs(rounded):.2f}".rstrip("0").rstrip(".")
    whole, _, fraction = text.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{currency} {sign}{whole}{'.' + fraction if fraction else ''}"


def audit_note(record: CollectionRecord, actor_name: str, notes: str = "") -> str:
    """Note written to the order when a collection is recognized."""
    note = (
        f"{record.collection_type.value.upper()} collection of "
        f"{format_currency(record.amount)} completed by {actor_name}."
    )
    if notes:
        note += f" Notes: {notes}"
    return note
