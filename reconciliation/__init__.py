"""Collections reconciliation for outstanding order balances."""

from .completion_cache import CompletionCache, CompletionCacheError
from .reconciler import (
    ALL,
    AccessDeniedError,
    can_access_collections,
    require_access,
    marker_completed_ids,
    derive_collections,
    filter_collections,
    compute_stats,
    format_currency,
    audit_note,
)
from .service import (
    CollectionsService,
    CollectionNotFoundError,
    RecognitionError,
    AlreadyRecognizedError,
    BALANCE_COLUMNS,
)

__all__ = [
    "CompletionCache",
    "CompletionCacheError",
    "ALL",
    "AccessDeniedError",
    "can_access_collections",
    "require_access",
    "marker_completed_ids",
    "derive_collections",
    "filter_collections",
    "compute_stats",
    "format_currency",
    "audit_note",
    "CollectionsService",
    "CollectionNotFoundError",
    "RecognitionError",
    "AlreadyRecognizedError",
    "BALANCE_COLUMNS",
]
