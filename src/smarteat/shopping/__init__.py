"""Post-shopping reconciliation of grocery lists with actual purchases."""

from smarteat.shopping.reconcile import (
    ReconciliationResult,
    calculate_efficiency,
    reconcile,
    summarize_counts,
)
from smarteat.shopping.service import PostShoppingConfig, PostShoppingService, ScanResult
from smarteat.shopping.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    PurchaseSummaryRepository,
)

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "PostShoppingConfig",
    "PostShoppingService",
    "PurchaseSummaryRepository",
    "ReconciliationResult",
    "ScanResult",
    "calculate_efficiency",
    "reconcile",
    "summarize_counts",
]
