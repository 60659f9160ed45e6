"""Reconcile expected grocery-list purchases with observed ones."""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from smarteat.logging_config import get_logger
from smarteat.schemas import Conflict, PurchaseItem, clamp_unit

logger = get_logger(__name__)

# Weight of each not-purchased item against the efficiency score
NOT_PURCHASED_PENALTY = 0.5

# Statuses that count as bought
PURCHASED_STATUSES = frozenset({"confirmed", "modified"})


class ReconciliationResult(BaseModel):
    """Outcome of aligning expected items with observed ones."""

    reconciled_items: list[PurchaseItem] = Field(default_factory=list)
    missing_items: list[str] = Field(default_factory=list)
    additional_items: list[str] = Field(default_factory=list)
    conflicts: list[Conflict] = Field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return len(self.reconciled_items) - len(self.missing_items) - len(self.additional_items)


class SummaryCounts(BaseModel):
    """Derived counters of a purchase summary."""

    total_items: int = 0
    confirmed_items: int = 0
    not_purchased_items: int = 0
    additional_items: int = 0
    efficiency: float = 1.0


def _same_product(expected: PurchaseItem, observed: PurchaseItem) -> bool:
    return (
        expected.name.lower() == observed.name.lower()
        and expected.category == observed.category
    )


def reconcile(
    expected: Sequence[PurchaseItem],
    observed: Iterable[PurchaseItem],
) -> ReconciliationResult:
    """
    Merge expected purchases with observed (scanned or manual) ones.

    Each expected item takes the first remaining observed item with the
    same name (case-insensitive) and category. A matched pair keeps the
    expected item's identity and takes the observed status, confidence,
    expiration date and image; differing quantity or unit is reported as a
    conflict. Unmatched expected items become not_purchased, and observed
    items left over are appended as additional purchases.

    Inputs are not mutated.

    Args:
        expected: Items from the grocery list, in list order.
        observed: Scanned or manually entered items.

    Returns:
        ReconciliationResult with len(expected) + unmatched observed items.
    """
    pool = list(observed)
    result = ReconciliationResult()

    for item in expected:
        index = next(
            (i for i, candidate in enumerate(pool) if _same_product(item, candidate)), None
        )

        if index is None:
            result.reconciled_items.append(item.model_copy(update={"status": "not_purchased"}))
            result.missing_items.append(item.name)
            continue

        match = pool.pop(index)

        if item.quantity != match.quantity or item.unit != match.unit:
            result.conflicts.append(
                Conflict(
                    item_name=item.name,
                    expected_quantity=item.quantity,
                    actual_quantity=match.quantity,
                    expected_unit=item.unit,
                    actual_unit=match.unit,
                )
            )

        result.reconciled_items.append(
            item.model_copy(
                update={
                    "status": match.status,
                    "confidence": match.confidence,
                    "expiration_date": match.expiration_date,
                    "image_uri": match.image_uri,
                }
            )
        )

    for leftover in pool:
        result.reconciled_items.append(leftover)
        result.additional_items.append(leftover.name)

    logger.info(
        f"Reconciled {len(expected)} expected items: {result.matched_count} matched, "
        f"{len(result.missing_items)} missing, {len(result.additional_items)} additional, "
        f"{len(result.conflicts)} conflicts"
    )
    return result


def calculate_efficiency(confirmed: int, not_purchased: int, total: int) -> float:
    """
    Shopping efficiency score in [0, 1].

    The confirmed share minus half the not-purchased share; an empty trip
    is perfectly efficient.
    """
    if total == 0:
        return 1.0

    confirmed_ratio = confirmed / total
    not_purchased_ratio = not_purchased / total
    return clamp_unit(confirmed_ratio - not_purchased_ratio * NOT_PURCHASED_PENALTY)


def summarize_counts(items: Sequence[PurchaseItem]) -> SummaryCounts:
    """Recompute summary counters and efficiency from the item list."""
    total = len(items)
    confirmed = sum(1 for item in items if item.status in PURCHASED_STATUSES)
    not_purchased = sum(1 for item in items if item.status == "not_purchased")
    additional = sum(1 for item in items if item.source != "grocery_list")

    return SummaryCounts(
        total_items=total,
        confirmed_items=confirmed,
        not_purchased_items=not_purchased,
        additional_items=additional,
        efficiency=calculate_efficiency(confirmed, not_purchased, total),
    )
