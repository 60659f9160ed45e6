"""Expiration urgency weights for inventory items."""

from smarteat.schemas import InventoryItem

# Weight tiers, most urgent first
CRITICAL_WEIGHT = 2.0  # expires within a day
URGENT_WEIGHT = 1.5  # within three days
SOON_WEIGHT = 1.2  # within a week
NORMAL_WEIGHT = 1.0
EXPIRED_WEIGHT = 0.0

CRITICAL_DAYS = 1
URGENT_DAYS = 3
SOON_DAYS = 7

DEFAULT_EXPIRATION_THRESHOLD = 7

# Highest weight any single ingredient can contribute
MAX_INGREDIENT_WEIGHT = CRITICAL_WEIGHT


def is_item_expired(item: InventoryItem) -> bool:
    """An item is expired when flagged so or when its expiry day has passed."""
    if item.is_expired:
        return True
    return item.days_until_expiry is not None and item.days_until_expiry < 0


def expiration_weight(
    item: InventoryItem,
    threshold: int = DEFAULT_EXPIRATION_THRESHOLD,
) -> float:
    """
    Convert an item's days-until-expiry into an urgency weight.

    Rules are checked in order and the first one that applies wins:
    expired items weigh 0, items beyond the threshold weigh 1.0, then
    the critical (<=1 day), urgent (<=3) and soon (<=7) tiers apply.
    Items with no known expiry are treated as not urgent.

    Args:
        item: Matched inventory item.
        threshold: Days beyond which an item is never considered urgent.

    Returns:
        Weight in [0, 2].
    """
    if is_item_expired(item):
        return EXPIRED_WEIGHT

    days = item.days_until_expiry
    if days is None or days > threshold:
        return NORMAL_WEIGHT
    if days <= CRITICAL_DAYS:
        return CRITICAL_WEIGHT
    if days <= URGENT_DAYS:
        return URGENT_WEIGHT
    if days <= SOON_DAYS:
        return SOON_WEIGHT
    return NORMAL_WEIGHT


def is_expiring(weight: float) -> bool:
    """Whether a weight falls inside one of the expiring-soon tiers."""
    return weight > NORMAL_WEIGHT
