"""Label date parsing and expiration date resolution for purchased items."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Literal

from pydantic import BaseModel

from smarteat.logging_config import get_logger
from smarteat.recognition.base import ExtractedDate

logger = get_logger(__name__)


# Day-first formats printed on labels: 31/12/2025, 31-12-25, 31.12.2025
DATE_PATTERN = re.compile(r"(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4}|\d{2})")


def parse_date_string(text: str) -> date | None:
    """
    Parse the first day-first date found in a label string.

    Two-digit years are read as 20xx.

    Args:
        text: Raw label text such as "Best Before: 05/11/2025".

    Returns:
        The parsed date, or None when no valid date is present.
    """
    for match in DATE_PATTERN.finditer(text):
        day, month, year = match.groups()
        full_year = int(f"20{year}") if len(year) == 2 else int(year)
        try:
            return date(full_year, int(month), int(day))
        except ValueError:
            continue
    return None


# =============================================================================
# Shelf-life knowledge
# =============================================================================


@dataclass(frozen=True)
class ShelfLife:
    """Typical shelf life of a product once bought."""

    name: str
    category: str
    days: int
    storage_conditions: tuple[str, ...] = field(default_factory=tuple)


SHELF_LIFE: dict[str, ShelfLife] = {
    "apple": ShelfLife("Apple", "fruits", 14, ("refrigerated", "crisper_drawer")),
    "banana": ShelfLife("Banana", "fruits", 7, ("room_temperature", "away_from_other_fruits")),
    "orange": ShelfLife("Orange", "fruits", 14, ("refrigerated",)),
    "tomato": ShelfLife("Tomato", "vegetables", 7, ("room_temperature", "stem_side_down")),
    "lettuce": ShelfLife(
        "Lettuce", "vegetables", 5, ("refrigerated", "crisper_drawer", "paper_towel")
    ),
    "carrot": ShelfLife(
        "Carrot", "vegetables", 21, ("refrigerated", "dark_place", "high_humidity")
    ),
    "milk": ShelfLife("Milk", "dairy", 7, ("refrigerated", "back_of_fridge")),
    "cheese": ShelfLife("Cheese", "dairy", 14, ("refrigerated", "cheese_drawer")),
    "yogurt": ShelfLife("Yogurt", "dairy", 10, ("refrigerated", "back_of_fridge")),
    "chicken breast": ShelfLife("Chicken Breast", "meat", 3, ("refrigerated", "meat_drawer")),
    "ground beef": ShelfLife("Ground Beef", "meat", 3, ("refrigerated", "meat_drawer")),
    "bread": ShelfLife("Bread", "pantry", 7, ("room_temperature", "bread_box")),
    "pasta": ShelfLife("Pasta", "pantry", 365, ("room_temperature", "dark_place")),
    "rice": ShelfLife("Rice", "pantry", 730, ("room_temperature", "dark_place")),
}

# Fallback shelf life per category when the product itself is unknown
CATEGORY_SHELF_LIFE_DAYS: dict[str, int] = {
    "fruits": 14,
    "vegetables": 7,
    "dairy": 7,
    "meat": 3,
    "pantry": 7,
    "beverages": 365,
    "snacks": 90,
    "frozen": 30,
}

DEFAULT_SHELF_LIFE_DAYS = 7

CATEGORY_STORAGE: dict[str, tuple[str, ...]] = {
    "fruits": ("refrigerated", "crisper_drawer"),
    "vegetables": ("refrigerated", "crisper_drawer"),
    "dairy": ("refrigerated", "back_of_fridge"),
    "meat": ("refrigerated", "meat_drawer"),
    "pantry": ("room_temperature", "dark_place"),
    "frozen": ("frozen", "deep_freeze"),
}


class ExpirySuggestion(BaseModel):
    """A proposed expiration date with its provenance."""

    expires_on: date
    confidence: float
    reasoning: str
    storage_conditions: list[str] = []


class ExpiryResolution(BaseModel):
    """How an item's expiration date was decided."""

    item_name: str
    final_date: date | None = None
    ocr_date: date | None = None
    suggested_date: date | None = None
    confidence: Literal["high", "medium", "low"]
    source: Literal["ocr", "ai", "manual"]
    requires_user_input: bool
    storage_conditions: list[str] = []
    reasoning: str = ""


class ExpiryResolver:
    """
    Decides an expiration date for a purchased item.

    Priority:
    1. A label date that lies in the future
    2. A shelf-life suggestion for a known product
    3. Manual entry by the user
    """

    # Suggestions at or below this confidence are not applied automatically
    MIN_SUGGESTION_CONFIDENCE = 0.7
    BASE_CONFIDENCE = 0.8
    CATEGORY_CONFIDENCE = 0.5

    def __init__(self, shelf_life: Mapping[str, ShelfLife] | None = None):
        self.shelf_life = dict(SHELF_LIFE if shelf_life is None else shelf_life)

    def suggest(
        self,
        item_name: str,
        category: str | None = None,
        today: date | None = None,
    ) -> ExpirySuggestion:
        """Suggest an expiration date from shelf-life knowledge."""
        today = today or date.today()
        known = self.shelf_life.get(item_name.lower().strip())

        if known is not None:
            confidence = self.BASE_CONFIDENCE
            # Products with detailed storage guidance are better understood
            if len(known.storage_conditions) > 2:
                confidence += 0.1
            return ExpirySuggestion(
                expires_on=today + timedelta(days=known.days),
                confidence=min(confidence, 0.9),
                reasoning=f"Based on {known.name} storage guidelines",
                storage_conditions=list(known.storage_conditions),
            )

        days = CATEGORY_SHELF_LIFE_DAYS.get(category or "", DEFAULT_SHELF_LIFE_DAYS)
        return ExpirySuggestion(
            expires_on=today + timedelta(days=days),
            confidence=self.CATEGORY_CONFIDENCE,
            reasoning=f"Based on typical {category or 'other'} item storage guidelines",
            storage_conditions=list(CATEGORY_STORAGE.get(category or "", ("room_temperature",))),
        )

    def resolve(
        self,
        item_name: str,
        extracted_dates: Iterable[ExtractedDate],
        category: str | None = None,
        today: date | None = None,
    ) -> ExpiryResolution:
        """
        Resolve the expiration date of one item.

        Args:
            item_name: Product name.
            extracted_dates: Dates read from the product label.
            category: Product category, used when the product is unknown.
            today: Reference day; defaults to the current date.

        Returns:
            ExpiryResolution; final_date is None when the user must decide.
        """
        today = today or date.today()

        future_dates = [d for d in extracted_dates if d.date > today]
        if future_dates:
            best = max(future_dates, key=lambda d: d.confidence)
            return ExpiryResolution(
                item_name=item_name,
                final_date=best.date,
                ocr_date=best.date,
                confidence="high",
                source="ocr",
                requires_user_input=False,
                reasoning="Date successfully extracted from product label",
            )

        suggestion = self.suggest(item_name, category, today)
        if suggestion.confidence > self.MIN_SUGGESTION_CONFIDENCE:
            return ExpiryResolution(
                item_name=item_name,
                final_date=suggestion.expires_on,
                suggested_date=suggestion.expires_on,
                confidence="medium",
                source="ai",
                requires_user_input=False,
                storage_conditions=suggestion.storage_conditions,
                reasoning=suggestion.reasoning,
            )

        logger.debug(f"No reliable expiration date for {item_name!r}, manual entry required")
        return ExpiryResolution(
            item_name=item_name,
            suggested_date=suggestion.expires_on,
            confidence="low",
            source="manual",
            requires_user_input=True,
            storage_conditions=suggestion.storage_conditions,
            reasoning="Unable to determine expiry date automatically",
        )
