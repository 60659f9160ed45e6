"""Resolve recipe ingredients against the household inventory."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rapidfuzz import fuzz

from smarteat.config import Settings
from smarteat.logging_config import get_logger
from smarteat.schemas import InventoryItem, RecipeIngredient

logger = get_logger(__name__)


# Words that carry no identity for an ingredient. Only the fuzzy strategy
# strips them; the token-overlap strategy keeps every word.
STOP_WORDS = {
    "fresh",
    "dried",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "grated",
    "crushed",
    "ground",
    "whole",
    "large",
    "medium",
    "small",
    "raw",
    "cooked",
    "frozen",
    "canned",
    "organic",
    "boneless",
    "skinless",
    "peeled",
    "ripe",
    "plain",
    "unsalted",
    "salted",
    "sauce",
    "extra",
    "virgin",
}


def tokenize(name: str) -> set[str]:
    """Lowercase whitespace-delimited tokens of a name."""
    return set(name.lower().split())


def normalize_ingredient(name: str) -> str:
    """
    Normalize an ingredient name for fuzzy comparison.

    Lowercases, collapses whitespace and drops stop words. Falls back to the
    lowercased name when every word is a stop word ("Sauce" stays "sauce").
    """
    words = name.lower().split()
    kept = [w for w in words if w not in STOP_WORDS]
    return " ".join(kept or words)


class IngredientMatchingStrategy(ABC):
    """Decides whether an inventory item satisfies a recipe ingredient."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return strategy name for logging and identification."""
        pass

    @abstractmethod
    def find_match(
        self,
        ingredient: RecipeIngredient,
        inventory: Sequence[InventoryItem],
    ) -> InventoryItem | None:
        """
        Find the inventory item that satisfies an ingredient.

        Args:
            ingredient: Recipe ingredient requirement.
            inventory: Current inventory snapshot, in inventory order.

        Returns:
            The first satisfying item, or None.
        """
        pass

    @staticmethod
    def find_exact(
        ingredient: RecipeIngredient,
        inventory: Sequence[InventoryItem],
    ) -> InventoryItem | None:
        """Case-insensitive exact name match, ignoring category."""
        wanted = ingredient.name.lower()
        for item in inventory:
            if item.name.lower() == wanted:
                return item
        return None


class TokenOverlapMatcher(IngredientMatchingStrategy):
    """
    Exact name match, then same-category items sharing any word.

    The fallback is loose: "Beef Broth" satisfies "Vegetable Broth"
    through the shared token "broth".
    """

    @property
    def name(self) -> str:
        return "token_overlap"

    def find_match(
        self,
        ingredient: RecipeIngredient,
        inventory: Sequence[InventoryItem],
    ) -> InventoryItem | None:
        exact = self.find_exact(ingredient, inventory)
        if exact is not None:
            return exact

        wanted_tokens = tokenize(ingredient.name)
        for item in inventory:
            if item.category == ingredient.category and wanted_tokens & tokenize(item.name):
                return item

        return None


class FuzzyIngredientMatcher(IngredientMatchingStrategy):
    """
    Exact name match, then the best same-category fuzzy match.

    Names are normalized with STOP_WORDS removed and compared with
    rapidfuzz's token_sort_ratio, so "Fresh Tomatoes" still finds "Tomato"
    while "Beef Broth" no longer satisfies "Vegetable Broth".
    """

    DEFAULT_THRESHOLD = 85.0

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold

    @classmethod
    def from_settings(cls, settings: Settings) -> "FuzzyIngredientMatcher":
        return cls(threshold=settings.fuzzy_match_threshold)

    @property
    def name(self) -> str:
        return "fuzzy"

    def find_match(
        self,
        ingredient: RecipeIngredient,
        inventory: Sequence[InventoryItem],
    ) -> InventoryItem | None:
        exact = self.find_exact(ingredient, inventory)
        if exact is not None:
            return exact

        wanted = normalize_ingredient(ingredient.name)
        best: InventoryItem | None = None
        best_score = 0.0

        for item in inventory:
            if item.category != ingredient.category:
                continue
            score = fuzz.token_sort_ratio(wanted, normalize_ingredient(item.name))
            # Strictly greater keeps the earliest item on ties
            if score >= self.threshold and score > best_score:
                best, best_score = item, score

        if best is not None:
            logger.debug(
                f"Fuzzy match {ingredient.name!r} -> {best.name!r} (score={best_score:.1f})"
            )
        return best
