"""Filter and rank recipe suggestions."""

from collections.abc import Iterable, Sequence

from smarteat.logging_config import get_logger
from smarteat.recipes.expiration import URGENT_DAYS, is_item_expired
from smarteat.recipes.scoring import RecipeScorer
from smarteat.schemas import (
    InventoryItem,
    Recipe,
    RecipeSearchFilters,
    RecipeSuggestion,
)

logger = get_logger(__name__)

# Below this match score a recipe is not worth suggesting
MIN_SUGGESTION_SCORE = 0.3

# Missing ingredients tolerated when cooking to use up expiring items
EXPIRING_MAX_MISSING = 2


def passes_filters(
    suggestion: RecipeSuggestion,
    filters: RecipeSearchFilters | None,
) -> bool:
    """
    Check a scored suggestion against user-selected filters.

    Unset (None) filters never reject. An empty tag list matches no recipe.
    """
    if filters is None:
        return True

    recipe = suggestion.recipe

    if filters.max_prep_time is not None and recipe.prep_time > filters.max_prep_time:
        return False
    if filters.difficulty is not None and recipe.difficulty != filters.difficulty:
        return False
    if filters.cuisine is not None and recipe.cuisine != filters.cuisine:
        return False
    if filters.tags is not None and not any(tag in recipe.tags for tag in filters.tags):
        return False
    if (
        filters.max_missing_ingredients is not None
        and len(suggestion.missing_ingredients) > filters.max_missing_ingredients
    ):
        return False
    if filters.prioritize_expiring and suggestion.expiring_ingredients_count == 0:
        return False

    return True


def rank_suggestions(
    suggestions: Iterable[RecipeSuggestion],
    prioritize_expiring: bool = False,
) -> list[RecipeSuggestion]:
    """
    Order suggestions best first.

    With prioritize_expiring the expiration priority is the primary key and
    the match score breaks ties; otherwise only the match score counts.
    The sort is stable, so remaining ties keep catalog order.
    """
    if prioritize_expiring:
        return sorted(
            suggestions,
            key=lambda s: (s.expiration_priority, s.match_score),
            reverse=True,
        )
    return sorted(suggestions, key=lambda s: s.match_score, reverse=True)


class SuggestionRanker:
    """Reduces a recipe catalog to a ranked, filtered suggestion list."""

    def __init__(self, scorer: RecipeScorer | None = None):
        self.scorer = scorer or RecipeScorer()

    def suggest(
        self,
        recipes: Iterable[Recipe],
        inventory: Sequence[InventoryItem],
        filters: RecipeSearchFilters | None = None,
    ) -> list[RecipeSuggestion]:
        """
        Suggest recipes that can be cooked from the inventory.

        Args:
            recipes: Recipe catalog, in catalog order.
            inventory: Inventory snapshot.
            filters: Optional user filters and expiration tuning.

        Returns:
            Ranked suggestions; empty when nothing qualifies.
        """
        suggestions: list[RecipeSuggestion] = []
        rejected = 0

        for recipe in recipes:
            suggestion = self.scorer.score(recipe, inventory, filters)
            if suggestion.match_score > MIN_SUGGESTION_SCORE and passes_filters(
                suggestion, filters
            ):
                suggestions.append(suggestion)
            else:
                rejected += 1

        prioritize = filters.prioritize_expiring if filters else False
        ranked = rank_suggestions(suggestions, prioritize_expiring=prioritize)

        logger.info(
            f"Suggested {len(ranked)} recipes from {len(inventory)} inventory items "
            f"({rejected} rejected)"
        )
        return ranked

    def suggest_for_expiring_items(
        self,
        recipes: Iterable[Recipe],
        inventory: Sequence[InventoryItem],
    ) -> list[RecipeSuggestion]:
        """
        Suggest recipes built around items that are about to expire.

        Only non-expired items with at most three days left are considered
        as stock, and up to two missing ingredients are tolerated.
        """
        expiring_items = [
            item
            for item in inventory
            if not is_item_expired(item)
            and item.days_until_expiry is not None
            and item.days_until_expiry <= URGENT_DAYS
        ]

        if not expiring_items:
            logger.info("No expiring items, skipping expiring-item suggestions")
            return []

        return self.suggest(
            recipes,
            expiring_items,
            RecipeSearchFilters(max_missing_ingredients=EXPIRING_MAX_MISSING),
        )
