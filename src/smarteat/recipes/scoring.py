"""Score a single recipe against the current inventory."""

import math
from collections.abc import Sequence

from smarteat.logging_config import get_logger
from smarteat.recipes.expiration import (
    MAX_INGREDIENT_WEIGHT,
    expiration_weight,
    is_expiring,
)
from smarteat.recipes.matching import IngredientMatchingStrategy, TokenOverlapMatcher
from smarteat.schemas import (
    InventoryItem,
    Recipe,
    RecipeIngredient,
    RecipeSearchFilters,
    RecipeSuggestion,
    clamp_unit,
)

logger = get_logger(__name__)


class RecipeScorer:
    """
    Combines ingredient matches and expiration urgency into one suggestion.

    Scoring:
    - Match score: matched ingredients over considered ingredients, where an
      optional ingredient is only considered when it is in stock
    - Expiration priority: urgency weights of matched, expiring ingredients
      over the critical weight times all matched ingredients
    - Optional boost of the match score by the expiration priority
    """

    # A recipe is still makeable when at most this share of its required
    # ingredients is missing (rounded up)
    SUBSTITUTION_TOLERANCE = 0.3

    def __init__(self, matcher: IngredientMatchingStrategy | None = None):
        self.matcher = matcher or TokenOverlapMatcher()

    def score(
        self,
        recipe: Recipe,
        inventory: Sequence[InventoryItem],
        filters: RecipeSearchFilters | None = None,
    ) -> RecipeSuggestion:
        """
        Score one recipe.

        Args:
            recipe: Catalog recipe.
            inventory: Inventory snapshot.
            filters: Expiration tuning; defaults apply when omitted.

        Returns:
            Fully populated RecipeSuggestion.
        """
        filters = filters or RecipeSearchFilters()

        available: list[RecipeIngredient] = []
        missing: list[RecipeIngredient] = []
        expiring: list[RecipeIngredient] = []
        missing_required = 0
        total_expiration_weight = 0.0
        max_possible_weight = 0.0

        for ingredient in recipe.ingredients:
            match = self.matcher.find_match(ingredient, inventory)

            if match is None:
                if not ingredient.is_optional:
                    missing.append(ingredient)
                    missing_required += 1
                continue

            available.append(ingredient)
            max_possible_weight += MAX_INGREDIENT_WEIGHT

            weight = expiration_weight(match, filters.expiration_threshold)
            if is_expiring(weight):
                total_expiration_weight += weight
                expiring.append(ingredient)

        considered = len(available) + len(missing)
        base_score = len(available) / considered if considered > 0 else 0.0

        expiration_priority = 0.0
        if max_possible_weight > 0:
            expiration_priority = clamp_unit(total_expiration_weight / max_possible_weight)

        match_score = base_score
        if filters.prioritize_expiring and expiration_priority > 0:
            match_score = min(
                1.0,
                base_score + expiration_priority * filters.expiration_weight_multiplier,
            )

        required_count = len(recipe.required_ingredients)
        can_substitute = missing_required <= math.ceil(
            required_count * self.SUBSTITUTION_TOLERANCE
        )

        logger.debug(
            f"Scored {recipe.id}: match={match_score:.2f} base={base_score:.2f} "
            f"expiration={expiration_priority:.2f} missing={len(missing)}"
        )

        return RecipeSuggestion(
            recipe=recipe,
            match_score=clamp_unit(match_score),
            missing_ingredients=missing,
            available_ingredients=available,
            can_make_with_substitutions=can_substitute,
            estimated_prep_time=recipe.total_time,
            expiration_priority=expiration_priority,
            expiring_ingredients_count=len(expiring),
            expiring_ingredients=expiring,
        )
