"""Recipe suggestion ranking from household inventory."""

from smarteat.recipes.catalog import DEFAULT_RECIPE_DATA, RecipeCatalog
from smarteat.recipes.expiration import expiration_weight, is_expiring, is_item_expired
from smarteat.recipes.matching import (
    FuzzyIngredientMatcher,
    IngredientMatchingStrategy,
    TokenOverlapMatcher,
)
from smarteat.recipes.ranking import (
    MIN_SUGGESTION_SCORE,
    SuggestionRanker,
    passes_filters,
    rank_suggestions,
)
from smarteat.recipes.scoring import RecipeScorer

__all__ = [
    "DEFAULT_RECIPE_DATA",
    "FuzzyIngredientMatcher",
    "IngredientMatchingStrategy",
    "MIN_SUGGESTION_SCORE",
    "RecipeCatalog",
    "RecipeScorer",
    "SuggestionRanker",
    "TokenOverlapMatcher",
    "expiration_weight",
    "is_expiring",
    "is_item_expired",
    "passes_filters",
    "rank_suggestions",
]
