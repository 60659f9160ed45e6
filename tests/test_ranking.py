"""Tests for suggestion filtering and ranking."""

import pytest

from smarteat.recipes.ranking import (
    MIN_SUGGESTION_SCORE,
    SuggestionRanker,
    passes_filters,
    rank_suggestions,
)
from smarteat.schemas import InventoryItem, RecipeSearchFilters, RecipeSuggestion


@pytest.fixture
def ranker():
    return SuggestionRanker()


def suggestion_for(recipe, match_score=0.5, expiration_priority=0.0, missing=0, expiring=0):
    ingredients = list(recipe.ingredients)
    return RecipeSuggestion(
        recipe=recipe,
        match_score=match_score,
        missing_ingredients=ingredients[:missing],
        expiration_priority=expiration_priority,
        expiring_ingredients_count=expiring,
        expiring_ingredients=ingredients[:expiring],
    )


class TestPassesFilters:
    """Tests for user filter evaluation."""

    @pytest.fixture
    def pasta(self, catalog):
        return suggestion_for(catalog.get("quick-pasta"), missing=2)

    def test_no_filters(self, pasta):
        assert passes_filters(pasta, None)
        assert passes_filters(pasta, RecipeSearchFilters())

    def test_max_prep_time(self, pasta):
        assert passes_filters(pasta, RecipeSearchFilters(max_prep_time=10))
        assert not passes_filters(pasta, RecipeSearchFilters(max_prep_time=9))

    def test_zero_is_a_real_limit(self, pasta):
        """Zero limits reject instead of being ignored."""
        assert not passes_filters(pasta, RecipeSearchFilters(max_prep_time=0))
        assert not passes_filters(pasta, RecipeSearchFilters(max_missing_ingredients=0))

    def test_difficulty(self, pasta):
        assert passes_filters(pasta, RecipeSearchFilters(difficulty="easy"))
        assert not passes_filters(pasta, RecipeSearchFilters(difficulty="hard"))

    def test_cuisine_exact(self, pasta):
        assert passes_filters(pasta, RecipeSearchFilters(cuisine="Italian"))
        assert not passes_filters(pasta, RecipeSearchFilters(cuisine="italian"))

    def test_tags_any(self, pasta):
        assert passes_filters(pasta, RecipeSearchFilters(tags=["dinner", "quick"]))
        assert not passes_filters(pasta, RecipeSearchFilters(tags=["dessert"]))

    def test_empty_tags_match_nothing(self, pasta):
        """An empty tag list is a filter no recipe can pass."""
        assert not passes_filters(pasta, RecipeSearchFilters(tags=[]))
        assert passes_filters(pasta, RecipeSearchFilters(tags=None))

    def test_max_missing(self, pasta):
        assert passes_filters(pasta, RecipeSearchFilters(max_missing_ingredients=2))
        assert not passes_filters(pasta, RecipeSearchFilters(max_missing_ingredients=1))

    def test_prioritize_requires_expiring(self, catalog, pasta):
        filters = RecipeSearchFilters(prioritize_expiring=True)
        assert not passes_filters(pasta, filters)

        expiring = suggestion_for(catalog.get("quick-pasta"), expiring=1)
        assert passes_filters(expiring, filters)


class TestRankSuggestions:
    """Tests for ordering."""

    def test_by_match_score(self, catalog):
        recipes = catalog.all()
        suggestions = [
            suggestion_for(recipes[0], match_score=0.4),
            suggestion_for(recipes[1], match_score=0.9),
            suggestion_for(recipes[2], match_score=0.6),
        ]

        ranked = rank_suggestions(suggestions)

        assert [s.match_score for s in ranked] == [0.9, 0.6, 0.4]

    def test_ties_keep_input_order(self, catalog):
        recipes = catalog.all()
        suggestions = [suggestion_for(recipe, match_score=0.5) for recipe in recipes]

        ranked = rank_suggestions(suggestions)

        assert [s.recipe.id for s in ranked] == [r.id for r in recipes]

    def test_expiration_first_when_prioritized(self, catalog):
        recipes = catalog.all()
        suggestions = [
            suggestion_for(recipes[0], match_score=0.9, expiration_priority=0.2),
            suggestion_for(recipes[1], match_score=0.4, expiration_priority=0.8),
            suggestion_for(recipes[2], match_score=0.7, expiration_priority=0.8),
        ]

        ranked = rank_suggestions(suggestions, prioritize_expiring=True)

        assert [s.recipe.id for s in ranked] == [recipes[2].id, recipes[1].id, recipes[0].id]

    def test_empty(self):
        assert rank_suggestions([]) == []


class TestSuggest:
    """Tests for end-to-end suggestions over the built-in catalog."""

    def test_tomato_pasta_prioritized(self, ranker, catalog, tomato_pasta_inventory):
        """A recipe using an expiring item ranks ahead of non-expiring ones."""
        filters = RecipeSearchFilters(prioritize_expiring=True, expiration_weight_multiplier=0.3)

        suggestions = ranker.suggest(catalog, tomato_pasta_inventory, filters)
        by_id = {s.recipe.id: s for s in suggestions}

        pasta = by_id["quick-pasta"]
        assert pasta.expiring_ingredients_count == 1
        assert pasta.expiration_priority > 0
        assert all(s.expiration_priority > 0 for s in suggestions)

        priorities = [s.expiration_priority for s in suggestions]
        assert priorities == sorted(priorities, reverse=True)

    def test_prioritized_order(self, ranker, catalog, tomato_pasta_inventory):
        filters = RecipeSearchFilters(prioritize_expiring=True)

        suggestions = ranker.suggest(catalog, tomato_pasta_inventory, filters)

        assert [s.recipe.id for s in suggestions] == [
            "scrambled-eggs",
            "vegetable-soup",
            "quick-pasta",
        ]

    def test_plain_order_is_stable(self, ranker, catalog, tomato_pasta_inventory):
        """Equal match scores keep catalog order."""
        suggestions = ranker.suggest(catalog, tomato_pasta_inventory)

        assert [s.recipe.id for s in suggestions] == ["quick-pasta", "scrambled-eggs"]
        assert all(s.match_score > MIN_SUGGESTION_SCORE for s in suggestions)

    def test_filters_applied(self, ranker, catalog, tomato_pasta_inventory):
        filters = RecipeSearchFilters(tags=["breakfast"])
        suggestions = ranker.suggest(catalog, tomato_pasta_inventory, filters)

        assert [s.recipe.id for s in suggestions] == ["scrambled-eggs"]

    def test_empty_tag_filter(self, ranker, catalog, tomato_pasta_inventory):
        filters = RecipeSearchFilters(tags=[])
        assert ranker.suggest(catalog, tomato_pasta_inventory, filters) == []

    def test_empty_inventory(self, ranker, catalog):
        assert ranker.suggest(catalog, []) == []

    def test_empty_catalog(self, ranker, tomato_pasta_inventory):
        assert ranker.suggest([], tomato_pasta_inventory) == []

    def test_deterministic(self, ranker, catalog, mixed_inventory):
        filters = RecipeSearchFilters(prioritize_expiring=True)
        first = ranker.suggest(catalog, mixed_inventory, filters)
        second = ranker.suggest(catalog, mixed_inventory, filters)

        assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


class TestSuggestForExpiringItems:
    """Tests for suggestions built around soon-to-expire items."""

    def test_uses_only_expiring_stock(self, ranker, catalog, mixed_inventory):
        suggestions = ranker.suggest_for_expiring_items(catalog, mixed_inventory)

        assert [s.recipe.id for s in suggestions] == ["scrambled-eggs"]
        assert all(len(s.missing_ingredients) <= 2 for s in suggestions)

    def test_no_expiring_items(self, ranker, catalog):
        inventory = [
            InventoryItem(name="Pasta", category="pantry", days_until_expiry=365),
            InventoryItem(name="Milk", category="dairy", days_until_expiry=-1),
            InventoryItem(name="Rice", category="pantry"),
        ]
        assert ranker.suggest_for_expiring_items(catalog, inventory) == []
