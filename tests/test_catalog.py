"""Tests for the recipe catalog."""

import random

from smarteat.recipes.catalog import DEFAULT_RECIPE_DATA, RecipeCatalog
from smarteat.schemas import CATEGORIES, DIFFICULTIES


class TestDefaultCatalog:
    """Tests for the built-in recipes."""

    def test_loads_all_recipes(self, catalog):
        assert len(catalog) == len(DEFAULT_RECIPE_DATA) == 6

    def test_catalog_order(self, catalog):
        assert [r.id for r in catalog] == [entry["id"] for entry in DEFAULT_RECIPE_DATA]

    def test_recipe_fields(self, catalog):
        pasta = catalog.get("quick-pasta")

        assert pasta.name == "Quick Tomato Pasta"
        assert pasta.total_time == 25
        assert [i.name for i in pasta.required_ingredients] == [
            "Pasta",
            "Tomato",
            "Garlic",
            "Olive Oil",
        ]
        assert pasta.nutrition_info.calories == 450

    def test_uses_known_vocabulary(self, catalog):
        """Built-in recipes only use the shared difficulty and category values."""
        for recipe in catalog:
            assert recipe.difficulty in DIFFICULTIES
            assert all(i.category in CATEGORIES for i in recipe.ingredients)

    def test_get_unknown(self, catalog):
        assert catalog.get("missing") is None


class TestCatalogQueries:
    """Tests for catalog lookups."""

    def test_search_name(self, catalog):
        assert [r.id for r in catalog.search("PASTA")] == ["quick-pasta"]

    def test_search_tag_and_cuisine(self, catalog):
        assert [r.id for r in catalog.search("asian")] == ["chicken-stir-fry"]
        assert "beef-stew" in [r.id for r in catalog.search("comfort")]

    def test_search_no_results(self, catalog):
        assert catalog.search("sushi") == []

    def test_by_category(self, catalog):
        assert [r.id for r in catalog.by_category("Italian")] == ["quick-pasta"]
        assert [r.id for r in catalog.by_category("breakfast")] == [
            "fruit-salad",
            "scrambled-eggs",
        ]

    def test_quick(self, catalog):
        assert [r.id for r in catalog.quick()] == [
            "quick-pasta",
            "fruit-salad",
            "scrambled-eggs",
        ]
        assert [r.id for r in catalog.quick(max_total_time=10)] == ["fruit-salad"]

    def test_by_difficulty(self, catalog):
        assert [r.id for r in catalog.by_difficulty("hard")] == ["beef-stew"]

    def test_random(self, catalog):
        recipe = catalog.random(random.Random(7))
        assert catalog.get(recipe.id) is recipe

    def test_random_empty(self):
        assert RecipeCatalog([]).random() is None

    def test_from_data(self):
        catalog = RecipeCatalog.from_data(
            [
                {
                    "id": "toast",
                    "name": "Toast",
                    "ingredients": [
                        {"name": "Bread", "amount": 2, "unit": "slices", "category": "pantry"}
                    ],
                }
            ]
        )

        assert len(catalog) == 1
        assert catalog.get("toast").ingredients[0].name == "Bread"
