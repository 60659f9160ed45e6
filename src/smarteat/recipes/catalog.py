"""Read-only recipe catalog and its built-in recipe data."""

import random
from collections.abc import Iterable, Iterator
from typing import Any

from smarteat.schemas import Recipe

# =============================================================================
# Built-in recipes
# =============================================================================

DEFAULT_RECIPE_DATA: list[dict[str, Any]] = [
    {
        "id": "quick-pasta",
        "name": "Quick Tomato Pasta",
        "description": "A simple and delicious pasta dish using fresh tomatoes and herbs",
        "ingredients": [
            {"name": "Pasta", "amount": 200, "unit": "g", "category": "pantry"},
            {"name": "Tomato", "amount": 4, "unit": "pieces", "category": "vegetables"},
            {"name": "Garlic", "amount": 2, "unit": "cloves", "category": "vegetables"},
            {"name": "Olive Oil", "amount": 2, "unit": "tbsp", "category": "pantry"},
            {
                "name": "Basil",
                "amount": 1,
                "unit": "bunch",
                "category": "vegetables",
                "is_optional": True,
            },
        ],
        "instructions": [
            "Boil pasta according to package instructions",
            "Chop tomatoes and garlic",
            "Heat olive oil in a pan and sauté garlic",
            "Add tomatoes and cook for 5 minutes",
            "Mix with pasta and garnish with basil",
        ],
        "prep_time": 10,
        "cook_time": 15,
        "servings": 2,
        "difficulty": "easy",
        "cuisine": "Italian",
        "tags": ["quick", "vegetarian", "pasta"],
        "nutrition_info": {"calories": 450, "protein": 12, "carbs": 75, "fat": 8, "fiber": 6},
    },
    {
        "id": "fruit-salad",
        "name": "Fresh Fruit Salad",
        "description": "A refreshing fruit salad perfect for breakfast or dessert",
        "ingredients": [
            {"name": "Apple", "amount": 2, "unit": "pieces", "category": "fruits"},
            {"name": "Banana", "amount": 2, "unit": "pieces", "category": "fruits"},
            {"name": "Orange", "amount": 2, "unit": "pieces", "category": "fruits"},
            {
                "name": "Honey",
                "amount": 1,
                "unit": "tbsp",
                "category": "pantry",
                "is_optional": True,
            },
        ],
        "instructions": [
            "Wash and chop all fruits",
            "Mix fruits in a bowl",
            "Drizzle with honey if desired",
            "Serve immediately",
        ],
        "prep_time": 10,
        "cook_time": 0,
        "servings": 4,
        "difficulty": "easy",
        "cuisine": "International",
        "tags": ["breakfast", "dessert", "healthy", "vegan"],
        "nutrition_info": {"calories": 120, "protein": 1, "carbs": 30, "fat": 0, "fiber": 4},
    },
    {
        "id": "scrambled-eggs",
        "name": "Scrambled Eggs with Vegetables",
        "description": "Protein-rich breakfast with fresh vegetables",
        "ingredients": [
            {"name": "Eggs", "amount": 4, "unit": "pieces", "category": "dairy"},
            {
                "name": "Milk",
                "amount": 2,
                "unit": "tbsp",
                "category": "dairy",
                "is_optional": True,
            },
            {
                "name": "Tomato",
                "amount": 1,
                "unit": "piece",
                "category": "vegetables",
                "is_optional": True,
            },
            {
                "name": "Spinach",
                "amount": 1,
                "unit": "cup",
                "category": "vegetables",
                "is_optional": True,
            },
            {
                "name": "Cheese",
                "amount": 30,
                "unit": "g",
                "category": "dairy",
                "is_optional": True,
            },
        ],
        "instructions": [
            "Whisk eggs with milk",
            "Chop vegetables",
            "Heat pan and add vegetables",
            "Pour in egg mixture",
            "Stir gently until cooked",
            "Add cheese if desired",
        ],
        "prep_time": 5,
        "cook_time": 8,
        "servings": 2,
        "difficulty": "easy",
        "cuisine": "International",
        "tags": ["breakfast", "protein", "quick"],
        "nutrition_info": {"calories": 280, "protein": 18, "carbs": 4, "fat": 20, "fiber": 2},
    },
    {
        "id": "chicken-stir-fry",
        "name": "Chicken Stir Fry",
        "description": "A healthy and flavorful stir fry with chicken and vegetables",
        "ingredients": [
            {"name": "Chicken Breast", "amount": 300, "unit": "g", "category": "meat"},
            {"name": "Rice", "amount": 200, "unit": "g", "category": "pantry"},
            {"name": "Carrot", "amount": 2, "unit": "pieces", "category": "vegetables"},
            {"name": "Broccoli", "amount": 1, "unit": "head", "category": "vegetables"},
            {"name": "Soy Sauce", "amount": 3, "unit": "tbsp", "category": "pantry"},
            {"name": "Garlic", "amount": 3, "unit": "cloves", "category": "vegetables"},
        ],
        "instructions": [
            "Cook rice according to package instructions",
            "Cut chicken into small pieces",
            "Chop vegetables",
            "Stir fry chicken until golden",
            "Add vegetables and stir fry",
            "Add soy sauce and garlic",
            "Serve over rice",
        ],
        "prep_time": 15,
        "cook_time": 20,
        "servings": 3,
        "difficulty": "medium",
        "cuisine": "Asian",
        "tags": ["dinner", "protein", "healthy"],
        "nutrition_info": {"calories": 380, "protein": 35, "carbs": 45, "fat": 8, "fiber": 6},
    },
    {
        "id": "vegetable-soup",
        "name": "Hearty Vegetable Soup",
        "description": "A warming soup perfect for using up leftover vegetables",
        "ingredients": [
            {"name": "Carrot", "amount": 3, "unit": "pieces", "category": "vegetables"},
            {"name": "Tomato", "amount": 2, "unit": "pieces", "category": "vegetables"},
            {
                "name": "Lettuce",
                "amount": 1,
                "unit": "head",
                "category": "vegetables",
                "is_optional": True,
            },
            {"name": "Onion", "amount": 1, "unit": "piece", "category": "vegetables"},
            {"name": "Garlic", "amount": 2, "unit": "cloves", "category": "vegetables"},
            {"name": "Vegetable Broth", "amount": 1, "unit": "liter", "category": "pantry"},
        ],
        "instructions": [
            "Chop all vegetables",
            "Sauté onion and garlic",
            "Add vegetables and broth",
            "Simmer for 20 minutes",
            "Season to taste",
        ],
        "prep_time": 15,
        "cook_time": 25,
        "servings": 4,
        "difficulty": "medium",
        "cuisine": "International",
        "tags": ["soup", "vegetarian", "healthy", "warm"],
        "nutrition_info": {"calories": 120, "protein": 4, "carbs": 20, "fat": 2, "fiber": 8},
    },
    {
        "id": "beef-stew",
        "name": "Slow Cooked Beef Stew",
        "description": "A rich and hearty beef stew perfect for cold days",
        "ingredients": [
            {"name": "Ground Beef", "amount": 500, "unit": "g", "category": "meat"},
            {"name": "Carrot", "amount": 4, "unit": "pieces", "category": "vegetables"},
            {"name": "Potato", "amount": 3, "unit": "pieces", "category": "vegetables"},
            {"name": "Onion", "amount": 2, "unit": "pieces", "category": "vegetables"},
            {"name": "Beef Broth", "amount": 1, "unit": "liter", "category": "pantry"},
            {"name": "Flour", "amount": 2, "unit": "tbsp", "category": "pantry"},
        ],
        "instructions": [
            "Brown beef in a large pot",
            "Add chopped vegetables",
            "Add broth and bring to boil",
            "Simmer for 2 hours",
            "Thicken with flour if desired",
        ],
        "prep_time": 20,
        "cook_time": 120,
        "servings": 6,
        "difficulty": "hard",
        "cuisine": "International",
        "tags": ["dinner", "comfort", "slow-cook"],
        "nutrition_info": {"calories": 450, "protein": 35, "carbs": 25, "fat": 25, "fiber": 6},
    },
]


class RecipeCatalog:
    """Immutable, ordered collection of recipes passed to the ranker."""

    def __init__(self, recipes: Iterable[Recipe]):
        self._recipes: tuple[Recipe, ...] = tuple(recipes)
        self._by_id = {recipe.id: recipe for recipe in self._recipes}

    @classmethod
    def default(cls) -> "RecipeCatalog":
        """Catalog of the built-in recipes."""
        return cls.from_data(DEFAULT_RECIPE_DATA)

    @classmethod
    def from_data(cls, data: Iterable[dict[str, Any]]) -> "RecipeCatalog":
        """Build a catalog from plain recipe dictionaries."""
        return cls(Recipe.model_validate(entry) for entry in data)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def all(self) -> list[Recipe]:
        return list(self._recipes)

    def get(self, recipe_id: str) -> Recipe | None:
        return self._by_id.get(recipe_id)

    def search(self, query: str) -> list[Recipe]:
        """Case-insensitive search over name, description, tags and cuisine."""
        needle = query.lower()
        return [
            recipe
            for recipe in self._recipes
            if needle in recipe.name.lower()
            or needle in recipe.description.lower()
            or any(needle in tag.lower() for tag in recipe.tags)
            or needle in recipe.cuisine.lower()
        ]

    def by_category(self, category: str) -> list[Recipe]:
        """Recipes whose cuisine or tags name the category."""
        wanted = category.lower()
        return [
            recipe
            for recipe in self._recipes
            if recipe.cuisine.lower() == wanted or wanted in recipe.tags
        ]

    def quick(self, max_total_time: int = 30) -> list[Recipe]:
        """Recipes ready (prep plus cook) within the given minutes."""
        return [recipe for recipe in self._recipes if recipe.total_time <= max_total_time]

    def by_difficulty(self, difficulty: str) -> list[Recipe]:
        return [recipe for recipe in self._recipes if recipe.difficulty == difficulty]

    def random(self, rng: random.Random | None = None) -> Recipe | None:
        """Pick a random recipe; None for an empty catalog."""
        if not self._recipes:
            return None
        return (rng or random).choice(self._recipes)
