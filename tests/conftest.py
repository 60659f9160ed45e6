"""Pytest configuration and shared fixtures."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from smarteat.config import get_settings
from smarteat.logging_config import clear_context
from smarteat.recipes.catalog import RecipeCatalog
from smarteat.recognition.base import OCRResult, RecognitionResult
from smarteat.schemas import GroceryItem, GroceryList, InventoryItem
from smarteat.shopping.storage import InMemoryKeyValueStore, PurchaseSummaryRepository

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture(autouse=True)
def reset_global_state():
    """Keep cached settings and logging context from leaking between tests."""
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def catalog():
    """The built-in recipe catalog."""
    return RecipeCatalog.default()


@pytest.fixture
def tomato_pasta_inventory():
    """Inventory with a tomato about to go off and long-lived pasta."""
    return [
        InventoryItem(id="inv-tomato", name="Tomato", category="vegetables", days_until_expiry=1),
        InventoryItem(id="inv-pasta", name="Pasta", category="pantry", days_until_expiry=365),
    ]


@pytest.fixture
def mixed_inventory():
    """Inventory spanning every expiration tier."""
    return [
        InventoryItem(name="Tomato", category="vegetables", days_until_expiry=2),
        InventoryItem(name="Pasta", category="pantry", days_until_expiry=365),
        InventoryItem(name="Garlic", category="vegetables", days_until_expiry=-1),
        InventoryItem(name="Eggs", category="dairy", days_until_expiry=5),
        InventoryItem(name="Cheese", category="dairy"),
    ]


# =============================================================================
# Shopping Fixtures
# =============================================================================


@pytest.fixture
def today():
    """Fixed reference day for expiry calculations."""
    return date(2025, 1, 10)


@pytest.fixture
def grocery_list():
    """Grocery list with milk and bread."""
    return GroceryList(
        id="list-weekly",
        name="Weekly shop",
        items=[
            GroceryItem(id="g-milk", name="Milk", quantity=2, unit="liters", category="dairy"),
            GroceryItem(id="g-bread", name="Bread", quantity=1, unit="loaf", category="pantry"),
        ],
    )


@pytest.fixture
def repository():
    """Purchase summary repository over an in-memory store."""
    return PurchaseSummaryRepository(InMemoryKeyValueStore())


@pytest.fixture
def mock_recognizer():
    """Product recognizer returning nothing until a test configures it."""
    recognizer = MagicMock()
    recognizer.name = "test"
    recognizer.recognize = AsyncMock(return_value=RecognitionResult(products=[]))
    return recognizer


@pytest.fixture
def mock_date_extractor():
    """Date extractor returning no dates until a test configures it."""
    extractor = MagicMock()
    extractor.name = "test"
    extractor.extract_dates = AsyncMock(return_value=OCRResult(dates=[]))
    return extractor
