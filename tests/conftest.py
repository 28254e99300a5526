"""Pytest configuration and shared fixtures."""

import pytest

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Weekly Blueprint Fixtures
# =============================================================================


@pytest.fixture
def sample_blueprint():
    """Metric weekly blueprint authored for 4 servings."""
    return {
        "useImperial": False,
        "servings": 4,
        "shoppingList": {
            "Produce": [
                {"item": "Spinach", "quantity": "200g", "bought": False},
                {"item": "Lemons – 2 items", "quantity": ""},
            ],
            "Protein": [
                "Chicken breast – 2.0 lbs",
                {"item": "Salmon fillets 500g", "quantity": "", "bought": True, "note": "wild"},
            ],
        },
        "meals": [
            {
                "day": "Monday",
                "breakfast": {"name": "Overnight oats", "ingredients": ["80 g oats", "250 ml milk"]},
                "lunch": {"name": "Chicken salad", "ingredients": ["1.5 lbs chicken", "Salt to taste"]},
                "dinner": {"name": "Baked salmon", "ingredients": ["2 fillets salmon"]},
                "snacks": [{"name": "Yogurt cup", "ingredients": ["150 g yogurt"]}],
            },
            {
                "breakfast": {"name": "Scrambled eggs", "ingredients": ["4 eggs"]},
            },
        ],
    }


@pytest.fixture
def imperial_blueprint():
    """Blueprint that was generated directly in imperial units."""
    return {
        "useImperial": True,
        "servings": 4,
        "shoppingList": {"Pantry": [{"item": "Rice", "quantity": "2 lbs"}]},
        "meals": [{"day": "Monday", "dinner": {"name": "Rice bowl", "ingredients": ["1 cup rice"]}}],
    }


# =============================================================================
# Open Food Facts Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_openfoodfacts_response():
    """Sample Open Food Facts v2 product response without sugar data."""
    return {
        "code": "5701234567890",
        "status": 1,
        "status_verbose": "product found",
        "product": {
            "product_name": "Whole Wheat Bread",
            "serving_size": "2 slices (56 g)",
            "nutriments": {
                "energy-kcal_100g": 247,
                "proteins_100g": 13.0,
                "carbohydrates_100g": 41.3,
                "fat_100g": 3.4,
                "sugars_100g": 0,
                "added-sugars_100g": 0,
            },
        },
    }


@pytest.fixture
def mock_openfoodfacts_sugar_response():
    """Sample Open Food Facts product that reports its sugar content."""
    return {
        "code": "3017620422003",
        "status": 1,
        "product": {
            "product_name": "Hazelnut spread",
            "serving_quantity": 15,
            "nutriments": {
                "energy-kcal_100g": 539,
                "proteins_100g": 6.3,
                "carbohydrates_100g": 57.5,
                "fat_100g": 30.9,
                "sugars_100g": 56.3,
                "added-sugars_100g": 50.14,
            },
        },
    }
