"""Pytest configuration and shared fixtures."""

import pytest

from mealcart.config import Settings, get_settings
from mealcart.logging_config import clear_context

# =============================================================================
# Pytest Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_and_context():
    """Drop cached settings and logging context between tests."""
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()


@pytest.fixture
def settings():
    """Settings with literal unit matching."""
    return Settings(_env_file=None)


@pytest.fixture
def normalizing_settings():
    """Settings with unit synonyms merged."""
    return Settings(_env_file=None, normalize_units=True)


# =============================================================================
# Week Fixtures
# =============================================================================


def _meal(day: str, meal_type: str, recipe_name: str, ingredients: list[dict]) -> dict:
    return {
        "date": day,
        "mealType": meal_type,
        "recipeId": recipe_name.lower(),
        "recipeName": recipe_name,
        "ingredients": ingredients,
    }


@pytest.fixture
def sample_week():
    """A week starting Monday 2026-10-19 in the shape the storage layer returns."""
    week = {
        "2026-10-19": {
            "desayuno": _meal(
                "2026-10-19",
                "desayuno",
                "Tostadas",
                [
                    {"name": "pan", "amount": 2, "unit": "rebanada"},
                    {"name": "aceite", "amount": 1, "unit": "l"},
                ],
            ),
            "almuerzo": _meal(
                "2026-10-19",
                "almuerzo",
                "Ensalada",
                [
                    {"name": "tomate", "amount": 2, "unit": "unidad"},
                    {"name": "sal", "amount": None, "unit": None},
                ],
            ),
            "cena": _meal(
                "2026-10-19",
                "cena",
                "Tortilla",
                [
                    {"name": "patata", "amount": 1, "unit": "kg"},
                    {"name": "huevo", "amount": 6, "unit": "unidad"},
                    {"name": "sal", "amount": None, "unit": None},
                    {"name": "aceite", "amount": None, "unit": "l"},
                ],
            ),
        },
        "2026-10-20": {
            "almuerzo": _meal(
                "2026-10-20",
                "almuerzo",
                "Ensalada",
                [{"name": "tomate", "amount": 3, "unit": "unidad"}],
            ),
            "cena": None,
        },
    }
    for day in ("2026-10-21", "2026-10-22", "2026-10-23", "2026-10-24", "2026-10-25"):
        week[day] = {}
    return week


@pytest.fixture
def sample_pantry():
    """Pantry covering the eggs and salt and part of the tomatoes."""
    return [
        {"name": "huevo", "amount": 6, "unit": "unidad"},
        {"name": "tomate", "amount": 2, "unit": "unidad"},
        {"name": "sal", "amount": 1, "unit": None},
    ]
