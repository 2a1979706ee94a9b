"""Week helpers: week boundaries, meal collection and the weekly summary."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

from mealcart.config import get_settings
from mealcart.logging_config import LoggingContext, get_logger
from mealcart.normalize.units import aggregate_ingredients
from mealcart.schemas import Ingredient, MealEntry, WeeklySummary, coerce_records

logger = get_logger(__name__)

# {date: {meal_type: meal}}; a meal is a MealEntry, a mapping, or None for an empty slot
MealsByDate = Mapping[Any, Mapping[str, MealEntry | Mapping[str, Any] | None] | None]


def start_of_week(day: date | None = None) -> date:
    """Get the Monday of the week containing ``day`` (today by default)."""
    if day is None:
        day = date.today()
    elif isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def week_dates(start: date, days: int | None = None) -> list[str]:
    """ISO date strings for ``days`` consecutive days from ``start``."""
    if days is None:
        days = get_settings().days_per_week
    return [(start + timedelta(days=offset)).isoformat() for offset in range(days)]


def collect_week_ingredients(meals_by_date: MealsByDate) -> list[Ingredient]:
    """
    Flatten the ingredients of every scheduled meal.

    Empty slots and meals without ingredients are skipped. Duplicates are
    kept; merging them is the aggregator's job.
    """
    collected: list[Ingredient] = []
    for slots in meals_by_date.values():
        for meal in (slots or {}).values():
            if not meal:
                continue
            if isinstance(meal, MealEntry):
                recipe_id, ingredients = meal.recipe_id, meal.ingredients
            else:
                recipe_id = meal.get("recipeId") or meal.get("recipe_id")
                ingredients = meal.get("ingredients") or []

            with LoggingContext(recipe_id=recipe_id):
                records = coerce_records(ingredients, Ingredient)
                logger.debug(f"Collected {len(records)} ingredients")
            collected.extend(records)
    return collected


def summarize_week(
    meals_by_date: MealsByDate,
    meal_types: Iterable[str] | None = None,
) -> WeeklySummary:
    """
    Count filled slots, complete days and distinct ingredients for a week.

    Only slots named in ``meal_types`` count towards the totals; it defaults
    to the configured meal types.
    """
    settings = get_settings()
    types = list(meal_types) if meal_types is not None else settings.meal_types

    assigned = 0
    complete_days = 0
    for slots in meals_by_date.values():
        slots = slots or {}
        filled = sum(1 for meal_type in types if slots.get(meal_type))
        assigned += filled
        if types and filled == len(types):
            complete_days += 1

    distinct = aggregate_ingredients(
        collect_week_ingredients(meals_by_date),
        normalize_units=settings.normalize_units,
    )

    return WeeklySummary(
        assigned=assigned,
        total=len(meals_by_date) * len(types),
        ingredients=len(distinct),
        complete_days=complete_days,
        total_days=len(meals_by_date),
    )
