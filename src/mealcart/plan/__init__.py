"""Week planning and shopping list logic."""

from mealcart.plan.pantry import subtract_pantry
from mealcart.plan.shopping_list import (
    ShoppingList,
    ShoppingListGenerator,
)
from mealcart.plan.week import (
    collect_week_ingredients,
    start_of_week,
    summarize_week,
    week_dates,
)

__all__ = [
    "ShoppingList",
    "ShoppingListGenerator",
    "collect_week_ingredients",
    "start_of_week",
    "subtract_pantry",
    "summarize_week",
    "week_dates",
]
