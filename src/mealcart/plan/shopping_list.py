"""Shopping list generation from a planned week."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from mealcart.config import Settings, get_settings
from mealcart.logging_config import LoggingContext, get_logger
from mealcart.normalize.units import aggregate_ingredients
from mealcart.plan.pantry import subtract_pantry
from mealcart.plan.week import MealsByDate, collect_week_ingredients, start_of_week
from mealcart.schemas import AggregatedIngredient, PantryItem, ShoppingListItem

logger = get_logger(__name__)


@dataclass
class ShoppingList:
    """Shopping list for one week."""

    week_start: date
    items: list[ShoppingListItem] = field(default_factory=list)

    # Aggregated entries removed or reduced by pantry stock
    pantry_hits: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)


class ShoppingListGenerator:
    """
    Builds the week's shopping list:
    - Collects ingredients from every scheduled meal
    - Aggregates quantities per name+unit
    - Subtracts pantry stock
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def generate(
        self,
        meals_by_date: MealsByDate,
        pantry: Iterable[PantryItem | Mapping[str, Any]] = (),
        week_start: date | None = None,
    ) -> ShoppingList:
        """
        Generate the shopping list for a week of scheduled meals.

        Args:
            meals_by_date: ``{date: {meal_type: meal}}`` for the week.
            pantry: On-hand stock.
            week_start: Monday of the week, used for logging context.
                Defaults to the current week.

        Returns:
            ShoppingList with the items still to buy.
        """
        week_start = week_start or start_of_week()

        with LoggingContext(week=week_start.isoformat()):
            logger.info("Loading shopping list")

            ingredients = collect_week_ingredients(meals_by_date)
            if not ingredients:
                logger.info("No ingredients found for shopping list")
                return ShoppingList(week_start=week_start)

            normalize_units = self.settings.normalize_units
            aggregated = aggregate_ingredients(ingredients, normalize_units=normalize_units)
            items = subtract_pantry(aggregated, pantry, normalize_units=normalize_units)

            pantry_hits = sum(
                1
                for before, after in _pair_with_survivors(aggregated, items)
                if after is None or after.total_amount != before.total_amount
            )

            logger.info(
                f"Shopping list loaded: {len(items)} items "
                f"({len(ingredients)} ingredients, {pantry_hits} covered by pantry)"
            )

            return ShoppingList(week_start=week_start, items=items, pantry_hits=pantry_hits)


def _pair_with_survivors(
    before: list[AggregatedIngredient],
    after: list[ShoppingListItem],
) -> Iterator[tuple[AggregatedIngredient, ShoppingListItem | None]]:
    """Pair each aggregated entry with its surviving shopping item, or None."""
    remaining = iter(after)
    current = next(remaining, None)
    for entry in before:
        if current is not None and current.name == entry.name and current.unit == entry.unit:
            yield entry, current
            current = next(remaining, None)
        else:
            yield entry, None
