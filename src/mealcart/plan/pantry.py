"""Pantry subtraction: turn aggregated requirements into a shopping list."""

from collections.abc import Iterable, Mapping
from typing import Any

from mealcart.logging_config import get_logger
from mealcart.normalize.units import ingredient_key
from mealcart.schemas import (
    AggregatedIngredient,
    PantryItem,
    ShoppingListItem,
    coerce_records,
)

logger = get_logger(__name__)


def subtract_pantry(
    aggregated: Iterable[AggregatedIngredient | Mapping[str, Any]],
    pantry: Iterable[PantryItem | Mapping[str, Any]],
    *,
    normalize_units: bool = False,
) -> list[ShoppingListItem]:
    """
    Remove or reduce aggregated items already covered by pantry stock.

    Pantry items are applied in order, each against every aggregated item
    sharing its name+unit key, so repeated pantry entries reduce
    cumulatively. An item whose required amount is unknown is dropped by
    any matching pantry entry. A known amount is reduced by the pantry
    amount (unknown counts as 0) and the item is dropped once it reaches
    zero or below. Unmatched items pass through unchanged.

    The inputs are never mutated.

    Args:
        aggregated: Output of ``aggregate_ingredients``.
        pantry: On-hand stock, same shape as an ingredient.
        normalize_units: Match units through their canonical token.

    Returns:
        Items still to buy, in aggregated order.
    """
    required = coerce_records(aggregated, AggregatedIngredient)
    keys = [
        ingredient_key(a.name, a.unit, normalize_units=normalize_units) for a in required
    ]
    # Covered entries become None and are filtered out at the end.
    working: list[ShoppingListItem | None] = [
        ShoppingListItem(name=a.name, unit=a.unit, total_amount=a.total_amount)
        for a in required
    ]

    for stock in coerce_records(pantry, PantryItem):
        stock_key = ingredient_key(stock.name, stock.unit, normalize_units=normalize_units)
        for i, item in enumerate(working):
            if item is None or keys[i] != stock_key:
                continue

            if item.total_amount is None:
                working[i] = None
                continue

            remaining = item.total_amount - (stock.amount or 0.0)
            if remaining <= 0:
                working[i] = None
            else:
                working[i] = item.model_copy(update={"total_amount": remaining})

    shopping_list = [item for item in working if item is not None]
    logger.debug(
        f"Pantry covered {len(working) - len(shopping_list)} of {len(working)} items"
    )
    return shopping_list
