"""Parse ingredient lines and merge them into per-key totals."""

from mealcart.normalize.parser import parse_amount, parse_ingredient_line
from mealcart.normalize.units import (
    UNIT_ALIASES,
    aggregate_ingredients,
    ingredient_key,
    normalize_unit,
)

__all__ = [
    "UNIT_ALIASES",
    "aggregate_ingredients",
    "ingredient_key",
    "normalize_unit",
    "parse_amount",
    "parse_ingredient_line",
]
