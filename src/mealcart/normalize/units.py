"""Unit normalization and ingredient aggregation."""

from collections.abc import Iterable, Mapping
from typing import Any

from mealcart.logging_config import get_logger
from mealcart.schemas import AggregatedIngredient, Ingredient, coerce_records

logger = get_logger(__name__)


# =============================================================================
# Unit Synonym Tables
# =============================================================================

# Volume units (alias -> canonical token)
VOLUME_UNITS: dict[str, str] = {
    # Metric
    "ml": "ml",
    "mililitro": "ml",
    "mililitros": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "cl": "cl",
    "centilitro": "cl",
    "centilitros": "cl",
    "dl": "dl",
    "decilitro": "dl",
    "decilitros": "dl",
    "l": "l",
    "lt": "l",
    "litro": "l",
    "litros": "l",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    # Kitchen measures
    "taza": "taza",
    "tazas": "taza",
    "cup": "taza",
    "cups": "taza",
    "vaso": "vaso",
    "vasos": "vaso",
    "cucharada": "cucharada",
    "cucharadas": "cucharada",
    "cda": "cucharada",
    "cdas": "cucharada",
    "tbsp": "cucharada",
    "tablespoon": "cucharada",
    "tablespoons": "cucharada",
    "cucharadita": "cucharadita",
    "cucharaditas": "cucharadita",
    "cdta": "cucharadita",
    "cdtas": "cucharadita",
    "tsp": "cucharadita",
    "teaspoon": "cucharadita",
    "teaspoons": "cucharadita",
}

# Weight units (alias -> canonical token)
WEIGHT_UNITS: dict[str, str] = {
    "g": "g",
    "gr": "g",
    "grs": "g",
    "gramo": "g",
    "gramos": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogramo": "kg",
    "kilogramos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "mg": "mg",
    "miligramo": "mg",
    "miligramos": "mg",
    "oz": "oz",
    "onza": "oz",
    "onzas": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "lbs": "lb",
    "libra": "lb",
    "libras": "lb",
    "pound": "lb",
    "pounds": "lb",
}

# Count-based units (alias -> canonical token)
COUNT_UNITS: dict[str, str] = {
    "unidad": "unidad",
    "unidades": "unidad",
    "ud": "unidad",
    "uds": "unidad",
    "u": "unidad",
    "piece": "unidad",
    "pieces": "unidad",
    "pc": "unidad",
    "pcs": "unidad",
    "diente": "diente",
    "dientes": "diente",
    "clove": "diente",
    "cloves": "diente",
    "lata": "lata",
    "latas": "lata",
    "can": "lata",
    "cans": "lata",
    "bote": "bote",
    "botes": "bote",
    "jar": "bote",
    "jars": "bote",
    "paquete": "paquete",
    "paquetes": "paquete",
    "package": "paquete",
    "packages": "paquete",
    "pack": "paquete",
    "packs": "paquete",
    "sobre": "sobre",
    "sobres": "sobre",
    "loncha": "loncha",
    "lonchas": "loncha",
    "rebanada": "rebanada",
    "rebanadas": "rebanada",
    "slice": "rebanada",
    "slices": "rebanada",
    "manojo": "manojo",
    "manojos": "manojo",
    "bunch": "manojo",
    "bunches": "manojo",
    "pizca": "pizca",
    "pizcas": "pizca",
    "pinch": "pizca",
}

UNIT_ALIASES: dict[str, str] = {**VOLUME_UNITS, **WEIGHT_UNITS, **COUNT_UNITS}


# =============================================================================
# Keys
# =============================================================================


def normalize_unit(unit: str | None) -> str | None:
    """
    Map a unit to its canonical token.

    Case and synonyms collapse ("Kg", "kilos", "kilogramos" -> "kg"), but
    magnitudes are never converted ("g" and "kg" stay distinct). Units not
    in the tables are only lower-cased and trimmed.
    """
    if not unit:
        return unit

    unit_lower = unit.lower().strip()
    return UNIT_ALIASES.get(unit_lower, unit_lower)


def ingredient_key(
    name: str | None,
    unit: str | None,
    *,
    normalize_units: bool = False,
) -> tuple[str, str]:
    """
    Build the identity key used to merge and match ingredients.

    The name is lower-cased and trimmed. The unit is taken verbatim unless
    ``normalize_units`` is set; a missing unit keys as ``""``.
    """
    if normalize_units:
        unit = normalize_unit(unit)
    return (name or "").lower().strip(), unit or ""


# =============================================================================
# Ingredient Aggregation
# =============================================================================


def aggregate_ingredients(
    ingredients: Iterable[Ingredient | Mapping[str, Any]],
    *,
    normalize_units: bool = False,
) -> list[AggregatedIngredient]:
    """
    Aggregate ingredients from several recipes, summing same name+unit.

    Ingredients with an unknown amount add nothing to a group's total but
    never null it out; a group whose members are all unknown keeps an
    unknown total. Name and unit of each group come from its first member.

    Args:
        ingredients: Ingredients (or mappings with 'name', 'amount', 'unit')
            gathered from every scheduled meal.
        normalize_units: Merge unit synonyms under one canonical unit.

    Returns:
        Aggregated ingredients in first-seen order.
    """
    records = coerce_records(ingredients, Ingredient)
    aggregated: dict[tuple[str, str], AggregatedIngredient] = {}

    for ing in records:
        key = ingredient_key(ing.name, ing.unit, normalize_units=normalize_units)
        existing = aggregated.get(key)

        if existing is None:
            aggregated[key] = AggregatedIngredient(
                name=ing.name,
                unit=normalize_unit(ing.unit) if normalize_units else ing.unit,
                total_amount=ing.amount,
            )
        elif ing.amount is not None:
            current = existing.total_amount if existing.total_amount is not None else 0.0
            aggregated[key] = existing.model_copy(
                update={"total_amount": current + ing.amount}
            )

    logger.debug(f"Aggregated {len(records)} ingredients into {len(aggregated)} entries")
    return list(aggregated.values())
