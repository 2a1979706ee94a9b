"""Value records exchanged between the engine and its callers."""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordT = TypeVar("RecordT", bound=BaseModel)


class Ingredient(BaseModel):
    """A named quantity needed by a recipe. ``None`` means unknown."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = ""
    amount: float | None = None
    unit: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _missing_name_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class PantryItem(Ingredient):
    """Stock already on hand."""


class AggregatedIngredient(BaseModel):
    """Summed requirement for one name+unit key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    name: str = ""
    unit: str | None = None
    total_amount: float | None = Field(default=None, alias="totalAmount")

    @field_validator("name", mode="before")
    @classmethod
    def _missing_name_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ShoppingListItem(AggregatedIngredient):
    """An item still to buy; ``total_amount`` is the quantity still needed."""

    def display_quantity(self) -> str:
        """Get human-readable quantity string, ``?`` when unknown."""
        if self.total_amount is None:
            qty = "?"
        elif self.total_amount == int(self.total_amount):
            qty = str(int(self.total_amount))
        else:
            qty = f"{self.total_amount:.2f}".rstrip("0").rstrip(".")
        if self.unit:
            return f"{qty} {self.unit}"
        return qty


class MealEntry(BaseModel):
    """A recipe scheduled onto one day/meal slot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    meal_type: str = Field(alias="mealType")
    recipe_id: str | None = Field(default=None, alias="recipeId")
    recipe_name: str | None = Field(default=None, alias="recipeName")
    ingredients: tuple[Ingredient, ...] = ()


class WeeklySummary(BaseModel):
    """Slot and ingredient counts for a planned week."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    assigned: int = 0
    total: int = 0
    ingredients: int = 0
    complete_days: int = Field(default=0, alias="completeDays")
    total_days: int = Field(default=0, alias="totalDays")

    @property
    def is_complete(self) -> bool:
        return self.complete_days == self.total_days


def coerce_records(
    records: Iterable[RecordT | Mapping[str, Any]],
    model: type[RecordT],
) -> list[RecordT]:
    """Validate plain mappings into ``model``; instances pass through as-is."""
    coerced = []
    for record in records:
        if isinstance(record, model):
            coerced.append(record)
        elif isinstance(record, BaseModel):
            coerced.append(model.model_validate(record.model_dump()))
        else:
            coerced.append(model.model_validate(record))
    return coerced
