"""Free-text ingredient line parsing.

Turns one author-typed line such as ``"2 kg patata"``, ``"200g harina"`` or
``"sal"`` into an :class:`~mealcart.schemas.Ingredient`.
"""

import math
import re

from mealcart.logging_config import get_logger
from mealcart.schemas import Ingredient

logger = get_logger(__name__)

# Plain decimal number: "2", "1.5", ".5", "3."
NUMBER_PATTERN = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")

# Number glued to a unit: "2kg", "200g", "1.5l"
NUMBER_WITH_UNIT_PATTERN = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([^\W\d_]+)$")


def _decimal_token(token: str) -> str:
    # Only the first comma is read as a decimal separator.
    return token.replace(",", ".", 1)


def _finite(digits: str) -> float | None:
    value = float(digits)
    return value if math.isfinite(value) else None


def parse_amount(token: str) -> float | None:
    """
    Parse a leading quantity token.

    Accepts ``.`` or ``,`` as the decimal separator. Returns None when the
    token is not a plain non-negative number or is too large to be finite.

    Examples:
        "2" -> 2.0
        "1,5" -> 1.5
        "2kg" -> None
    """
    token = _decimal_token(token.strip())
    if NUMBER_PATTERN.match(token):
        return _finite(token)
    return None


def parse_ingredient_line(line: str | None) -> Ingredient | None:
    """
    Parse one ingredient line into an Ingredient.

    The first whitespace-separated token decides the shape:

    - a number: ``"<amount> <unit> <name...>"``, or ``"<amount> <name>"``
      when only two tokens are present
    - a number glued to unit letters: ``"<amount><unit> <name...>"``
    - anything else: the whole line is the name, amount and unit unknown

    Filler words are kept, so ``"3 cucharadas de azucar"`` yields the name
    ``"de azucar"``. A lone number yields an ingredient with an empty name.

    Args:
        line: The line as typed by the user.

    Returns:
        The parsed Ingredient, or None if the line is blank.
    """
    if not line or not line.strip():
        return None

    parts = line.split()
    amount: float | None = None
    unit: str | None = None

    first = _decimal_token(parts[0])
    number = parse_amount(parts[0])
    match = NUMBER_WITH_UNIT_PATTERN.match(first)
    glued = _finite(match.group(1)) if match else None

    if number is not None:
        amount = number
        if len(parts) >= 3:
            unit = parts[1]
            name = " ".join(parts[2:])
        elif len(parts) == 2:
            name = parts[1]
        else:
            name = ""
    elif match and glued is not None:
        amount = glued
        unit = match.group(2)
        name = " ".join(parts[1:])
    else:
        name = " ".join(parts)

    ingredient = Ingredient(name=name.lower().strip(), amount=amount, unit=unit)
    if not ingredient.name:
        logger.debug(f"Ingredient line {line!r} has a quantity but no name")
    return ingredient
