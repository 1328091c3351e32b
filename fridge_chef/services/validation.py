"""
Ingredient list validation
Caller-side checks applied before any flow is invoked
"""
from typing import List

from fridge_chef.errors import InputValidationError


def split_ingredients(ingredients: str) -> List[str]:
    """Split a comma-separated ingredient string into trimmed, non-blank items."""
    return [item.strip() for item in ingredients.split(",") if item.strip()]


def join_ingredients(items: List[str]) -> str:
    return ", ".join(items)


def validate_ingredients(ingredients: str) -> str:
    """
    Reject ingredient text that is empty after trimming.

    Args:
        ingredients: Free-text, comma-separated ingredient list

    Returns:
        The trimmed ingredient text

    Raises:
        InputValidationError: nothing but whitespace and commas was entered
    """
    trimmed = (ingredients or "").strip()
    if not split_ingredients(trimmed):
        raise InputValidationError("Please list at least one ingredient.")
    return trimmed
