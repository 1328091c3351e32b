"""
Recipe Card Service
Shapes suggested recipes for display
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from fridge_chef.ai.flows.suggest_recipes import Recipe
from fridge_chef.services.validation import split_ingredients

# First match wins, checked against the lower-cased recipe name
CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("chicken", ("chicken",)),
    ("beef", ("beef", "steak")),
    ("fish", ("fish", "salmon")),
    ("salad", ("salad",)),
    ("vegetable", ("vegetable", "carrot", "broccoli")),
    ("fruit", ("fruit", "apple", "smoothie")),
]

CARD_DESCRIPTION = "A delicious recipe suggestion based on your ingredients."


class RecipeCard(BaseModel):
    """Display model for one recipe."""
    name: str
    category: Optional[str] = Field(None, description="Keyword category used to pick an icon")
    description: str = CARD_DESCRIPTION
    ingredients: List[str] = Field(default_factory=list)
    instructions: str


def recipe_category(name: str) -> Optional[str]:
    lower_name = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower_name for keyword in keywords):
            return category
    return None


def build_recipe_card(recipe: Recipe) -> RecipeCard:
    return RecipeCard(
        name=recipe.name,
        category=recipe_category(recipe.name),
        ingredients=split_ingredients(recipe.ingredients),
        instructions=recipe.instructions.strip(),
    )


def render_recipe_card(card: RecipeCard) -> str:
    """Plain-text rendering used by the CLI."""
    title = card.name if not card.category else f"{card.name} [{card.category}]"
    lines = [title, "=" * len(title), card.description, "", "Ingredients:"]
    lines.extend(f"  - {item}" for item in card.ingredients)
    lines.extend(["", "Instructions:", card.instructions])
    return "\n".join(lines)
