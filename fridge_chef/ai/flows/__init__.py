# Genkit flows
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from fridge_chef.ai.generation import unwrap_flow_errors
from fridge_chef.ai.flows.identify_ingredients_from_video import (
    IdentifyIngredientsInput,
    IdentifyIngredientsOutput,
    define_identify_ingredients_flow,
)
from fridge_chef.ai.flows.suggest_recipes import (
    Recipe,
    SuggestRecipesInput,
    SuggestRecipesOutput,
    define_suggest_recipes_flow,
)
from fridge_chef.config import AIConfig

IdentifyIngredientsFlow = Callable[[IdentifyIngredientsInput], Awaitable[IdentifyIngredientsOutput]]
SuggestRecipesFlow = Callable[[SuggestRecipesInput], Awaitable[SuggestRecipesOutput]]


@dataclass(frozen=True)
class RecipeFlows:
    """Both flows, bound to one Genkit instance and configuration."""
    identify_ingredients_from_video: IdentifyIngredientsFlow
    suggest_recipes: SuggestRecipesFlow
    config: AIConfig


def define_flows(ai: Optional[Any] = None, config: Optional[AIConfig] = None) -> RecipeFlows:
    """
    Define both flows; builds a Gemini-backed Genkit instance when `ai` is omitted.

    The returned callables raise FridgeChefError subclasses directly.
    """
    config = config or AIConfig.from_env()
    if ai is None:
        from fridge_chef.ai.genkit import create_ai
        ai = create_ai(config)
    return RecipeFlows(
        identify_ingredients_from_video=unwrap_flow_errors(define_identify_ingredients_flow(ai, config)),
        suggest_recipes=unwrap_flow_errors(define_suggest_recipes_flow(ai, config)),
        config=config,
    )


__all__ = [
    "IdentifyIngredientsInput",
    "IdentifyIngredientsOutput",
    "Recipe",
    "RecipeFlows",
    "SuggestRecipesInput",
    "SuggestRecipesOutput",
    "define_flows",
]
