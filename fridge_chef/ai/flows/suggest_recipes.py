"""
Suggest Recipes Flow
Suggests recipes that can be made from a comma-separated list of ingredients.
"""
import logging
from typing import Any, List

from pydantic import BaseModel, Field

from fridge_chef.ai.generation import generate, parse_output
from fridge_chef.config import AIConfig

logger = logging.getLogger(__name__)

FLOW_NAME = "suggestRecipesFlow"


class Recipe(BaseModel):
    """A single recipe suggestion."""
    name: str = Field(description="The name of the recipe.")
    ingredients: str = Field(description="A list of ingredients required for the recipe.")
    instructions: str = Field(description="Step-by-step instructions for preparing the recipe.")


class SuggestRecipesInput(BaseModel):
    """Input schema for recipe suggestions."""
    ingredients: str = Field(description="A comma-separated list of ingredients available in the fridge.")


class SuggestRecipesOutput(BaseModel):
    """Output schema for recipe suggestions."""
    recipes: List[Recipe] = Field(description="An array of recipe suggestions.")


def build_suggest_recipes_prompt(ingredients: str) -> str:
    return f"""You are a recipe suggestion AI. Given the following ingredients, suggest some recipes.

Ingredients: {ingredients}

Recipes:
"""


def define_suggest_recipes_flow(ai: Any, config: AIConfig):
    """
    Register the suggestion flow on a Genkit instance.

    Args:
        ai: Genkit instance (or any object exposing flow() and generate())
        config: Model selection and empty-output policy

    Returns:
        The async flow function
    """

    @ai.flow(name=FLOW_NAME)
    async def suggest_recipes(input: SuggestRecipesInput) -> SuggestRecipesOutput:
        """
        Suggests recipes for the given ingredients.

        Always returns a list (possibly empty) or raises ResponseShapeError.
        """
        input = SuggestRecipesInput.model_validate(input)
        logger.info("%s: suggesting recipes for %r", FLOW_NAME, input.ingredients)

        result = await generate(
            ai,
            FLOW_NAME,
            model=config.text_model,
            prompt=build_suggest_recipes_prompt(input.ingredients),
            output_schema=SuggestRecipesOutput,
        )

        output = parse_output(
            result,
            SuggestRecipesOutput,
            config.suggest_empty_output_policy,
            empty=SuggestRecipesOutput(recipes=[]),
            flow_name=FLOW_NAME,
        )
        logger.info("%s: received %d recipe(s)", FLOW_NAME, len(output.recipes))
        return output

    return suggest_recipes
