"""
Identify Ingredients From Video Flow
Lists the distinct food items visible in a video of a refrigerator's interior.
"""
import logging
from typing import Any, Optional

import genkit.ai  # noqa: F401  (must load before genkit.types: circular import in genkit 0.4)
from genkit.types import Media, MediaPart, Part, TextPart
from pydantic import BaseModel, ConfigDict, Field

from fridge_chef.ai.generation import generate, parse_output
from fridge_chef.ai.media import VideoBlob
from fridge_chef.config import AIConfig
from fridge_chef.services.validation import join_ingredients, split_ingredients

logger = logging.getLogger(__name__)

FLOW_NAME = "identifyIngredientsFlow"

IDENTIFY_INGREDIENTS_PROMPT = """You are an expert food identification assistant. Analyze the provided video frames showing the inside of a refrigerator.
Identify all visible food ingredients.
List the identified ingredients as a comma-separated string.
Focus only on distinct food items (e.g., 'milk', 'eggs', 'broccoli', 'chicken breast', 'cheddar cheese', 'apples').
Do not include containers unless they clearly indicate the food type (e.g., 'yogurt tub' is fine if yogurt is identifiable, but 'plastic container' is not).
If no ingredients are clearly identifiable, return an empty string for the identifiedIngredients field.

Identified Ingredients (comma-separated):"""


class IdentifyIngredientsInput(BaseModel):
    """Input schema for ingredient identification."""
    model_config = ConfigDict(populate_by_name=True)

    video_data_uri: str = Field(
        alias="videoDataUri",
        description=(
            "A video of a fridge interior, as a data URI that must include a MIME type and use "
            "Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        )
    )


class IdentifyIngredientsOutput(BaseModel):
    """Output schema for ingredient identification."""
    model_config = ConfigDict(populate_by_name=True)

    identified_ingredients: Optional[str] = Field(
        default="",
        alias="identifiedIngredients",
        description="A comma-separated list of ingredients identified in the video."
    )


def define_identify_ingredients_flow(ai: Any, config: AIConfig):
    """
    Register the identification flow on a Genkit instance.

    Args:
        ai: Genkit instance (or any object exposing flow() and generate())
        config: Model selection, temperature, media limits and empty-output policy

    Returns:
        The async flow function
    """

    @ai.flow(name=FLOW_NAME)
    async def identify_ingredients_from_video(input: IdentifyIngredientsInput) -> IdentifyIngredientsOutput:
        """
        Identifies ingredients in a fridge video.

        An unreadable payload raises MediaReadError before the model is called.
        Nothing recognized is a successful empty result.
        """
        input = IdentifyIngredientsInput.model_validate(input)
        blob = VideoBlob.from_data_uri(input.video_data_uri, config.max_media_bytes)
        logger.info("%s: %s payload of %d bytes", FLOW_NAME, blob.media_type, len(blob.data))

        result = await generate(
            ai,
            FLOW_NAME,
            model=config.vision_model,
            prompt=[
                Part(root=TextPart(text=IDENTIFY_INGREDIENTS_PROMPT)),
                Part(root=MediaPart(media=Media(url=blob.to_data_uri(), content_type=blob.media_type))),
            ],
            config={"temperature": config.identify_temperature},
            output_schema=IdentifyIngredientsOutput,
        )

        output = parse_output(
            result,
            IdentifyIngredientsOutput,
            config.identify_empty_output_policy,
            empty=IdentifyIngredientsOutput(identified_ingredients=""),
            flow_name=FLOW_NAME,
        )

        # Tidy "milk,  eggs, ," into "milk, eggs"
        items = split_ingredients(output.identified_ingredients or "")
        logger.info("%s: identified %d ingredient(s)", FLOW_NAME, len(items))
        return IdentifyIngredientsOutput(identified_ingredients=join_ingredients(items))

    return identify_ingredients_from_video
