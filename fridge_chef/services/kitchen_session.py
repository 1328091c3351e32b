"""
Kitchen Session
Per-user presentation state: the ingredient field, one pending status and the display regions.
"""
import logging
from enum import Enum
from typing import List, Optional

from fridge_chef.ai.flows import (
    IdentifyIngredientsInput,
    Recipe,
    RecipeFlows,
    SuggestRecipesInput,
)
from fridge_chef.ai.media import VideoBlob
from fridge_chef.errors import (
    FridgeChefError,
    InputValidationError,
    MediaReadError,
    SessionBusyError,
)
from fridge_chef.services.validation import validate_ingredients

logger = logging.getLogger(__name__)

NO_RECIPES_MESSAGE = "Couldn't find any recipes with those ingredients. Try adding more?"
RECIPES_READY_MESSAGE = "Recipes Generated! Bon appétit!"
NOTHING_IDENTIFIED_MESSAGE = "No ingredients could be identified in the video. Try typing them instead."


class SessionStatus(str, Enum):
    """Only one request may be pending at a time."""
    IDLE = "idle"
    IDENTIFYING = "identifying"
    SUGGESTING = "suggesting"


class KitchenSession:
    """
    Drives the two flows for a single user.

    Display regions:
        ingredients: editable ingredient text
        recipes: last suggestion result, None before the first successful one
        suggestion_error / video_error: user-facing error messages
        notice: informational message for the last operation
    """

    def __init__(self, flows: RecipeFlows, ingredients: str = ""):
        self.flows = flows
        self.ingredients = ingredients
        self.status = SessionStatus.IDLE
        self.recipes: Optional[List[Recipe]] = None
        self.suggestion_error: Optional[str] = None
        self.video_error: Optional[str] = None
        self.notice: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self.status != SessionStatus.IDLE

    def _begin(self, status: SessionStatus) -> None:
        if self.is_busy:
            raise SessionBusyError(f"Cannot start {status.value} while {self.status.value}")
        self.status = status
        self.notice = None

    async def submit_ingredients(self, ingredients: Optional[str] = None) -> Optional[List[Recipe]]:
        """
        Ask for recipe suggestions for the current (or given) ingredient text.

        Returns the recipes on success, None when an error was recorded in
        suggestion_error.
        """
        self._begin(SessionStatus.SUGGESTING)
        try:
            if ingredients is not None:
                self.ingredients = ingredients
            validated = validate_ingredients(self.ingredients)

            self.suggestion_error = None
            self.recipes = None
            result = await self.flows.suggest_recipes(SuggestRecipesInput(ingredients=validated))
        except InputValidationError as e:
            self.suggestion_error = str(e)
            return None
        except FridgeChefError as e:
            logger.error("Error suggesting recipes: %s", e)
            self.suggestion_error = f"Failed to generate recipes: {e.user_message}"
            return None
        finally:
            self.status = SessionStatus.IDLE

        if not result.recipes:
            self.suggestion_error = NO_RECIPES_MESSAGE
            return None

        self.recipes = result.recipes
        self.notice = RECIPES_READY_MESSAGE
        return self.recipes

    async def upload_video(self, data: bytes, media_type: str) -> Optional[str]:
        """
        Identify ingredients in an uploaded video and put them in the ingredient field.

        Returns the identified ingredient text (possibly empty), or None when
        an error was recorded in video_error.
        """
        self._begin(SessionStatus.IDENTIFYING)
        self.video_error = None
        try:
            blob = VideoBlob.from_bytes(data, media_type, self.flows.config.max_media_bytes)
            result = await self.flows.identify_ingredients_from_video(
                IdentifyIngredientsInput(video_data_uri=blob.to_data_uri())
            )
        except MediaReadError as e:
            logger.warning("Could not read uploaded video: %s", e)
            self.video_error = f"{e}. {e.user_message}"
            return None
        except FridgeChefError as e:
            logger.error("Error identifying ingredients: %s", e)
            self.video_error = f"Failed to identify ingredients: {e.user_message}"
            return None
        finally:
            self.status = SessionStatus.IDLE

        identified = result.identified_ingredients or ""
        if not identified:
            # Keep whatever the user already typed
            self.notice = NOTHING_IDENTIFIED_MESSAGE
            return identified

        self.ingredients = identified
        return identified
