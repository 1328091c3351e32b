"""
FastAPI Application for Fridge Chef
Provides AI-powered ingredient identification and recipe suggestion APIs
"""
import logging
import os
from functools import lru_cache

import uvicorn
from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from fridge_chef import __version__
from fridge_chef.ai.flows import (
    IdentifyIngredientsInput,
    IdentifyIngredientsOutput,
    RecipeFlows,
    SuggestRecipesInput,
    SuggestRecipesOutput,
    define_flows,
)
from fridge_chef.ai.media import VideoBlob
from fridge_chef.config import configure_logging, get_cors_origins
from fridge_chef.errors import (
    FridgeChefError,
    InputValidationError,
    MediaReadError,
    ResponseShapeError,
    UpstreamError,
)
from fridge_chef.services.validation import validate_ingredients

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    InputValidationError: 422,
    MediaReadError: 400,
    UpstreamError: 502,
    ResponseShapeError: 502,
}


@lru_cache(maxsize=1)
def get_flows() -> RecipeFlows:
    """Flows bound to the Gemini-backed Genkit instance, built on first use."""
    return define_flows()


def to_http_exception(error: FridgeChefError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), 500)
    return HTTPException(status_code=status_code, detail=str(error))


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Fridge Chef API",
        description="Recipe suggestions from the ingredients in your fridge",
        version=__version__
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "Fridge Chef API",
            "version": __version__
        }

    @app.post(
        "/api/identify-ingredients",
        response_model=IdentifyIngredientsOutput,
        summary="Identify Ingredients From Video",
        description="Identify the food items visible in a base64 data URI video of a fridge interior"
    )
    async def api_identify_ingredients(
        input_data: IdentifyIngredientsInput,
        flows: RecipeFlows = Depends(get_flows)
    ) -> IdentifyIngredientsOutput:
        try:
            return await flows.identify_ingredients_from_video(input_data)
        except FridgeChefError as e:
            logger.error("Error identifying ingredients: %s", e)
            raise to_http_exception(e)

    @app.post(
        "/api/identify-ingredients/upload",
        response_model=IdentifyIngredientsOutput,
        summary="Identify Ingredients From Uploaded Video",
        description="Same as /api/identify-ingredients, for a multipart file upload"
    )
    async def api_identify_ingredients_upload(
        video: UploadFile = File(...),
        flows: RecipeFlows = Depends(get_flows)
    ) -> IdentifyIngredientsOutput:
        try:
            contents = await video.read()
            blob = VideoBlob.from_bytes(contents, video.content_type or "", flows.config.max_media_bytes)
            return await flows.identify_ingredients_from_video(
                IdentifyIngredientsInput(video_data_uri=blob.to_data_uri())
            )
        except FridgeChefError as e:
            logger.error("Error identifying ingredients from upload %r: %s", video.filename, e)
            raise to_http_exception(e)

    @app.post(
        "/api/suggest-recipes",
        response_model=SuggestRecipesOutput,
        summary="Suggest Recipes",
        description="Suggest recipes for a comma-separated list of ingredients"
    )
    async def api_suggest_recipes(
        input_data: SuggestRecipesInput,
        flows: RecipeFlows = Depends(get_flows)
    ) -> SuggestRecipesOutput:
        try:
            ingredients = validate_ingredients(input_data.ingredients)
            return await flows.suggest_recipes(SuggestRecipesInput(ingredients=ingredients))
        except FridgeChefError as e:
            logger.error("Error suggesting recipes: %s", e)
            raise to_http_exception(e)

    return app


app = create_app()


# Run the application
if __name__ == "__main__":
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
