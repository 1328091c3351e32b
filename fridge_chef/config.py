"""
Configuration for Fridge Chef
Reads model selection, credentials and limits from the environment (.env supported)
"""
import logging
import os
from enum import Enum
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

DEFAULT_TEXT_MODEL = "googleai/gemini-2.5-flash"
DEFAULT_VISION_MODEL = "googleai/gemini-2.5-flash"

# Gemini rejects inline media payloads above ~20 MB
DEFAULT_MAX_MEDIA_BYTES = 20 * 1024 * 1024

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:9002", "http://127.0.0.1:9002"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class EmptyOutputPolicy(str, Enum):
    """What a flow does when the model returns no structured output at all."""
    SOFT_EMPTY = "soft_empty"
    ERROR = "error"


class AIConfig(BaseModel):
    """Settings injected into every flow at definition time."""
    api_key: Optional[str] = Field(None, description="Google GenAI API key")
    text_model: str = Field(DEFAULT_TEXT_MODEL, description="Model used for recipe suggestions")
    vision_model: str = Field(DEFAULT_VISION_MODEL, description="Video-capable model used for ingredient identification")
    identify_temperature: float = Field(0.2, ge=0.0, le=2.0, description="Sampling temperature for identification")
    max_media_bytes: int = Field(DEFAULT_MAX_MEDIA_BYTES, gt=0, description="Largest accepted inline video payload")
    identify_empty_output_policy: EmptyOutputPolicy = Field(
        EmptyOutputPolicy.SOFT_EMPTY,
        description="Identification flow behaviour when the model returns no structured output"
    )
    suggest_empty_output_policy: EmptyOutputPolicy = Field(
        EmptyOutputPolicy.ERROR,
        description="Suggestion flow behaviour when the model returns no structured output"
    )

    @classmethod
    def from_env(cls) -> "AIConfig":
        """
        Build the configuration from environment variables.

        GOOGLE_GENAI_API_KEY wins over GOOGLE_API_KEY when both are set.
        """
        return cls(
            api_key=os.getenv("GOOGLE_GENAI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            text_model=os.getenv("FRIDGE_CHEF_TEXT_MODEL", DEFAULT_TEXT_MODEL),
            vision_model=os.getenv("FRIDGE_CHEF_VISION_MODEL", DEFAULT_VISION_MODEL),
            identify_temperature=float(os.getenv("FRIDGE_CHEF_IDENTIFY_TEMPERATURE", "0.2")),
            max_media_bytes=int(os.getenv("FRIDGE_CHEF_MAX_MEDIA_BYTES", str(DEFAULT_MAX_MEDIA_BYTES))),
            identify_empty_output_policy=EmptyOutputPolicy(
                os.getenv("FRIDGE_CHEF_IDENTIFY_EMPTY_OUTPUT_POLICY", EmptyOutputPolicy.SOFT_EMPTY.value)
            ),
            suggest_empty_output_policy=EmptyOutputPolicy(
                os.getenv("FRIDGE_CHEF_SUGGEST_EMPTY_OUTPUT_POLICY", EmptyOutputPolicy.ERROR.value)
            ),
        )


def get_cors_origins() -> List[str]:
    """Allowed frontend origins, from CORS_ORIGINS or the local dev defaults."""
    raw = os.getenv("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; module loggers inherit it."""
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
    )
