from typing import Optional

from genkit.ai import Genkit
from genkit.plugins.google_genai import GoogleAI

from fridge_chef.config import AIConfig


def create_ai(config: Optional[AIConfig] = None) -> Genkit:
    """Build a Genkit instance backed by Google Gemini for the given configuration."""
    config = config or AIConfig.from_env()
    return Genkit(
        plugins=[GoogleAI(api_key=config.api_key)],
        model=config.text_model,
    )
