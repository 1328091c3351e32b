"""
Shared test fixtures: a scripted stand-in for the Genkit instance
"""
import base64
from typing import Any, Dict, List

import pytest
from genkit.core.error import GenkitError

from fridge_chef.ai.flows import RecipeFlows, define_flows
from fridge_chef.config import AIConfig


class ScriptedResult:
    """Mimics the generate() response wrapper: only .output is read."""

    def __init__(self, output: Any):
        self._output = output

    @property
    def output(self):
        if isinstance(self._output, Exception):
            raise self._output
        return self._output


class ScriptedAI:
    """
    Same flow()/generate() surface as Genkit, answering from a script.

    Each scripted entry is either an output value (dict, model or None), a
    ScriptedResult, or an exception to raise from generate().
    """

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def flow(self, name=None):
        """Like Genkit, run the flow as an action that re-raises failures as GenkitError."""
        def decorator(func):
            async def run_action(input):
                try:
                    return await func(input)
                except Exception as e:
                    raise GenkitError(message=f"Error while running action {name}", cause=e) from e
            return run_action
        return decorator

    async def generate(self, **kwargs):
        self.calls.append(kwargs)
        if not self.responses:
            raise AssertionError("generate() called more often than scripted")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, ScriptedResult):
            return response
        return ScriptedResult(response)


CHICKEN_RECIPES = {
    "recipes": [
        {
            "name": "Garlic Chicken Stir-Fry",
            "ingredients": "chicken breast, broccoli, garlic, soy sauce",
            "instructions": "Slice the chicken. Stir-fry with garlic, add broccoli and soy sauce.",
        },
        {
            "name": "Roasted Broccoli Chicken Bake",
            "ingredients": "chicken thighs, broccoli, garlic, olive oil",
            "instructions": "Toss everything in oil and roast at 200C for 30 minutes.",
        },
    ]
}


def make_data_uri(data: bytes = b"\x00\x00\x00\x18ftypmp42", media_type: str = "video/mp4") -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('utf-8')}"


@pytest.fixture
def config() -> AIConfig:
    return AIConfig(
        api_key="test-key",
        text_model="googleai/test-text",
        vision_model="googleai/test-vision",
    )


@pytest.fixture
def make_flows(config):
    """Build flows around a ScriptedAI; returns (flows, ai)."""
    def _make(*responses: Any, cfg: AIConfig = None):
        ai = ScriptedAI(*responses)
        flows: RecipeFlows = define_flows(ai, cfg or config)
        return flows, ai
    return _make
