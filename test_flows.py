"""
Tests for the identification and suggestion flows against a scripted model
"""
import pytest
from genkit.core.error import GenkitError

from conftest import CHICKEN_RECIPES, make_data_uri
from fridge_chef.ai.flows import (
    IdentifyIngredientsInput,
    SuggestRecipesInput,
    SuggestRecipesOutput,
)
from fridge_chef.ai.generation import domain_cause, unwrap_flow_errors
from fridge_chef.config import AIConfig, EmptyOutputPolicy
from fridge_chef.errors import MediaReadError, ResponseShapeError, UpstreamError
from fridge_chef.services.validation import validate_ingredients


# ========== SUGGEST RECIPES ==========

@pytest.mark.asyncio
async def test_suggest_recipes_for_chicken_broccoli_garlic(make_flows):
    flows, ai = make_flows(CHICKEN_RECIPES)

    result = await flows.suggest_recipes(SuggestRecipesInput(ingredients="chicken, broccoli, garlic"))

    assert len(result.recipes) == 2
    for recipe in result.recipes:
        assert recipe.name and recipe.ingredients and recipe.instructions, f"Empty field in {recipe}"

    call = ai.calls[0]
    assert call["model"] == "googleai/test-text"
    assert "Ingredients: chicken, broccoli, garlic" in call["prompt"]
    assert call["output_schema"] is SuggestRecipesOutput
    assert "config" not in call, "Suggestions use the model's default generation settings"


@pytest.mark.asyncio
async def test_suggest_recipes_accepts_plain_dict_input(make_flows):
    flows, _ = make_flows({"recipes": []})
    result = await flows.suggest_recipes({"ingredients": "eggs"})
    assert result.recipes == []


@pytest.mark.asyncio
async def test_suggest_recipes_missing_output_raises_by_default(make_flows):
    flows, _ = make_flows(None)
    with pytest.raises(ResponseShapeError):
        await flows.suggest_recipes(SuggestRecipesInput(ingredients="eggs"))


@pytest.mark.asyncio
async def test_suggest_recipes_missing_output_is_empty_under_soft_empty_policy(make_flows, config):
    lenient = config.model_copy(update={"suggest_empty_output_policy": EmptyOutputPolicy.SOFT_EMPTY})
    flows, _ = make_flows(None, cfg=lenient)
    result = await flows.suggest_recipes(SuggestRecipesInput(ingredients="eggs"))
    assert result is not None
    assert result.recipes == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "output",
    [
        {"recipes": "pancakes"},
        {"recipes": [{"name": "Pancakes"}]},
        {"dishes": []},
    ],
)
async def test_suggest_recipes_malformed_output_raises(make_flows, output):
    flows, _ = make_flows(output)
    with pytest.raises(ResponseShapeError):
        await flows.suggest_recipes(SuggestRecipesInput(ingredients="eggs, flour, milk"))


@pytest.mark.asyncio
async def test_suggest_recipes_unparseable_reply_raises(make_flows):
    from conftest import ScriptedResult
    flows, _ = make_flows(ScriptedResult(ValueError("not JSON")))
    with pytest.raises(ResponseShapeError):
        await flows.suggest_recipes(SuggestRecipesInput(ingredients="eggs"))


@pytest.mark.asyncio
async def test_suggest_recipes_upstream_failure_is_wrapped(make_flows):
    quota = RuntimeError("429 RESOURCE_EXHAUSTED")
    flows, _ = make_flows(quota)
    with pytest.raises(UpstreamError) as exc_info:
        await flows.suggest_recipes(SuggestRecipesInput(ingredients="eggs"))
    assert exc_info.value.__cause__ is quota


@pytest.mark.asyncio
async def test_suggest_recipes_calls_are_independent(make_flows):
    flows, ai = make_flows(CHICKEN_RECIPES, CHICKEN_RECIPES)
    request = SuggestRecipesInput(ingredients="chicken, broccoli, garlic")

    first = await flows.suggest_recipes(request)
    first.recipes.clear()
    second = await flows.suggest_recipes(request)

    assert len(second.recipes) == 2
    assert request.ingredients == "chicken, broccoli, garlic"
    assert ai.calls[0]["prompt"] == ai.calls[1]["prompt"]


# ========== IDENTIFY INGREDIENTS ==========

@pytest.mark.asyncio
async def test_identify_ingredients_tidies_model_output(make_flows):
    flows, ai = make_flows({"identifiedIngredients": " milk,eggs , , cheddar cheese,"})

    result = await flows.identify_ingredients_from_video(
        IdentifyIngredientsInput(video_data_uri=make_data_uri())
    )

    assert result.identified_ingredients == "milk, eggs, cheddar cheese"

    call = ai.calls[0]
    assert call["model"] == "googleai/test-vision"
    assert call["config"] == {"temperature": 0.2}
    text_part, media_part = call["prompt"]
    assert "refrigerator" in text_part.root.text
    assert media_part.root.media.content_type == "video/mp4"
    assert media_part.root.media.url == make_data_uri()


@pytest.mark.asyncio
async def test_identify_ingredients_accepts_camel_case_payload(make_flows):
    flows, _ = make_flows({"identified_ingredients": "apples"})
    result = await flows.identify_ingredients_from_video({"videoDataUri": make_data_uri()})
    assert result.identified_ingredients == "apples"


@pytest.mark.asyncio
@pytest.mark.parametrize("output", [{"identifiedIngredients": ""}, {}, {"identifiedIngredients": None}, None])
async def test_identify_ingredients_nothing_found_is_empty_string(make_flows, output):
    flows, _ = make_flows(output)
    result = await flows.identify_ingredients_from_video(
        IdentifyIngredientsInput(video_data_uri=make_data_uri())
    )
    assert result.identified_ingredients == ""
    assert result.model_dump(by_alias=True) == {"identifiedIngredients": ""}


@pytest.mark.asyncio
async def test_identify_ingredients_missing_output_raises_under_error_policy(make_flows, config):
    strict = config.model_copy(update={"identify_empty_output_policy": EmptyOutputPolicy.ERROR})
    flows, _ = make_flows(None, cfg=strict)
    with pytest.raises(ResponseShapeError):
        await flows.identify_ingredients_from_video(IdentifyIngredientsInput(video_data_uri=make_data_uri()))


@pytest.mark.asyncio
async def test_identify_ingredients_malformed_output_raises(make_flows):
    flows, _ = make_flows({"identifiedIngredients": ["milk", "eggs"]})
    with pytest.raises(ResponseShapeError):
        await flows.identify_ingredients_from_video(IdentifyIngredientsInput(video_data_uri=make_data_uri()))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data_uri",
    [
        "",
        "data:video/mp4;base64,",
        "not a data uri",
        "data:video/mp4,rawbytes",
        "data:video/mp4;base64,@@@not-base64@@@",
        make_data_uri(b"hello", media_type="text/plain"),
    ],
)
async def test_identify_ingredients_bad_media_fails_before_model_call(make_flows, data_uri):
    flows, ai = make_flows({"identifiedIngredients": "milk"})
    with pytest.raises(MediaReadError):
        await flows.identify_ingredients_from_video(IdentifyIngredientsInput(video_data_uri=data_uri))
    assert ai.calls == [], "No network call may happen for unreadable media"


@pytest.mark.asyncio
async def test_identify_ingredients_rejects_oversized_video(make_flows):
    small = AIConfig(max_media_bytes=4)
    flows, ai = make_flows({"identifiedIngredients": "milk"}, cfg=small)
    with pytest.raises(MediaReadError):
        await flows.identify_ingredients_from_video(
            IdentifyIngredientsInput(video_data_uri=make_data_uri(b"12345"))
        )
    assert ai.calls == []


@pytest.mark.asyncio
async def test_identify_ingredients_upstream_failure_is_wrapped(make_flows):
    flows, _ = make_flows(ConnectionError("network unreachable"))
    with pytest.raises(UpstreamError):
        await flows.identify_ingredients_from_video(IdentifyIngredientsInput(video_data_uri=make_data_uri()))


@pytest.mark.asyncio
async def test_identified_ingredients_feed_straight_into_suggestions(make_flows):
    flows, ai = make_flows({"identifiedIngredients": "chicken breast,broccoli, garlic"}, CHICKEN_RECIPES)

    identified = await flows.identify_ingredients_from_video(
        IdentifyIngredientsInput(video_data_uri=make_data_uri())
    )
    ingredients = validate_ingredients(identified.identified_ingredients)
    assert ingredients == identified.identified_ingredients

    result = await flows.suggest_recipes(SuggestRecipesInput(ingredients=ingredients))
    assert result.recipes
    assert "Ingredients: chicken breast, broccoli, garlic" in ai.calls[1]["prompt"]


# ========== GENKIT ACTION ERRORS ==========

@pytest.mark.asyncio
async def test_registered_flow_raises_genkit_error_until_unwrapped(config):
    """The raw Genkit-registered flow hides domain errors; define_flows exposes them."""
    from conftest import ScriptedAI
    from fridge_chef.ai.flows.identify_ingredients_from_video import define_identify_ingredients_flow

    raw_flow = define_identify_ingredients_flow(ScriptedAI(), config)
    with pytest.raises(GenkitError) as exc_info:
        await raw_flow(IdentifyIngredientsInput(video_data_uri="not a data uri"))
    assert isinstance(domain_cause(exc_info.value), MediaReadError)

    wrapped_flow = unwrap_flow_errors(raw_flow)
    with pytest.raises(MediaReadError):
        await wrapped_flow(IdentifyIngredientsInput(video_data_uri="not a data uri"))


@pytest.mark.asyncio
async def test_unwrapped_flow_keeps_genkit_errors_without_domain_cause():
    async def broken_flow(input):
        raise GenkitError(message="Error while running action broken", cause=KeyError("recipes"))

    with pytest.raises(GenkitError):
        await unwrap_flow_errors(broken_flow)({"ingredients": "eggs"})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response,expected",
    [
        (RuntimeError("429 quota"), UpstreamError),
        (None, ResponseShapeError),
        ({"recipes": [{"title": "Soup"}]}, ResponseShapeError),
    ],
)
async def test_suggestion_failures_surface_as_domain_errors(make_flows, response, expected):
    flows, _ = make_flows(response)
    with pytest.raises(expected):
        await flows.suggest_recipes(SuggestRecipesInput(ingredients="leeks"))
