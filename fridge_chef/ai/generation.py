"""
Shared glue for the flows: one guarded model call, structured-output parsing,
and recovery of domain errors from Genkit's flow wrapper
"""
import logging
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from genkit.core.error import GenkitError
from pydantic import BaseModel, ValidationError

from fridge_chef.config import EmptyOutputPolicy
from fridge_chef.errors import FridgeChefError, ResponseShapeError, UpstreamError

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


async def generate(ai: Any, flow_name: str, **kwargs: Any) -> Any:
    """
    Run ai.generate once, translating SDK failures into UpstreamError.

    No retries: the caller decides what to show the user.
    """
    logger.debug("%s: calling model %s", flow_name, kwargs.get("model", "<default>"))
    try:
        return await ai.generate(**kwargs)
    except Exception as e:
        logger.error("%s: model call failed: %s", flow_name, e)
        raise UpstreamError(f"{flow_name}: model call failed: {e}") from e


def parse_output(
    result: Any,
    schema: Type[OutputT],
    policy: EmptyOutputPolicy,
    empty: OutputT,
    flow_name: str,
) -> OutputT:
    """
    Validate the structured output of a generate() call against `schema`.

    Args:
        result: Response returned by ai.generate
        schema: Declared output model
        policy: What to do when the model returned no structured output
        empty: Value returned for a missing output under the soft-empty policy
        flow_name: Used in logs and error messages

    Returns:
        The validated output, or `empty`

    Raises:
        ResponseShapeError: the output is present but malformed, or missing
            under the 'error' policy
    """
    try:
        output = result.output
    except Exception as e:
        raise ResponseShapeError(f"{flow_name}: model reply is not valid structured output: {e}") from e

    if output is None:
        if policy == EmptyOutputPolicy.ERROR:
            raise ResponseShapeError(f"{flow_name}: model returned no structured output")
        logger.info("%s: model returned no structured output, returning empty result", flow_name)
        return empty

    try:
        return schema.model_validate(output)
    except ValidationError as e:
        logger.warning("%s: model reply does not match %s: %s", flow_name, schema.__name__, e)
        raise ResponseShapeError(f"{flow_name}: model reply does not match {schema.__name__}") from e


def domain_cause(error: BaseException) -> Optional[FridgeChefError]:
    """Find the FridgeChefError a GenkitError was raised for, if any."""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        if isinstance(current, FridgeChefError):
            return current
        seen.add(id(current))
        cause = getattr(current, "cause", None)
        current = cause if isinstance(cause, BaseException) else current.__cause__
    return None


def unwrap_flow_errors(flow: Callable[[Any], Awaitable[OutputT]]) -> Callable[[Any], Awaitable[OutputT]]:
    """
    Wrap a registered flow so callers see FridgeChefError, not GenkitError.

    Genkit runs flows as actions and re-raises anything they raise as a
    GenkitError; errors without a domain cause propagate unchanged.
    """

    async def run(input: Any) -> OutputT:
        try:
            return await flow(input)
        except GenkitError as e:
            cause = domain_cause(e)
            if cause is None:
                raise
            raise cause

    run.__name__ = getattr(flow, "__name__", "flow")
    run.__doc__ = getattr(flow, "__doc__", None)
    return run
