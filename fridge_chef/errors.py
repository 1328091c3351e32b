"""
Exceptions raised by the Fridge Chef flows and their callers
"""


class FridgeChefError(Exception):
    """Base class for every error surfaced to the user."""

    user_message = "An unexpected error occurred."


class InputValidationError(FridgeChefError):
    """Ingredient text was rejected before any model call."""

    user_message = "Please list at least one ingredient."


class MediaReadError(FridgeChefError):
    """An uploaded video could not be decoded into a usable media payload."""

    user_message = "Could not read the video. Please try uploading it again."


class UpstreamError(FridgeChefError):
    """The hosted model call itself failed (network, auth, quota)."""

    user_message = "The recipe assistant is unavailable right now. Please try again."


class ResponseShapeError(FridgeChefError):
    """The model replied, but not in the declared output schema."""

    user_message = "The recipe assistant returned an unexpected response."


class SessionBusyError(FridgeChefError):
    """An operation was requested while another one is still pending."""

    user_message = "Please wait for the current request to finish."
