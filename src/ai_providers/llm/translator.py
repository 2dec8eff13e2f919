"""Translate provider errors into user-facing messages."""

from __future__ import annotations

from collections.abc import Mapping

STATUS_MESSAGES: dict[int, str] = {
    429: "Rate limit exceeded. Please wait a few minutes before making more requests.",
    402: "Insufficient credits. Please add more credits to your OpenRouter account.",
    404: "Model not found. Please check the model name.",
    400: "Bad request. Please check your request parameters.",
    401: "Authentication error. Please check your API key.",
    500: "OpenRouter server error. Please try again later.",
}

TIMEOUT_MESSAGE = "The request to OpenRouter timed out. Please try again."
NETWORK_MESSAGE = (
    "There was a network error connecting to OpenRouter. "
    "Please check your internet connection and try again."
)


def _field(error: object, name: str) -> object:
    if isinstance(error, Mapping):
        return error.get(name)
    try:
        return getattr(error, name, None)
    except Exception:  # noqa: BLE001 - properties on foreign errors may raise
        return None


def _status_code(error: object) -> int | None:
    for name in ("status", "status_code"):
        value = _field(error, name)
        if isinstance(value, bool) or not value:
            continue
        try:
            return int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            continue
    return None


def _message(error: object) -> str:
    message = _field(error, "message")
    if isinstance(message, str):
        return message
    if isinstance(error, BaseException):
        try:
            return str(error)
        except Exception:  # noqa: BLE001
            return type(error).__name__
    return ""


def translate_error(error: object) -> str:
    """Return a human-readable explanation for a provider error.

    ``error`` may be an exception, any object exposing ``status``/
    ``status_code`` and ``message`` attributes, or a mapping with those keys.
    Never raises.
    """
    message = _message(error)

    status = _status_code(error)
    if status is not None:
        known = STATUS_MESSAGES.get(status)
        if known is not None:
            return known
        return f"OpenRouter API error ({status}): {message}"

    lowered = message.lower()
    if "timeout" in lowered:
        return TIMEOUT_MESSAGE
    if "network" in lowered:
        return NETWORK_MESSAGE

    return f"Error communicating with OpenRouter: {message}"
