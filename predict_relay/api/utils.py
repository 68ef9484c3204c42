"""
Utility functions for the upstream API client.

Contains helpers for request building and error-body parsing.
"""

import json
from typing import Any, Optional


def clean_params(params: Optional[dict]) -> Optional[dict]:
    """
    Drop unset query parameters and stringify the rest.

    aiohttp refuses ``None`` and booleans as query values, so they are
    removed or converted here.

    Args:
        params: Raw query parameters

    Returns:
        Cleaned parameters, or None when nothing is left
    """
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = str(value)
    return cleaned or None


def parse_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to the raw text."""
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def extract_error_message(body: Any, fallback: str) -> str:
    """
    Pull a human readable message out of an upstream error body.

    The upstream API answers errors with ``{"success": false, "message": ...}``
    and sometimes ``{"error": {"description": ...}}``.

    Args:
        body: Parsed response body
        fallback: Message to use when the body has none

    Returns:
        The best available error message
    """
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
        error = body.get("error")
        if isinstance(error, dict) and error.get("description"):
            return str(error["description"])
        if isinstance(error, str) and error:
            return error
    elif isinstance(body, str) and body:
        return body
    return fallback
