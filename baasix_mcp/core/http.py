"""Helpers for reading Baasix HTTP responses."""

from typing import Any

import httpx


def response_body(response: httpx.Response) -> Any:
    """Return the decoded response body.

    JSON bodies are decoded; anything else is returned as text, and an empty
    body as None.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(response: httpx.Response) -> str:
    """Extract the upstream error message from a failed response.

    Baasix reports errors as ``{"message": "..."}`` (sometimes nested under
    ``error``); otherwise fall back to the raw text or the status line.
    """
    body = response_body(response)
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if message:
            return str(message)
    elif isinstance(body, str) and body.strip():
        return body.strip()
    return f"Request failed with status code {response.status_code}"
