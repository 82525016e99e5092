"""
Client factories for external services.

Provides cached access to the Google Gen AI client used by the text-assist
service. The credential is resolved from the environment:

- API_KEY: runtime-injected key (checked first)
- GEMINI_API_KEY: conventional Gemini key name
"""

import functools
import os

from google import genai

_API_KEY_NAMES = ("API_KEY", "GEMINI_API_KEY")


def api_key() -> str:
    """
    Return the configured text-assist credential.

    Returns:
        The first non-empty value of API_KEY or GEMINI_API_KEY, or "".
    """
    for name in _API_KEY_NAMES:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


@functools.cache
def genai_client(key: str) -> genai.Client:
    """
    Return a Gen AI client for the given key, creating one if necessary.

    Args:
        key: API key for the Gemini Developer API.

    Returns:
        Configured genai.Client instance.
    """
    return genai.Client(api_key=key)
