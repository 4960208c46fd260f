"""
Claude LLM client.

Provides a single text generation call used by the sourcing brief.
Failures are raised as LLMError carrying the provider's own message so
the API can show it to the user unchanged.
"""
import logging
import requests
from typing import Optional, Dict, Any

from .config import settings

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_FAILURE = "Failed to generate AI brief."


class LLMError(Exception):
    """Raised when the LLM request fails; str(e) is safe to show to users."""


def _headers() -> dict:
    """Build headers for Claude API requests."""
    return {
        "Content-Type": "application/json",
        "x-api-key": settings.CLAUDE_API_KEY,
        "anthropic-version": ANTHROPIC_VERSION,
    }


def is_configured() -> bool:
    """Whether an API key is available server-side."""
    return bool(settings.CLAUDE_API_KEY)


def _error_message(resp: requests.Response) -> str:
    """Pull the provider's error message out of a failed response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or DEFAULT_FAILURE
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return DEFAULT_FAILURE


def _response_text(data: Dict[str, Any]) -> str:
    """Concatenate the text blocks of a Claude response."""
    # Claude response: {"content": [{"type": "text", "text": "..."}]}
    blocks = data.get("content") or []
    if isinstance(blocks, str):
        return blocks
    parts = []
    for block in blocks:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict):
            parts.append(block.get("text") or "")
    return "".join(parts)


def generate(
    prompt: str,
    system: Optional[str] = None,
    model: Optional[str] = None,
    max_tokens: int = 1000,
    temperature: float = 0.3,
    timeout: int = 120,
) -> str:
    """
    Send a generation request to Claude.

    Args:
        prompt: The prompt text
        system: Optional system prompt
        model: Model to use (defaults to CLAUDE_BRIEF_MODEL)
        max_tokens: Maximum tokens to generate
        temperature: Sampling temperature (0.0-1.0)
        timeout: Request timeout in seconds

    Returns:
        Response text ("" when the model returned no text)

    Raises:
        LLMError: If the request could not be completed
    """
    target_model = model or settings.CLAUDE_BRIEF_MODEL

    payload: Dict[str, Any] = {
        "model": target_model,
        "max_tokens": max_tokens,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": temperature,
    }
    if system:
        payload["system"] = system

    try:
        resp = requests.post(
            settings.CLAUDE_API_URL,
            headers=_headers(),
            json=payload,
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error(f"LLM generate request failed: {e}")
        raise LLMError(str(e)) from e

    if not resp.ok:
        message = _error_message(resp)
        logger.error(f"LLM generate request failed ({resp.status_code}): {message}")
        raise LLMError(message)

    try:
        data = resp.json()
    except ValueError as e:
        logger.error(f"LLM returned a non-JSON response: {e}")
        raise LLMError(DEFAULT_FAILURE) from e

    return _response_text(data)
