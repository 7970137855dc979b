"""Shared plumbing for language-model backed parsers and enrichers."""

import json
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_OLLAMA_MODEL = "llama3.1"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def decode_json_object(text: str) -> dict[str, Any]:
    """Parse model output that must be a single JSON object.

    Raises:
        ValueError: If the text is empty, not JSON, or not an object.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ValueError("Empty model response")
    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected JSON object, got {type(parsed).__name__}")
    return parsed


def string_list(value: object) -> list[str]:
    """Keep only the string items of a JSON array; anything else is empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def optional_float(value: object) -> float | None:
    # bool is an int subclass but never a meaningful number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class OllamaChatClient:
    """Minimal client for the Ollama ``/api/chat`` endpoint in JSON mode.

    Args:
        model: Model name served by Ollama.
        base_url: Ollama server URL.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_OLLAMA_MODEL,
        base_url: str = DEFAULT_OLLAMA_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    async def complete_json(self, system: str, user: str) -> dict[str, Any]:
        """Send one chat turn and decode the reply as a JSON object.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses.
            ValueError: If the reply is not a JSON object.
        """
        payload = {
            "model": self._model,
            "stream": False,
            "format": "json",
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(f"{self._base_url}/api/chat", json=payload)
            response.raise_for_status()
            data = response.json()

        content = data.get("message", {}).get("content", "") if isinstance(data, dict) else ""
        return decode_json_object(content)
