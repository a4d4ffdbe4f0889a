import json
import logging
from typing import Any, Dict, Optional

import requests

from rxnotes.core.config import (
    OLLAMA_BASE_URL,
    OLLAMA_TEMPERATURE,
    OLLAMA_TIMEOUT_S,
)

logger = logging.getLogger(__name__)

class ExtractionError(RuntimeError):
    pass

def _safe_json_parse(text: str) -> Dict[str, Any]:
    """Parse JSON even if model returns extra text around it."""
    text = (text or "").strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = None
        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end != -1 and end > start:
            try:
                parsed = json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                parsed = None

    if not isinstance(parsed, dict):
        raise ExtractionError(f"Invalid JSON from model: {text[:200]}...")
    return parsed

def ollama_chat_json(
    model: str,
    system: str,
    user: str,
    schema: Optional[Dict[str, Any]] = None,
    temperature: Optional[float] = None,
    timeout_s: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Calls Ollama /api/chat and returns JSON from assistant message content.
    JSON output is enforced with `format` when a schema is given.
    """
    url = f"{OLLAMA_BASE_URL}/chat"
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "stream": False,
        "options": {"temperature": temperature if temperature is not None else OLLAMA_TEMPERATURE},
    }
    if schema is not None:
        payload["format"] = schema

    try:
        r = requests.post(url, json=payload, timeout=timeout_s or OLLAMA_TIMEOUT_S)
    except requests.RequestException as e:
        logger.error("model request failed: %s", e)
        raise ExtractionError(f"Extraction model unreachable: {e}") from e

    if r.status_code >= 400:
        logger.error("model returned HTTP %s", r.status_code)
        raise ExtractionError(f"Ollama {r.status_code}: {r.text[:200]}")

    try:
        data = r.json()
    except ValueError as e:
        logger.error("model response body is not JSON")
        raise ExtractionError(f"Ollama returned non-JSON body: {r.text[:200]}") from e
    if not isinstance(data, dict):
        raise ExtractionError("Ollama response body is not a JSON object")

    content = (data.get("message") or {}).get("content", "")
    return _safe_json_parse(content)
