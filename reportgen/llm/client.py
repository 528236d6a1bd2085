"""OpenRouter-compatible client helpers for the report-content producer.

Model selection and API keys come from ``config/models.json``.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Tuple

from openai import OpenAI

from reportgen.config import CONFIG_DIR

CONFIG_PATH = os.path.join(CONFIG_DIR, "models.json")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def _load_config(path: str = CONFIG_PATH) -> Dict:
    """Load and return the models configuration.

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: Parsed configuration dictionary.
    - @throws FileNotFoundError: If the file is missing.
    - @throws json.JSONDecodeError: If the file content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_picked_model(path: str = CONFIG_PATH) -> Tuple[str, str]:
    """Return (model, api_key) for the entry selected by `model_number_picked`.

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: (model, api_key) pair.
    - @throws ValueError: If the index is invalid or fields are missing.
    """
    cfg = _load_config(path)
    models: List[Dict] = cfg.get("models", [])
    idx = cfg.get("model_number_picked")

    if not isinstance(idx, int):
        raise ValueError("Config must include integer 'model_number_picked'.")
    if idx < 0 or idx >= len(models):
        raise ValueError("'model_number_picked' is out of range for available models.")

    item = models[idx]
    model = item.get("model")
    api_key = item.get("api_key") or os.environ.get("OPENROUTER_API_KEY")
    if not model or not api_key:
        raise ValueError("Selected model entry must include both 'model' and 'api_key'.")
    return model, api_key


def get_openrouter_client(api_key: str, base_url: str = OPENROUTER_BASE_URL) -> OpenAI:
    """Create an OpenAI client pointed at OpenRouter.

    Doxygen:
    - @param api_key: API key for the selected model/provider.
    - @param base_url: OpenAI-compatible endpoint.
    - @return: Configured `OpenAI` client instance.
    """
    return OpenAI(base_url=base_url, api_key=api_key)


def chat_completion(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, str]],
    timeout: float | None = 120.0,
) -> str:
    """Send a chat completion request and return the first choice's text.

    Doxygen:
    - @param client: OpenAI instance created by `get_openrouter_client`.
    - @param model: Target model identifier.
    - @param messages: List of role/content dictionaries for the chat.
    - @param timeout: Request timeout in seconds; None disables timeout.
    - @return: Text content of the first completion choice, or "".
    """
    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        timeout=timeout,
    )
    return completion.choices[0].message.content or ""
