"""LLM integration package.

Produces raw report text through an OpenRouter-compatible client; the text
is then handed to the layout engine unchanged.
"""

from .client import (
    CONFIG_PATH,
    get_picked_model,
    get_openrouter_client,
    chat_completion,
)
from .report import (
    build_messages,
    generate_report_content,
    strip_code_fences,
)

__all__ = [
    "CONFIG_PATH",
    "get_picked_model",
    "get_openrouter_client",
    "chat_completion",
    "build_messages",
    "generate_report_content",
    "strip_code_fences",
]
