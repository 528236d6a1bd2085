"""Report-content generation through a chat model.

The model is asked to write in the constrained pseudo-Markdown that the
layout engine understands: numbered section headings, pipe tables with a
separator row, ``1)`` lists and ``-`` bullets, no horizontal rules.
"""

from __future__ import annotations

import datetime as dt
import json
import os
from typing import Dict, List, Optional

from openai import OpenAI

from reportgen.config import CONFIG_DIR

from .client import chat_completion

PROMPTS_PATH = os.path.join(CONFIG_DIR, "prompts.json")

_DEFAULT_PROMPTS = {
    "system": (
        "You are an assistant that writes professional clinical reports for therapists and health professionals.\n\n"
        "MANDATORY FORMATTING RULES:\n"
        "1. Follow a professional institutional layout.\n"
        "2. Structure the report with numbered sections (1., 2., 3., ...) and clear subtitles.\n"
        "3. Use Markdown tables (with | and a | --- | separator row) for tabular data such as patient "
        "identification and attendance summary.\n"
        "4. Use numbered lists (1), 2), 3)) for recommendations and considerations.\n"
        "5. Use bullet points (- item) for details inside sections.\n"
        "6. Do NOT use horizontal lines (---) as visual dividers between sections.\n"
        "7. Do NOT use ### markdown headers; use only CAPS text or numbering.\n"
        "8. Short, objective paragraphs. Technical, professional language.\n"
        "9. ALWAYS end with a section \"FINAL CONSIDERATIONS AND CONDUCT\" with numbered recommendations.\n"
        "10. Do not add a signature block; it is added automatically.\n\n"
        "Current date: {today}."
    ),
    "user": (
        "{command}\n\n"
        "Strictly follow the institutional formatting rules of the system. "
        "Use the following data as the basis:\n{context}"
    ),
}


def _load_prompts(path: str = PROMPTS_PATH) -> Dict[str, str]:
    prompts = dict(_DEFAULT_PROMPTS)
    if not os.path.exists(path):
        return prompts
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        print(f"Warning: Could not load prompts from {path}: {exc}")
        return prompts
    if isinstance(data, dict):
        prompts.update({str(k): v for k, v in data.items() if isinstance(v, str)})
    return prompts


def _fill_prompt_template(tmpl: str, **values: str) -> str:
    """Fill only the named placeholders; other braces in the template stay literal."""
    safe = tmpl.replace("{", "{{").replace("}", "}}")
    for key in values:
        safe = safe.replace("{{" + key + "}}", "{" + key + "}")
    return safe.format(**values)


def build_messages(
    command: str,
    context: str = "",
    today: Optional[dt.date] = None,
    prompts: Optional[Dict[str, str]] = None,
) -> List[Dict[str, str]]:
    prompts = prompts or _load_prompts()
    today = today or dt.date.today()
    system = _fill_prompt_template(prompts["system"], today=today.strftime("%d/%m/%Y"))
    user = _fill_prompt_template(prompts["user"], command=command.strip(), context=context.strip() or "N/A")
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def strip_code_fences(text: str) -> str:
    """Remove a ```markdown ... ``` wrapper some models put around the answer."""
    s = (text or "").strip()
    if s.startswith("```"):
        first_line, _, rest = s.partition("\n")
        s = rest if first_line.strip("`").strip().lower() in ("", "markdown", "md", "text") else s[3:]
        if s.rstrip().endswith("```"):
            s = s.rstrip()[:-3]
    return s.strip()


def generate_report_content(
    client: OpenAI,
    model: str,
    command: str,
    context: str = "",
    timeout: float | None = 120.0,
) -> str:
    """Ask the model for report text in the layout engine's format.

    Doxygen:
    - @param client: OpenAI instance to use for requests.
    - @param model: Target model id.
    - @param command: What the report should cover.
    - @param context: Source data (patient record, attendance, notes).
    - @param timeout: Request timeout in seconds.
    - @return: Report text ready for rendering.
    - @throws RuntimeError: If the request fails or returns nothing.
    """
    messages = build_messages(command, context)
    try:
        out = chat_completion(client, model, messages=messages, timeout=timeout)
    except Exception as e:
        raise RuntimeError(f"Report generation failed: {e}") from e
    content = strip_code_fences(out)
    if not content:
        raise RuntimeError("Report generation returned no content")
    return content
