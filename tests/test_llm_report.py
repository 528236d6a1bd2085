import datetime as dt
import json
from types import SimpleNamespace

import pytest

from reportgen.llm.client import get_picked_model
from reportgen.llm.report import build_messages, generate_report_content, strip_code_fences


class _FakeCompletions:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(reply=None, error=None):
    return SimpleNamespace(chat=SimpleNamespace(completions=_FakeCompletions(reply, error)))


def test_build_messages_includes_rules_command_and_date():
    messages = build_messages("Write a monthly report", "Name: Ana", today=dt.date(2024, 2, 1))
    system, user = messages
    assert system["role"] == "system"
    assert "01/02/2024" in system["content"]
    assert "| --- |" in system["content"]
    assert user["content"].startswith("Write a monthly report")
    assert "Name: Ana" in user["content"]


def test_generate_report_content_strips_fences():
    client = _client("```markdown\n1. IDENTIFICATION\n| A | B |\n```")
    out = generate_report_content(client, "some/model", "Write it", "data")
    assert out == "1. IDENTIFICATION\n| A | B |"
    call = client.chat.completions.calls[0]
    assert call["model"] == "some/model"
    assert len(call["messages"]) == 2


def test_generate_report_content_wraps_failures():
    client = _client(error=ConnectionError("offline"))
    with pytest.raises(RuntimeError, match="offline"):
        generate_report_content(client, "m", "Write it")


def test_generate_report_content_rejects_empty_reply():
    with pytest.raises(RuntimeError):
        generate_report_content(_client("   "), "m", "Write it")


def test_strip_code_fences_plain_text_untouched():
    assert strip_code_fences("  plain text \n") == "plain text"


def test_get_picked_model(tmp_path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps({
        "model_number_picked": 1,
        "models": [
            {"provider": "openrouter", "model": "a/one", "api_key": "k1"},
            {"provider": "openrouter", "model": "b/two", "api_key": "k2"},
        ],
    }), encoding="utf-8")
    assert get_picked_model(str(path)) == ("b/two", "k2")


def test_get_picked_model_out_of_range(tmp_path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"model_number_picked": 3, "models": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        get_picked_model(str(path))


def test_client_helpers_are_documented():
    from reportgen.llm import client

    for func in (client._load_config, client.get_picked_model, client.get_openrouter_client, client.chat_completion):
        assert "@return" in func.__doc__
