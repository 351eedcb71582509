# tests/conftest.py
import os
import sys
import json

import httpx
import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core import LLMClient


def chat_reply(content, status_code=200):
    """An OpenAI-shaped chat completion whose answer text is ``content``."""
    if not isinstance(content, str) and content is not None:
        content = json.dumps(content, ensure_ascii=False)
    return httpx.Response(status_code, json={
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "gpt-4o-mini",
        "choices": [{
            "index": 0,
            "finish_reason": "stop",
            "message": {"role": "assistant", "content": content},
        }],
    })


def user_prompt(request: httpx.Request) -> str:
    return json.loads(request.content)["messages"][1]["content"]


@pytest.fixture
def make_client():
    """Build an LLMClient whose HTTP traffic goes to ``handler`` instead of the network."""
    def _make(handler, api_key="sk-test"):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return LLMClient(api_key=api_key, http_client=http_client)
    return _make


@pytest.fixture
def empty_env_file(tmp_path, monkeypatch):
    for name in ("OPENAI_API_KEY", "MOMENTUM_MODEL", "MOMENTUM_BASE_URL",
                 "MOMENTUM_BREAKDOWN_TIMEOUT", "MOMENTUM_ICON_TIMEOUT",
                 "MOMENTUM_BREAKDOWN_TEMPERATURE", "MOMENTUM_ICON_TEMPERATURE"):
        # setenv first so teardown restores the original state even if a test
        # (or load_dotenv) sets the variable.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    path = tmp_path / ".env"
    path.write_text("", encoding="utf-8")
    return str(path)
