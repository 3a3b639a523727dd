from types import SimpleNamespace

import pytest

from shopassist.application.models import ConversationTurn, Role
from shopassist.config.settings import Settings
from shopassist.infrastructure.llm import gemini_client
from shopassist.infrastructure.llm.gemini_client import GeminiClient, build_contents

HISTORY = [
    ConversationTurn(role=Role.SYSTEM, content="Prefer budget options."),
    ConversationTurn(role=Role.USER, content="I need a gift"),
    ConversationTurn(role=Role.ASSISTANT, content="For whom?"),
]


class StubModel:
    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.calls = []

    def generate_content(self, contents, generation_config=None):
        self.calls.append((contents, generation_config))
        return SimpleNamespace(text=' {"message": "ok"} ')


@pytest.fixture
def stub_sdk(monkeypatch):
    created = []

    def make_model(*args, **kwargs):
        model = StubModel(*args, **kwargs)
        created.append(model)
        return model

    monkeypatch.setattr(gemini_client.genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(gemini_client.genai, "GenerativeModel", make_model)
    return created


def test_contents_map_roles_and_keep_system_turns_as_user_content():
    contents = build_contents(HISTORY, "my dad")

    assert contents == [
        {"role": "user", "parts": [{"text": "Prefer budget options."}]},
        {"role": "user", "parts": [{"text": "I need a gift"}]},
        {"role": "model", "parts": [{"text": "For whom?"}]},
        {"role": "user", "parts": [{"text": "my dad"}]},
    ]


def test_model_cache_is_keyed_on_system_prompt_only(stub_sdk):
    client = GeminiClient(Settings(google_api_key="test-key"), "test-model")

    for i in range(50):
        history = [ConversationTurn(role=Role.SYSTEM, content=f"context {i}")]
        assert client.complete("PROMPT", history, "hi", force_json=True) == '{"message": "ok"}'

    assert len(stub_sdk) == 1
    assert stub_sdk[0].system_instruction == "PROMPT"
    contents, config = stub_sdk[0].calls[-1]
    assert contents[0] == {"role": "user", "parts": [{"text": "context 49"}]}
    assert config["response_mime_type"] == "application/json"


def test_each_system_prompt_gets_one_model(stub_sdk):
    client = GeminiClient(Settings(google_api_key="test-key"), "test-model")

    client.complete("ADVICE", [], "a")
    client.complete("SUPPORT", [], "b")
    client.complete("ADVICE", [], "c")

    assert [m.system_instruction for m in stub_sdk] == ["ADVICE", "SUPPORT"]


def test_missing_key():
    with pytest.raises(ValueError):
        GeminiClient(Settings(google_api_key=""))
