import json
from types import SimpleNamespace

import pytest

from conftest import FakeProvider
from factcheckai.config import Config
from factcheckai.errors import AllProvidersFailedError, ProviderError
from factcheckai.models.schema import FactCheckContext
from factcheckai.services import providers as providers_module
from factcheckai.services.gateway import ProviderGateway
from factcheckai.services.providers import AnthropicProvider, PerplexityProvider, default_providers

GREAT_WALL = "The Great Wall of China is visible from space with the naked eye."

GREAT_WALL_REPLY = json.dumps({
    "verdict": "False",
    "explanation": "Astronauts consistently report the wall cannot be picked out unaided from orbit.",
    "sources": [{"url": "https://www.nasa.gov/great-wall", "snippet": "NASA: China's Wall Less Great in View from Space"}],
})


class FakeChatCompletions:
    def __init__(self, content):
        self.content = content
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.content is None:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


class FakeMessages:
    def __init__(self, text):
        self.text = text
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class FakeClient:
    def __init__(self, **endpoints):
        self.__dict__.update(endpoints)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True


def fake_openai(monkeypatch, content):
    completions = FakeChatCompletions(content)
    client = FakeClient(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(providers_module, "_openai_client", lambda config: client)
    completions.client = client
    return completions


def fake_anthropic(monkeypatch, text):
    messages = FakeMessages(text)
    client = FakeClient(messages=messages)
    monkeypatch.setattr(providers_module, "_anthropic_client", lambda config: client)
    messages.client = client
    return messages


# --- gateway fallback ---

def test_first_provider_wins(great_wall_result):
    a = FakeProvider("a", result=great_wall_result)
    b = FakeProvider("b", result=great_wall_result)

    result = ProviderGateway([a, b]).check(GREAT_WALL)

    assert result.verdict == "False"
    assert len(a.calls) == 1
    assert b.calls == []


@pytest.mark.parametrize("failing", [
    FakeProvider("a", error=RuntimeError("connection reset")),
    FakeProvider("a", result=None),
])
def test_falls_back_to_second_provider_once(failing, great_wall_result):
    b = FakeProvider("b", result=great_wall_result)

    result = ProviderGateway([failing, b]).check("article text", source_url="https://example.com/a",
                                                 article_title="Space myths")

    assert result is great_wall_result
    assert len(b.calls) == 1
    content, context = b.calls[0]
    assert content == "article text"
    assert context == failing.calls[0][1]
    assert context.source_url == "https://example.com/a"


def test_both_providers_fail():
    a = FakeProvider("a", error=RuntimeError("boom"))
    b = FakeProvider("b", result=None)

    with pytest.raises(AllProvidersFailedError):
        ProviderGateway([a, b]).check(GREAT_WALL)
    assert len(a.calls) == 1
    assert len(b.calls) == 1


def test_article_title_is_attached(great_wall_result):
    result = ProviderGateway([FakeProvider("a", result=great_wall_result)]).check(
        "text", source_url="https://example.com/a", article_title="Space myths")

    assert result.article_title == "Space myths"
    assert result.model_dump(by_alias=True)["articleTitle"] == "Space myths"


def test_claim_result_has_no_article_title(great_wall_result):
    result = ProviderGateway([FakeProvider("a", result=great_wall_result)]).check(GREAT_WALL)
    assert result.article_title is None


# --- providers ---

def test_perplexity_request_shape(monkeypatch):
    completions = fake_openai(monkeypatch, GREAT_WALL_REPLY)
    provider = PerplexityProvider(Config())

    result = provider.attempt_fact_check(GREAT_WALL, FactCheckContext())

    assert result.verdict == "False"
    assert result.explanation
    assert any(s.url for s in result.sources)

    kwargs = completions.kwargs
    assert kwargs["model"] == "sonar-pro"
    assert kwargs["max_tokens"] == 800
    assert kwargs["temperature"] == 0.2
    system, user = kwargs["messages"]
    assert system["role"] == "system"
    assert "This is a claim to fact-check." in system["content"]
    assert user == {"role": "user", "content": f"Fact-check this claim: {GREAT_WALL}"}


def test_perplexity_article_context(monkeypatch):
    completions = fake_openai(monkeypatch, GREAT_WALL_REPLY)
    context = FactCheckContext(source_url="https://example.com/a", article_title="Space myths")

    PerplexityProvider(Config()).attempt_fact_check("body", context)

    system, user = completions.kwargs["messages"]
    assert 'article titled "Space myths" from https://example.com/a' in system["content"]
    assert user["content"] == "Fact-check this article content: body"


def test_perplexity_without_choices_raises(monkeypatch):
    completions = fake_openai(monkeypatch, None)

    with pytest.raises(ProviderError):
        PerplexityProvider(Config()).attempt_fact_check(GREAT_WALL, FactCheckContext())
    assert completions.client.closed


def test_sdk_clients_are_closed_after_each_call(monkeypatch):
    completions = fake_openai(monkeypatch, GREAT_WALL_REPLY)
    messages = fake_anthropic(monkeypatch, GREAT_WALL_REPLY)

    PerplexityProvider(Config()).attempt_fact_check(GREAT_WALL, FactCheckContext())
    AnthropicProvider(Config()).attempt_fact_check(GREAT_WALL, FactCheckContext())

    assert completions.client.closed
    assert messages.client.closed


def test_empty_reply_is_null(monkeypatch):
    fake_openai(monkeypatch, "   ")
    assert PerplexityProvider(Config()).attempt_fact_check(GREAT_WALL, FactCheckContext()) is None


def test_anthropic_request_shape(monkeypatch):
    messages = fake_anthropic(monkeypatch, "Verdict: False\nNot visible unaided. https://www.nasa.gov/great-wall")
    config = Config(anthropic_model="claude-test")

    result = AnthropicProvider(config).attempt_fact_check(GREAT_WALL, FactCheckContext())

    assert result.verdict == "False"
    assert result.sources[0].url == "https://www.nasa.gov/great-wall"
    assert messages.kwargs["model"] == "claude-test"
    assert messages.kwargs["max_tokens"] == 800
    (turn,) = messages.kwargs["messages"]
    assert turn["role"] == "user"
    assert turn["content"].startswith("This is a claim to fact-check. Fact-check this claim: ")
    assert "JSON" in turn["content"]


def test_gateway_falls_back_from_perplexity_to_anthropic(monkeypatch):
    def broken_client(config):
        raise RuntimeError("perplexity unavailable")

    monkeypatch.setattr(providers_module, "_openai_client", broken_client)
    messages = fake_anthropic(monkeypatch, GREAT_WALL_REPLY)

    result = ProviderGateway(default_providers(Config())).check(GREAT_WALL)

    assert result.verdict == "False"
    assert messages.kwargs is not None


def test_client_options_single_attempt():
    assert providers_module._client_options(Config()) == {"max_retries": 0}
    assert providers_module._client_options(Config(provider_timeout=30.0)) == {"max_retries": 0, "timeout": 30.0}
