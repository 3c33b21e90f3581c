import pytest

from godbot.errors import MissingCredential
from godbot.llm_config import LLMConfig, _infer_provider_from_model


@pytest.mark.parametrize(
    ("model", "provider"),
    [
        ("claude-3-5-haiku-20241022", "anthropic"),
        ("grok-2-1212", "xai"),
        ("gpt-3.5-turbo-instruct", "openai"),
        ("davinci-002", "openai"),
        (None, "openai"),
    ],
)
def test_infer_provider_from_model(model, provider) -> None:
    assert _infer_provider_from_model(model) == provider


def test_defaults_from_provider_table() -> None:
    config = LLMConfig({"GODBOT_API_KEY": "secret"})
    assert config.llm_provider == "openai"
    assert config.llm_model == "gpt-3.5-turbo-instruct"
    assert config.llm_api_key == "secret"
    assert config.base_url is None
    config.validate()


def test_model_selects_provider_and_endpoint() -> None:
    config = LLMConfig({"GODBOT_API_KEY": "secret", "GODBOT_MODEL": "grok-2-1212"})
    assert config.llm_provider == "xai"
    assert config.base_url == "https://api.x.ai/v1"


def test_explicit_provider_and_base_url() -> None:
    config = LLMConfig({
        "GODBOT_API_KEY": "secret",
        "GODBOT_PROVIDER": "OpenAI",
        "GODBOT_MODEL": "local-model",
        "GODBOT_BASE_URL": "http://localhost:8000/v1",
    })
    assert config.llm_provider == "openai"
    assert config.llm_model == "local-model"
    assert config.base_url == "http://localhost:8000/v1"


def test_anthropic_never_uses_a_base_url() -> None:
    config = LLMConfig({"GODBOT_API_KEY": "k", "GODBOT_MODEL": "claude-x", "GODBOT_BASE_URL": "http://x"})
    assert config.base_url is None


@pytest.mark.parametrize("env", [{}, {"GODBOT_API_KEY": ""}, {"GODBOT_API_KEY": "YOUR_KEY_HERE"}])
def test_missing_credential(env) -> None:
    with pytest.raises(MissingCredential):
        LLMConfig(env).validate()


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GODBOT_API_KEY", "from-env")
    assert LLMConfig().llm_api_key == "from-env"
