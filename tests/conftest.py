import pytest

from godbot.bot import BotIdentity
from godbot.errors import BackendError
from godbot.memory import ConversationMemory


class FakeBackend:
    """Scripted completion backend that records every call."""

    def __init__(self, replies=None, error: Exception | None = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[dict] = []

    def generate(self, prompt, stop_sequences, max_tokens, temperature, top_p):
        self.calls.append({
            "prompt": prompt,
            "stop_sequences": tuple(stop_sequences),
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
        })
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else " ok"


@pytest.fixture(autouse=True)
def _no_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("GODBOT_API_KEY", "GODBOT_MODEL", "GODBOT_PROVIDER", "GODBOT_BASE_URL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def failing_backend() -> FakeBackend:
    return FakeBackend(error=BackendError("service unavailable"))


@pytest.fixture
def bot(backend: FakeBackend) -> BotIdentity:
    return BotIdentity("Bot", backend=backend)


@pytest.fixture
def empty_memory() -> ConversationMemory:
    return ConversationMemory("")
