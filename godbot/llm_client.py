# godbot/llm_client.py
"""
Text-completion backend for godbot.

The bot only needs one capability from a backend:

    backend.generate(prompt, stop_sequences, max_tokens, temperature, top_p) -> str

`LLMClient` provides it on top of the provider SDKs:
    client = LLMClient()                                   # From environment
    client = LLMClient(model="claude-3-5-haiku-20241022")  # Auto-detects Anthropic
    client = LLMClient(provider="openai", base_url="http://localhost:8000/v1")
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from godbot.errors import BackendError
from godbot.llm_config import LLMConfig, _infer_provider_from_model
from godbot.providers import PROVIDERS
from godbot import log as _log


TRANSCRIPT_SYSTEM = (
    "You continue chat transcripts. The transcript ends with a speaker name "
    "followed by a colon. Write only what that speaker says next, on a single "
    "line, staying in character."
)


class CompletionBackend(Protocol):
    """Anything that can continue a prompt."""

    def generate(
        self,
        prompt: str,
        stop_sequences: Sequence[str],
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> str: ...


def _get_raw_client(
    provider: str,
    api_key: str,
    base_url: Optional[str] = None
) -> tuple[Any, type]:
    """
    Instantiate the appropriate SDK client.

    Returns the client and the SDK's base exception class.
    """
    if provider == "anthropic":
        try:
            import anthropic
        except ImportError:
            raise RuntimeError(
                "anthropic package not installed. "
                "Install with: pip install anthropic"
            )
        import httpx
        client = anthropic.Anthropic(
            api_key=api_key,
            timeout=httpx.Timeout(60.0, connect=10.0),
            max_retries=3,
        )
        return client, anthropic.APIError

    # All other providers use the OpenAI-compatible API
    try:
        import openai
    except ImportError:
        raise RuntimeError(
            "openai package not installed. "
            "Install with: pip install openai"
        )
    import httpx
    client = openai.OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=httpx.Timeout(60.0, connect=10.0),
        max_retries=3,
    )
    return client, openai.OpenAIError


def truncate_at_stop(text: str, stop_sequences: Sequence[str]) -> str:
    """Cut `text` at the earliest occurrence of any stop sequence."""
    cut = len(text)
    for stop in stop_sequences:
        if not stop:
            continue
        idx = text.find(stop)
        if idx != -1 and idx < cut:
            cut = idx
    return text[:cut]


class CompletionResult(str):
    """
    String subclass carrying truncation metadata.

    Works transparently in json.dumps, f-strings, isinstance checks.
    Access `.truncated` and `.stop_reason` when you need them.
    """

    def __new__(cls, text: str, truncated: bool = False, stop_reason: str = ""):
        inst = super().__new__(cls, text)
        inst.truncated = truncated
        inst.stop_reason = stop_reason
        return inst

    def __repr__(self) -> str:
        flag = " [TRUNCATED]" if self.truncated else ""
        return f"CompletionResult({len(self)} chars{flag})"


class LLMClient:
    """
    Completion backend over Anthropic or any OpenAI-compatible endpoint.

    Provider selection:
        - explicit `provider` argument
        - else inferred from `model` ("claude*" → Anthropic, "grok*" → xAI)
        - else GODBOT_PROVIDER / GODBOT_MODEL from the environment

    Raises MissingCredential when no API key is available.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        config: Optional[LLMConfig] = None,
    ):
        config = config or LLMConfig()

        # Infer provider from model if not explicitly provided
        if model and not provider:
            provider = _infer_provider_from_model(model)
        self._provider = provider or config.llm_provider

        # Environment model/endpoint only apply to the environment's provider
        if self._provider == config.llm_provider:
            self._model = model or config.llm_model
            self._base_url = base_url or config.base_url
        else:
            provider_cfg = PROVIDERS.get(self._provider, {})
            self._model = model or provider_cfg.get("default_model")
            self._base_url = base_url or provider_cfg.get("base_url")

        if api_key:
            self._api_key = api_key
        else:
            config.validate()
            self._api_key = config.llm_api_key

        if not self._model:
            raise ValueError(f"No model configured for provider '{self._provider}'")

        self._client, self._sdk_error = _get_raw_client(
            self._provider,
            self._api_key,
            None if self._provider == "anthropic" else self._base_url,
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def raw_client(self) -> Any:
        return self._client

    def generate(
        self,
        prompt: str,
        stop_sequences: Sequence[str],
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> CompletionResult:
        """
        Continue `prompt`, stopping before the first stop sequence.

        Raises
        ------
        BackendError
            On any SDK/API failure. Nothing is retried here beyond the
            SDK's own `max_retries`.
        """
        _log.detail(f"llm: {self._provider}/{self._model} prompt={len(prompt):,} chars")
        try:
            if self._provider == "anthropic":
                result = self._generate_anthropic(prompt, stop_sequences, max_tokens, temperature, top_p)
            else:
                result = self._generate_openai(prompt, stop_sequences, max_tokens, temperature, top_p)
        except self._sdk_error as e:
            raise BackendError(f"{self._provider}/{self._model}: {e}") from e

        # Providers may ignore or reject some stop sequences; enforce them here.
        text = truncate_at_stop(result, stop_sequences)
        return CompletionResult(text, truncated=result.truncated, stop_reason=result.stop_reason)

    def _generate_anthropic(
        self,
        prompt: str,
        stop_sequences: Sequence[str],
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> CompletionResult:
        """Anthropic native SDK completion."""
        kw: dict = {
            "model": self._model,
            "max_tokens": max_tokens,
            "system": TRANSCRIPT_SYSTEM,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        # The Messages API rejects whitespace-only stop sequences
        stops = [s for s in stop_sequences if s.strip()]
        if stops:
            kw["stop_sequences"] = stops
        if top_p < 1.0:
            kw["top_p"] = top_p

        resp = self._client.messages.create(**kw)
        text = "".join(
            getattr(block, "text", "") for block in resp.content
        )
        stop = resp.stop_reason or ""

        return CompletionResult(
            text,
            truncated=(stop == "max_tokens"),
            stop_reason=stop
        )

    def _generate_openai(
        self,
        prompt: str,
        stop_sequences: Sequence[str],
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> CompletionResult:
        """OpenAI / OpenAI-compatible text completion."""
        kw: dict = {
            "model": self._model,
            "prompt": prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
        }
        # The completions endpoint accepts at most 4 stop sequences
        stops = [s for s in stop_sequences if s][:4]
        if stops:
            kw["stop"] = stops

        resp = self._client.completions.create(**kw)

        text = resp.choices[0].text or ""
        stop = resp.choices[0].finish_reason or ""

        return CompletionResult(
            text,
            truncated=(stop == "length"),
            stop_reason=stop
        )
