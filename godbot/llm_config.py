# godbot/llm_config.py
"""
Completion provider/model configuration — reads providers.py and the environment.

PROVIDER INFERENCE (from model name):
  1. "claude-*" -> anthropic
  2. "grok-*"   -> xai
  3. anything else -> openai (or any server at GODBOT_BASE_URL)
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from godbot.errors import MissingCredential
from godbot.providers import (
    API_KEY_ENV,
    BASE_URL_ENV,
    DEFAULT_PROVIDER,
    MODEL_ENV,
    PROVIDER_ENV,
    PROVIDERS,
)


def _infer_provider_from_model(model: Optional[str]) -> str:
    """Infer provider from model name."""
    if not model:
        return DEFAULT_PROVIDER

    m = model.lower().strip()

    if "claude" in m:
        return "anthropic"

    if m.startswith("grok"):
        return "xai"

    return DEFAULT_PROVIDER


def _is_key_configured(key: Optional[str]) -> bool:
    """Check if an API key is a real key (not a placeholder)."""
    if not key or not key.strip():
        return False
    placeholders = ("YOUR_", "REPLACE_", "PASTE_", "INSERT_", "sk-xxx", "xai-xxx")
    return not key.startswith(placeholders)


class LLMConfig:
    """
    Provider, model, endpoint and credential for one completion backend.

    The environment is read when the config is constructed, never at import
    time, so each BotIdentity picks up the current values.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        source = os.environ if env is None else env

        self._api_key = source.get(API_KEY_ENV)
        explicit_model = source.get(MODEL_ENV) or None
        explicit_provider = source.get(PROVIDER_ENV) or None

        if explicit_provider:
            self._provider = explicit_provider.lower().strip()
        else:
            self._provider = _infer_provider_from_model(explicit_model)

        provider_cfg = PROVIDERS.get(self._provider, {})
        self._model = explicit_model or provider_cfg.get("default_model")
        self._base_url = source.get(BASE_URL_ENV) or provider_cfg.get("base_url")

    @property
    def llm_model(self) -> Optional[str]:
        return self._model

    @property
    def llm_provider(self) -> str:
        return self._provider

    @property
    def llm_api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def base_url(self) -> Optional[str]:
        if self._provider == "anthropic":
            return None  # Native SDK
        return self._base_url

    def validate(self) -> None:
        if not _is_key_configured(self._api_key):
            raise MissingCredential(
                f"No API key configured!\n\n"
                f"Export {API_KEY_ENV} with the key for provider '{self._provider}'\n"
                f"before starting the bot."
            )
