# godbot/loader.py
"""
Bot loader — builds a BotIdentity from a declarative YAML (or JSON) file.

A bot definition uses the exported config keys plus optional backend and
sampling settings:

    botname: Kirby
    context: Kirby is one of the most legendary ...
    thursdayism:
      - Prompt:   {author: Alexis, prompt: "Who are you?"}
      - Response: {author: Kirby,  prompt: "I'm Kirby!"}
    model: claude-3-5-haiku-20241022   # optional
    provider: anthropic                # optional
    generation:                        # optional
      max_tokens: 250
      temperature: 0.7
      top_p: 1.0

Exported JSON configs are valid bot definitions as they are.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import yaml

from godbot.bot import BotIdentity, GenerationParams
from godbot.config import BotConfig
from godbot.errors import ConfigParseError
from godbot.llm_client import CompletionBackend, LLMClient
from godbot import log as _log


def _create_llm_client_from_spec(spec: dict) -> Optional[LLMClient]:
    """
    Create LLMClient from a bot definition if model/provider specified.
    Returns None if no custom config (the bot will use the environment).

    API keys always come from the environment, never from the file.
    """
    model = spec.get("model")
    provider = spec.get("provider")

    if not model and not provider:
        return None

    return LLMClient(provider=provider, model=model)


def _generation_from_spec(spec: dict) -> GenerationParams:
    raw = spec.get("generation") or {}
    if not isinstance(raw, dict):
        raise ConfigParseError("'generation' must be a mapping")
    defaults = GenerationParams()
    try:
        return GenerationParams(
            max_tokens=int(raw.get("max_tokens", defaults.max_tokens)),
            temperature=float(raw.get("temperature", defaults.temperature)),
            top_p=float(raw.get("top_p", defaults.top_p)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigParseError(f"Invalid generation settings: {e}") from e


def load_bot(config_path: str, backend: Optional[CompletionBackend] = None) -> BotIdentity:
    """
    Load a bot definition file and return a ready BotIdentity.

    Parameters
    ----------
    config_path : str
        Path to the YAML or JSON bot definition.
    backend : CompletionBackend, optional
        Overrides any model/provider in the file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    OSError
        If the file cannot be read.
    ConfigParseError
        If the file is not a valid bot definition.
    """
    path = Path(config_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Bot config not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"{path.name}: not UTF-8 text ({e})") from e

    # JSON goes through json so surrogate-pair escapes decode as one character
    if path.suffix.lower() == ".json" or text.lstrip().startswith("{"):
        try:
            spec = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"{path.name}: {e}") from e
    else:
        try:
            spec = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"{path.name}: {e}") from e

    config = BotConfig.from_dict(spec)
    generation = _generation_from_spec(spec)

    if backend is None:
        backend = _create_llm_client_from_spec(spec)

    bot = BotIdentity.from_config(config, backend=backend, generation=generation)
    _log.bot(bot.botname, f"loaded from {path.name} ({len(config.seed_dialogue)} seed turns)")
    return bot


def save_bot(bot: BotIdentity, config_path: str) -> Path:
    """Write the bot's exported config as JSON. Returns the written path."""
    path = Path(config_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(bot.export_json(indent=2) + "\n", encoding="utf-8")
    return path
