# godbot/config.py
"""
BotConfig — the persisted form of a bot: name, persona context, seed dialogue.

Wire format (JSON):

    {
      "botname": "Kirby",
      "context": "...",
      "thursdayism": [
        {"Prompt":   {"author": "Alexis", "prompt": "..."}},
        {"Response": {"author": "Kirby",  "prompt": "..."}}
      ]
    }

The live dialogue is session-local and never part of a config.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from godbot.errors import ConfigParseError
from godbot.memory import Dialogue, Prompt, Response, Turn


SEED_KEY = "thursdayism"

_TURN_TAGS = {"Prompt": Prompt, "Response": Response}


@dataclass
class BotConfig:
    botname: str
    context: str
    seed_dialogue: Dialogue = field(default_factory=Dialogue)

    def to_dict(self) -> dict:
        return {
            "botname": self.botname,
            "context": self.context,
            SEED_KEY: [turn_to_dict(t) for t in self.seed_dialogue],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> BotConfig:
        if not isinstance(data, dict):
            raise ConfigParseError("Bot config must be a JSON object")
        botname = _require_str(data, "botname", "config")
        context = _require_str(data, "context", "config")
        if SEED_KEY not in data:
            raise ConfigParseError(f"Bot config is missing '{SEED_KEY}'")
        raw_turns = data[SEED_KEY]
        if not isinstance(raw_turns, list):
            raise ConfigParseError(f"Bot config field '{SEED_KEY}' must be a list")
        seed = Dialogue(turn_from_dict(t) for t in raw_turns)
        return cls(botname=botname, context=context, seed_dialogue=seed)

    @classmethod
    def from_json(cls, text: str) -> BotConfig:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise ConfigParseError(f"Bot config is not valid JSON: {e}") from e
        return cls.from_dict(data)


def turn_to_dict(turn: Turn) -> dict:
    tag = "Prompt" if isinstance(turn, Prompt) else "Response"
    return {tag: {"author": turn.author, "prompt": turn.text}}


def turn_from_dict(data: Any) -> Turn:
    """Decode one externally tagged turn, e.g. {"Prompt": {"author": ..., "prompt": ...}}."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ConfigParseError("Each turn must be an object with exactly one tag")
    tag, body = next(iter(data.items()))
    turn_cls = _TURN_TAGS.get(tag)
    if turn_cls is None:
        raise ConfigParseError(f"Unknown turn tag '{tag}', expected Prompt or Response")
    if not isinstance(body, dict):
        raise ConfigParseError(f"Turn '{tag}' must be an object")
    return turn_cls(
        author=_require_str(body, "author", tag),
        text=_require_str(body, "prompt", tag),
    )


def _require_str(data: dict, key: str, where: str) -> str:
    if key not in data:
        raise ConfigParseError(f"{where}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ConfigParseError(f"{where}: field '{key}' must be a string")
    return value


# ── Defaults ────────────────────────────────────────────────────────────

DEFAULT_BOTNAME = "Kirby"

DEFAULT_CONTEXT = (
    "Kirby is as one of the most legendary video game characters of all time. "
    "In virtually all his appearances, Kirby is depicted as cheerful, innocent "
    "and food-loving; however, he becomes fearless, bold and clever in the face "
    "of danger."
)


def default_config() -> BotConfig:
    """Persona used when no bot definition is supplied."""
    seed = Dialogue([
        Prompt("Alexis", "Oh! Look there! What is that?"),
        Response(DEFAULT_BOTNAME, "Oh, that is king Dedede! I'm soooo scared!"),
        Prompt("Alexis", "Let's fight this ennemy!"),
        Response(DEFAULT_BOTNAME, "But i have no sword!?!"),
        Prompt("Alexis", "Here, take this minion."),
        Response(DEFAULT_BOTNAME, "Oof! Thanks for that! I can now fight!"),
    ])
    return BotConfig(botname=DEFAULT_BOTNAME, context=DEFAULT_CONTEXT, seed_dialogue=seed)
