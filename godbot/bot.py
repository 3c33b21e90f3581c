# godbot/bot.py
"""
BotIdentity — a named bot bound to its conversation memory and a completion backend.

Typical loop for a chat front-end:

    bot = BotIdentity("Kirby")
    reply = bot.reply("Alexis", "Hi there!")   # build → generate → record

or, when the caller drives the backend itself:

    prompt = bot.build_prompt("Alexis", "Hi there!")
    text = backend.generate(prompt, bot.stop_sequences, ...)
    bot.record_exchange("Alexis", "Hi there!", text)

A failed generation must never be recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from godbot.config import BotConfig, default_config
from godbot.llm_client import CompletionBackend, LLMClient
from godbot.memory import ConversationMemory, RESPONSE_SEPARATOR
from godbot import log as _log


SAMPLE_AUTHOR = "Username"
SAMPLE_TEXT = "Some question"


@dataclass(frozen=True)
class GenerationParams:
    """Fixed sampling parameters handed to the backend on every call."""

    max_tokens: int = 250
    temperature: float = 0.7
    top_p: float = 1.0


class BotIdentity:
    """
    A single conversation with a single bot persona.

    Parameters
    ----------
    botname : str
        Display name; also the response author and the generation cue.
    backend : CompletionBackend, optional
        Anything with a `generate` method. Defaults to an `LLMClient`
        built from the environment, which raises MissingCredential when
        GODBOT_API_KEY is absent.
    generation : GenerationParams, optional
        Sampling parameters.
    max_recollections : int, optional
        Live dialogue window, in turns.
    """

    def __init__(
        self,
        botname: str,
        backend: Optional[CompletionBackend] = None,
        generation: Optional[GenerationParams] = None,
        max_recollections: Optional[int] = None,
    ):
        defaults = default_config()
        memory_kw = {} if max_recollections is None else {"max_recollections": max_recollections}
        self._botname = botname
        self.memory = ConversationMemory(defaults.context, defaults.seed_dialogue, **memory_kw)
        self.generation = generation or GenerationParams()
        self._backend = backend if backend is not None else LLMClient()

    # ── Construction from configs ───────────────────────────────────────

    @classmethod
    def from_config(cls, config: BotConfig, backend: Optional[CompletionBackend] = None, **kwargs) -> BotIdentity:
        bot = cls(config.botname, backend=backend, **kwargs)
        bot.memory.context = config.context
        bot.memory.seed_dialogue = config.seed_dialogue.copy()
        return bot

    @classmethod
    def import_config(cls, serialized: str, backend: Optional[CompletionBackend] = None, **kwargs) -> BotIdentity:
        """
        Build a fresh identity from an exported JSON config.

        Raises ConfigParseError before anything is constructed if the
        text is malformed.
        """
        config = BotConfig.from_json(serialized)
        return cls.from_config(config, backend=backend, **kwargs)

    def export_config(self) -> BotConfig:
        return BotConfig(
            botname=self._botname,
            context=self.memory.context,
            seed_dialogue=self.memory.seed_dialogue.copy(),
        )

    def export_json(self, indent: Optional[int] = None) -> str:
        return self.export_config().to_json(indent=indent)

    def update_from_config(self, config: BotConfig) -> None:
        """Swap persona in place; the live dialogue carries over."""
        self._botname = config.botname
        self.memory.context = config.context
        self.memory.seed_dialogue = config.seed_dialogue.copy()
        _log.bot(self._botname, "persona updated from config")

    # ── Accessors ───────────────────────────────────────────────────────

    @property
    def botname(self) -> str:
        return self._botname

    def get_botname(self) -> str:
        return self._botname

    def set_botname(self, name: str) -> None:
        self._botname = name

    def set_context(self, text: str) -> None:
        self.memory.context = text

    @property
    def backend(self) -> CompletionBackend:
        return self._backend

    @property
    def stop_sequences(self) -> tuple[str, ...]:
        return (f"{self._botname}:", RESPONSE_SEPARATOR.strip(), "\n")

    # ── Conversation ────────────────────────────────────────────────────

    def build_prompt(self, author: str, text: str) -> str:
        return self.memory.build_prompt(author, text, self._botname)

    def record_exchange(self, author: str, text: str, response_text: str) -> None:
        self.memory.record_prompt(author, text)
        self.memory.record_response(self._botname, response_text)

    def reply(self, author: str, text: str) -> str:
        """
        Generate the bot's answer to `text` and record the exchange.

        BackendError propagates unrecorded.
        """
        prompt = self.build_prompt(author, text)
        _log.detail(f"{self._botname}: prompt {len(prompt):,} chars, {len(self.memory.live_dialogue)} live turns")
        completion = self._backend.generate(
            prompt,
            self.stop_sequences,
            self.generation.max_tokens,
            self.generation.temperature,
            self.generation.top_p,
        )
        response_text = str(completion).strip()
        if getattr(completion, "truncated", False):
            _log.warn(f"{self._botname}: response hit max_tokens ({self.generation.max_tokens})")
        self.record_exchange(author, text, response_text)
        return response_text

    def reset_live(self) -> None:
        self.memory.clear_live()
        _log.bot(self._botname, "live memory cleared")

    def reset_all(self) -> None:
        self.memory.clear_all()
        _log.bot(self._botname, "seed and live memory cleared")

    def seed_interaction(self, author: str, text: str, response_text: str) -> None:
        self.memory.seed_interaction(author, text, self._botname, response_text)

    # ── Diagnostics ─────────────────────────────────────────────────────

    def describe_config(self) -> str:
        return (
            f"{self._botname} config.\n"
            f"===========\n"
            f"Context:\n"
            f"--------\n"
            f"{self.memory.context}\n"
            f"Initial memory:\n"
            f"---------------\n"
            f"{self.memory.seed_dialogue.render()}\n"
            f"Current memory:\n"
            f"---------------\n"
            f"{self.build_prompt(SAMPLE_AUTHOR, SAMPLE_TEXT)}\n"
        )

    def __repr__(self) -> str:
        return (
            f"BotIdentity({self._botname!r}, seed={len(self.memory.seed_dialogue)}, "
            f"live={len(self.memory.live_dialogue)})"
        )
