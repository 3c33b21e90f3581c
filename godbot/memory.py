# godbot/memory.py
"""
Conversation memory: tagged turns, dialogues, and prompt assembly.

A prompt handed to the completion backend is laid out as:

    <context>

    ---

    <seed dialogue><live dialogue><author>: <text>
    <botname>:

The seed dialogue ("thursdayism") is the history the bot is born with and is
never trimmed. The live dialogue is the rolling memory of the session and is
cut down to the most recent turns after every bot response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from godbot import log as _log


RECOLLECTION_WINDOW = 12
CONTEXT_SEPARATOR = "\n\n---\n\n"
RESPONSE_SEPARATOR = "\n\n---\n"


@dataclass(frozen=True)
class Prompt:
    """Human-side utterance."""

    author: str
    text: str

    def render(self) -> str:
        return f"{self.author}: {self.text}\n"


@dataclass(frozen=True)
class Response:
    """Bot-side utterance; carries the turn boundary marker."""

    author: str
    text: str

    def render(self) -> str:
        return f"{self.author}: {self.text}{RESPONSE_SEPARATOR}"


Turn = Union[Prompt, Response]


class Dialogue:
    """Ordered sequence of turns. Insertion order is conversational order."""

    def __init__(self, turns: Optional[Iterable[Turn]] = None):
        self._turns: list[Turn] = list(turns or [])

    def append(self, turn: Turn) -> None:
        self._turns.append(turn)

    def clear(self) -> None:
        self._turns.clear()

    def is_empty(self) -> bool:
        return not self._turns

    def trim(self, limit: int) -> int:
        """Keep only the most recent `limit` turns. Returns how many were dropped."""
        dropped = len(self._turns) - limit
        if dropped <= 0:
            return 0
        self._turns = self._turns[dropped:]
        return dropped

    def copy(self) -> Dialogue:
        return Dialogue(self._turns)

    def render(self) -> str:
        return "".join(turn.render() for turn in self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dialogue):
            return NotImplemented
        return self._turns == other._turns

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Dialogue({len(self._turns)} turns)"


class ConversationMemory:
    """
    Persona context, seed dialogue and live dialogue for one conversation.

    Parameters
    ----------
    context : str
        Persona description placed on top of every prompt.
    seed_dialogue : Dialogue
        Born-with exchanges. Only `seed_interaction` and `clear_all` touch it.
    max_recollections : int
        Live dialogue window, in turns.
    """

    def __init__(
        self,
        context: str = "",
        seed_dialogue: Optional[Dialogue] = None,
        max_recollections: int = RECOLLECTION_WINDOW,
    ):
        if max_recollections <= 0:
            raise ValueError("max_recollections must be positive")
        self.context = context
        self.seed_dialogue = seed_dialogue.copy() if seed_dialogue is not None else Dialogue()
        self.live_dialogue = Dialogue()
        self.max_recollections = max_recollections

    # ── Prompt assembly ─────────────────────────────────────────────────

    def render(self) -> str:
        return (
            f"{self.context}{CONTEXT_SEPARATOR}"
            f"{self.seed_dialogue.render()}{self.live_dialogue.render()}"
        )

    def build_prompt(self, author: str, text: str, botname: str) -> str:
        """Full prompt text ending with the `{botname}:` generation cue."""
        return f"{self.render()}{Prompt(author, text).render()}{botname}:"

    # ── Live recollections ──────────────────────────────────────────────

    def record_prompt(self, author: str, text: str) -> None:
        self.live_dialogue.append(Prompt(author, text))

    def record_response(self, author: str, text: str) -> None:
        self.live_dialogue.append(Response(author, text))
        self.clean()

    def clean(self) -> None:
        """Drop the oldest live turns beyond the recollection window."""
        dropped = self.live_dialogue.trim(self.max_recollections)
        if dropped:
            _log.detail(f"memory: forgot {dropped} oldest turn(s), {len(self.live_dialogue)} kept")

    def clear_live(self) -> None:
        self.live_dialogue.clear()

    def clear_all(self) -> None:
        self.seed_dialogue.clear()
        self.live_dialogue.clear()

    # ── Seed dialogue ───────────────────────────────────────────────────

    def seed_interaction(self, author: str, text: str, botname: str, response_text: str) -> None:
        self.seed_dialogue.append(Prompt(author, text))
        self.seed_dialogue.append(Response(botname, response_text))
