import pytest

from conftest import FakeBackend
from godbot.errors import ConfigParseError
from godbot.loader import load_bot, save_bot
from godbot.memory import Prompt, Response


BOT_YAML = """\
botname: God
context: God is the god of all beings.
thursdayism:
  - Prompt: {author: Alexis, prompt: "Who is god?"}
  - Response: {author: God, prompt: "Well, now that you ask, I can tell you."}
generation:
  max_tokens: 120
  temperature: 0.2
"""


def test_load_bot_from_yaml(tmp_path, backend: FakeBackend) -> None:
    path = tmp_path / "god.yaml"
    path.write_text(BOT_YAML)

    bot = load_bot(str(path), backend=backend)

    assert bot.botname == "God"
    assert bot.memory.context == "God is the god of all beings."
    assert list(bot.memory.seed_dialogue) == [
        Prompt("Alexis", "Who is god?"),
        Response("God", "Well, now that you ask, I can tell you."),
    ]
    assert bot.generation.max_tokens == 120
    assert bot.generation.temperature == 0.2
    assert bot.generation.top_p == 1.0
    assert bot.backend is backend


def test_save_then_load_json(tmp_path, bot) -> None:
    bot.seed_interaction("Alice", "Hi", "Hello")
    path = save_bot(bot, str(tmp_path / "out" / "bot.json"))

    restored = load_bot(str(path), backend=bot.backend)
    assert restored.export_config() == bot.export_config()


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_bot(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize(
    "content",
    [
        "botname: [unclosed",
        "- just\n- a list\n",
        "botname: God\ncontext: x\n",
        "botname: God\ncontext: x\nthursdayism: []\ngeneration: {max_tokens: lots}\n",
        "botname: God\ncontext: x\nthursdayism: []\ngeneration: fast\n",
    ],
)
def test_invalid_definitions(tmp_path, backend: FakeBackend, content: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ConfigParseError):
        load_bot(str(path), backend=backend)


def test_load_json_with_escaped_surrogate_pair(tmp_path, backend: FakeBackend) -> None:
    path = tmp_path / "god.json"
    path.write_text(
        '{"botname": "God", "context": "smile \\ud83d\\ude00", "thursdayism": '
        '[{"Prompt": {"author": "Alexis", "prompt": "\\ud83d\\ude00?"}}]}',
        encoding="ascii",
    )

    bot = load_bot(str(path), backend=backend)

    assert bot.memory.context == "smile \U0001F600"
    assert list(bot.memory.seed_dialogue) == [Prompt("Alexis", "\U0001F600?")]
    saved = save_bot(bot, str(tmp_path / "again.json"))
    assert load_bot(str(saved), backend=backend).export_config() == bot.export_config()


def test_json_content_without_json_suffix(tmp_path, backend: FakeBackend) -> None:
    path = tmp_path / "god.cfg"
    path.write_text('{"botname": "God", "context": "\\ud83d\\ude00", "thursdayism": []}')
    assert load_bot(str(path), backend=backend).memory.context == "\U0001F600"


def test_non_utf8_file(tmp_path, backend: FakeBackend) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b'{"botname": "\xff"}')
    with pytest.raises(ConfigParseError):
        load_bot(str(path), backend=backend)


def test_invalid_json_file(tmp_path, backend: FakeBackend) -> None:
    path = tmp_path / "bad.json"
    path.write_text('{"botname": ')
    with pytest.raises(ConfigParseError):
        load_bot(str(path), backend=backend)
