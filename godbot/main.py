# godbot/main.py
"""
Interactive REPL — a terminal chat with a single bot persona.

Usage:
    godbot
    godbot --config kirby.yaml --author Alexis
    python -m godbot.main --config kirby.json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from godbot.bot import BotIdentity
from godbot.errors import BackendError, ConfigParseError, MissingCredential
from godbot.config import DEFAULT_BOTNAME
from godbot.loader import load_bot, save_bot
from godbot import log as _log


console = Console()


# ── Display helpers ─────────────────────────────────────────────────────

def display_reply(botname: str, text: str):
    console.print(Panel(Text(text) if text else "[dim](no answer)[/dim]", title=f"[bold blue]{botname}[/bold blue]",
                        border_style="blue", padding=(0, 1)))


def print_help():
    table = Table(title="Commands", show_header=True)
    table.add_column("Command", style="cyan")
    table.add_column("Effect", style="green")

    table.add_row("/help", "Show this help")
    table.add_row("/clear", "Forget the live conversation")
    table.add_row("/forget", "Forget the live conversation and the seed dialogue")
    table.add_row("/config", "Show persona, seed dialogue and a sample prompt")
    table.add_row("/context <text>", "Replace the persona context")
    table.add_row("/name <name>", "Rename the bot")
    table.add_row("/seed <prompt> => <response>", "Add a seed exchange")
    table.add_row("/save <path>", "Export the bot config as JSON")
    table.add_row("/load <path>", "Swap persona (name, context, seed) from a JSON/YAML file; keeps the live conversation and generation settings")
    table.add_row("quit", "Exit")

    console.print(table)


def handle_command(bot: BotIdentity, command: str, author: str = "User") -> None:
    """Run one slash command against `bot`."""
    name, _, arg = command.partition(" ")
    name = name.lower()
    arg = arg.strip()

    if name in ("/help", "/?"):
        print_help()
    elif name == "/clear":
        bot.reset_live()
        console.print("[dim]Live memory cleared.[/dim]\n")
    elif name == "/forget":
        bot.reset_all()
        console.print("[dim]Seed and live memory cleared.[/dim]\n")
    elif name == "/config":
        console.print(bot.describe_config(), markup=False, highlight=False)
    elif name == "/context":
        if not arg:
            console.print("[red]Usage: /context <text>[/red]\n")
            return
        bot.set_context(arg)
        console.print("[dim]Context updated.[/dim]\n")
    elif name == "/name":
        if not arg:
            console.print("[red]Usage: /name <name>[/red]\n")
            return
        bot.set_botname(arg)
        console.print(f"[dim]Bot is now called {arg}.[/dim]\n")
    elif name == "/seed":
        prompt, sep, response = arg.partition("=>")
        if not sep or not prompt.strip() or not response.strip():
            console.print("[red]Usage: /seed <prompt> => <response>[/red]\n")
            return
        bot.seed_interaction(author, prompt.strip(), response.strip())
        console.print(f"[dim]Seed dialogue: {len(bot.memory.seed_dialogue)} turns.[/dim]\n")
    elif name == "/save":
        if not arg:
            console.print("[red]Usage: /save <path>[/red]\n")
            return
        try:
            path = save_bot(bot, arg)
        except OSError as e:
            console.print(f"[red]Error: {e}[/red]\n")
            return
        _log.ok(f"Saved {bot.botname} to {path}")
    elif name == "/load":
        if not arg:
            console.print("[red]Usage: /load <path>[/red]\n")
            return
        _log.step(f"Loading persona from {arg}")
        try:
            loaded = load_bot(arg, backend=bot.backend)
        except (OSError, ConfigParseError) as e:
            console.print(f"[red]Error: {e}[/red]\n")
            return
        bot.update_from_config(loaded.export_config())
        _log.ok(f"Persona loaded: {bot.botname}")
        if loaded.generation != bot.generation:
            console.print("[dim]Generation settings in the file were ignored; /load swaps the persona only.[/dim]\n")
    else:
        console.print(f"[red]Unknown command: {name}[/red]")
        console.print("[dim]Type /help for commands.[/dim]\n")


# ── Main loop ───────────────────────────────────────────────────────────

def build_bot(config_path: Optional[str]) -> BotIdentity:
    if config_path:
        return load_bot(config_path)
    return BotIdentity(DEFAULT_BOTNAME)


def main():
    parser = argparse.ArgumentParser(description="Single-persona completion chatbot")
    parser.add_argument("--config", "-c", help="Path to a YAML/JSON bot definition")
    parser.add_argument("--author", "-a", default="User", help="Name used for your messages")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show memory and backend details")
    args = parser.parse_args()

    _log.verbose = args.verbose
    _log.init()
    author = args.author

    try:
        bot = build_bot(args.config)
    except MissingCredential as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    except (OSError, ConfigParseError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    source = Path(args.config).name if args.config else "built-in persona"
    console.print(Panel.fit(
        f"[bold blue]{bot.botname} is listening[/bold blue]\n"
        f"Persona: [cyan]{source}[/cyan]  |  "
        f"Seed turns: [green]{len(bot.memory.seed_dialogue)}[/green]",
        title="godbot",
        border_style="blue",
    ))
    console.print("[dim]Type /help for commands[/dim]\n")

    while True:
        try:
            text = console.input(f"[bold green]{author}:[/bold green] ").strip()

            if not text:
                continue

            if text.lower() in ("quit", "exit", "q"):
                break

            if text.startswith("/"):
                handle_command(bot, text, author)
                continue

            try:
                answer = bot.reply(author, text)
            except BackendError as e:
                _log.error(str(e))
                console.print("[dim]Nothing was recorded; try again.[/dim]\n")
                continue

            display_reply(bot.botname, answer)

        except (KeyboardInterrupt, EOFError):
            break

    console.print("\n[dim]Goodbye![/dim]")


if __name__ == "__main__":
    main()
