# godbot/log.py
"""
Pretty, human-readable logging for the bot and its backend.

Produces clean, color-coded terminal output:

    ◆  Bot identity events (persona swaps, resets)
    →  Steps in progress
    ✓  Success
    ⚠  Warnings
    ✗  Errors

Normal mode shows only high-level flow. Set ``log.verbose = True``
for prompt sizes, memory trims and backend calls.
"""

import sys
import time

# ── ANSI color codes (auto-detected) ────────────────────────

_OK = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    return f"{code}{text}\033[0m" if _OK else text


_DIM    = "\033[2m"
_GREEN  = "\033[32m"
_YELLOW = "\033[33m"
_RED    = "\033[31m"
_MAG    = "\033[35m"
_B_BLUE = "\033[1;34m"
_B_GRN  = "\033[1;32m"
_B_YEL  = "\033[1;33m"
_B_RED  = "\033[1;31m"
_B_MAG  = "\033[1;35m"

# ── Timer state ──────────────────────────────────────────────

_t0: float = 0.0
verbose: bool = False


def _ts() -> str:
    """Elapsed timestamp with trailing space, or empty string."""
    if not _t0:
        return ""
    e = time.time() - _t0
    if e < 60:
        s = f"{e:4.0f}s"
    else:
        m, sec = divmod(int(e), 60)
        s = f"{m}m{sec:02d}s"
    return _c(_DIM, f"[{s:>5}] ")


def _pr(text: str):
    print(text, flush=True)


# ── Public API ───────────────────────────────────────────────

def init():
    """Start / reset the session timer."""
    global _t0
    _t0 = time.time()


def step(msg: str):
    """Step in progress."""
    _pr(f" {_ts()}{_c(_B_BLUE, '→')} {msg}")


def ok(msg: str):
    """Success."""
    _pr(f" {_ts()}{_c(_B_GRN, '✓')} {_c(_GREEN, msg)}")


def warn(msg: str):
    """Warning — always visible."""
    _pr(f" {_ts()}{_c(_B_YEL, '⚠')} {_c(_YELLOW, msg)}")


def error(msg: str):
    """Error — always visible."""
    _pr(f" {_ts()}{_c(_B_RED, '✗')} {_c(_RED, msg)}")


def bot(name: str, msg: str):
    """Bot identity event — verbose only."""
    if not verbose:
        return
    _pr(f" {_ts()}{_c(_B_MAG, '◆')} {_c(_MAG, name)}  {msg}")


def detail(msg: str):
    """Extra detail — verbose only."""
    if not verbose:
        return
    _pr(f"            {_c(_DIM, msg)}")
