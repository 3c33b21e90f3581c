# godbot/providers.py
"""
Completion provider table.

godbot reads its single secret from the environment:

    export GODBOT_API_KEY=...           # required
    export GODBOT_MODEL=gpt-3.5-turbo-instruct   # optional
    export GODBOT_PROVIDER=openai       # optional, inferred from the model
    export GODBOT_BASE_URL=...          # optional, any OpenAI-compatible server

Anthropic is served through its native SDK. Every other provider is reached
through the OpenAI-compatible text completions endpoint, which accepts a raw
prompt and a list of stop sequences.
"""

# ═══════════════════════════════════════════════════════════════════
# PROVIDER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════

PROVIDERS = {
    # ── Anthropic ──────────────────────────────────────────────────
    # Models: claude-sonnet-4-20250514, claude-3-5-haiku-20241022
    "anthropic": {
        "default_model": "claude-3-5-haiku-20241022",
        # base_url: None (uses native Anthropic SDK)
    },

    # ── OpenAI ─────────────────────────────────────────────────────
    # Models: gpt-3.5-turbo-instruct, davinci-002, babbage-002
    "openai": {
        "default_model": "gpt-3.5-turbo-instruct",
        # base_url: None (uses default OpenAI endpoint)
    },

    # ── xAI ────────────────────────────────────────────────────────
    "xai": {
        "default_model": "grok-2-1212",
        "base_url": "https://api.x.ai/v1",
    },
}


# ═══════════════════════════════════════════════════════════════════
# ENVIRONMENT
# ═══════════════════════════════════════════════════════════════════

API_KEY_ENV = "GODBOT_API_KEY"
MODEL_ENV = "GODBOT_MODEL"
PROVIDER_ENV = "GODBOT_PROVIDER"
BASE_URL_ENV = "GODBOT_BASE_URL"

DEFAULT_PROVIDER = "openai"
