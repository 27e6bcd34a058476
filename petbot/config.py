"""Load and validate configuration from environment."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# OpenAI (required for agent)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Telegram (required only for telegram trigger)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
# Comma-separated Telegram user ids allowed to talk to the bot. Empty means everyone.
TELEGRAM_ALLOWED_USER_IDS = frozenset(
    uid.strip() for uid in os.getenv("TELEGRAM_ALLOWED_USER_IDS", "").split(",") if uid.strip()
)
# Optional: proxy for Telegram API (e.g. http://host:port or socks5://...). Also respects HTTPS_PROXY/HTTP_PROXY.
TELEGRAM_PROXY = os.getenv("TELEGRAM_PROXY") or os.getenv("HTTPS_PROXY") or os.getenv("HTTP_PROXY")
# Timeouts (seconds) for connecting to Telegram; increase if you see ConnectError on slow/proxy networks
TELEGRAM_CONNECT_TIMEOUT = float(os.getenv("TELEGRAM_CONNECT_TIMEOUT", "30"))
TELEGRAM_READ_TIMEOUT = float(os.getenv("TELEGRAM_READ_TIMEOUT", "30"))

# CLI runs on behalf of this user unless --user is given
CLI_USER_ID = os.getenv("CLI_USER_ID", "cli")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LLM_LOG_DIR = Path(os.getenv("LLM_LOG_DIR", ".log"))

# Agent
AGENT_MAX_STEPS = int(os.getenv("AGENT_MAX_STEPS", "10"))
# How the user id reaches the tools: "closure" (captured per request) or "injected" (filled in at call time)
TOOL_BINDING = os.getenv("TOOL_BINDING", "closure").lower()
TOOL_BINDING_MODES = ("closure", "injected")


def validate_for_agent() -> None:
    """Validate that required env vars for the agent core are set."""
    if not OPENAI_API_KEY:
        raise ValueError("OPENAI_API_KEY is required. Set it in .env.")
    if TOOL_BINDING not in TOOL_BINDING_MODES:
        raise ValueError(f"TOOL_BINDING must be one of {', '.join(TOOL_BINDING_MODES)}; got {TOOL_BINDING!r}.")


def validate_for_telegram() -> None:
    """Validate that required env vars for the Telegram trigger are set."""
    validate_for_agent()
    if not TELEGRAM_BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN is required for the Telegram trigger. Set it in .env.")
