"""Runtime configuration read from the environment (and an optional .env file)."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DB_PATH = str(Path.home() / ".zenith" / "zenith.db")
DEFAULT_AI_MODEL = "gemini-2.5-flash-lite"
DEFAULT_AI_TIMEOUT_MS = 10_000


def get_db_path() -> str:
    return os.getenv("ZENITH_DB") or DEFAULT_DB_PATH


def get_api_key() -> str | None:
    """Return the Gemini API key, or None when no usable key is configured."""
    key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    # Build tooling sometimes injects the literal string "undefined"
    if not key or key == "undefined":
        return None
    return key


def get_ai_model() -> str:
    return os.getenv("ZENITH_AI_MODEL", DEFAULT_AI_MODEL)


def get_ai_timeout_ms() -> int:
    try:
        return int(os.getenv("ZENITH_AI_TIMEOUT_MS", DEFAULT_AI_TIMEOUT_MS))
    except ValueError:
        return DEFAULT_AI_TIMEOUT_MS


def get_log_level() -> str:
    return os.getenv("ZENITH_LOG_LEVEL", "WARNING").upper()
