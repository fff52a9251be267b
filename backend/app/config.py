"""Runtime settings read from the environment (optionally seeded from backend/.env)."""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_LOG_LEVEL = "INFO"
ENV_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")


def load_env() -> None:
    """Load backend/.env without overriding variables already set."""
    load_dotenv(ENV_FILE, override=False)


def get_host() -> str:
    return os.environ.get("TICTACTOE_HOST", "").strip() or DEFAULT_HOST


def get_port() -> int:
    raw = os.environ.get("TICTACTOE_PORT", "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid TICTACTOE_PORT=%r; using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_cors_origins() -> list[str]:
    raw = os.environ.get("TICTACTOE_CORS_ORIGINS", "").strip()
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def get_concluded_ttl_seconds() -> float | None:
    """Seconds a concluded session is kept; None (unset or invalid) keeps it forever."""
    raw = os.environ.get("TICTACTOE_CONCLUDED_TTL_SECONDS", "").strip()
    if not raw:
        return None
    try:
        ttl = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid TICTACTOE_CONCLUDED_TTL_SECONDS=%r", raw)
        return None
    return ttl if ttl > 0 else None


def get_log_level() -> str:
    return os.environ.get("TICTACTOE_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
