# =============================================================================
# core/config.py  -  Runtime settings from the environment
# =============================================================================
#
# Every knob has a working default, so the server runs with no .env at all.
# Process entry points (main.py, tools/mcp_server.py) call load_dotenv()
# before load_settings(), so values in a local .env file are picked up too.
#
#   FDA_API_KEY          optional openFDA key (raises the daily quota)
#   OPENFDA_BASE_URL     default https://api.fda.gov
#   OPENFDA_TIMEOUT      per-attempt timeout in seconds (default 30)
#   OPENFDA_MAX_RETRIES  attempts per call (default 3)
#   OPENFDA_BACKOFF      linear backoff unit in seconds (default 1.0)
#   LOG_LEVEL            tool server log level (default INFO)
#   AGENT_MODEL          LiteLlm model string for the agent host
# =============================================================================

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.fda.gov"
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 30.0
    max_retries: int = 3
    backoff_s: float = 1.0
    log_level: str = "INFO"
    agent_model: str = DEFAULT_AGENT_MODEL


def _env_number(environ, name: str, default, cast):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a valid %s); using %r", name, raw, cast.__name__, default)
        return default


def load_settings(environ=None) -> Settings:
    """Build Settings from environment variables (os.environ by default)."""
    env = os.environ if environ is None else environ

    api_key = (env.get("FDA_API_KEY") or "").strip() or None

    return Settings(
        api_key=api_key,
        base_url=(env.get("OPENFDA_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        timeout_s=_env_number(env, "OPENFDA_TIMEOUT", 30.0, float),
        max_retries=max(1, _env_number(env, "OPENFDA_MAX_RETRIES", 3, int)),
        backoff_s=_env_number(env, "OPENFDA_BACKOFF", 1.0, float),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        agent_model=env.get("AGENT_MODEL") or DEFAULT_AGENT_MODEL,
    )
