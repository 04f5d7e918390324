"""
Environment-driven defaults for AI opponents and logging.

QUORIDOR_AI_ALGORITHM       alpha-beta | limited-anticipation (default alpha-beta)
QUORIDOR_AI_DEPTH           search depth in turns, clamped to 1..2 (default 1)
QUORIDOR_AI_THINK_DELAY_MS  delay before the AI searches (default 500)
QUORIDOR_LOG_LEVEL          logging level name for scripts (default INFO)
"""

import logging
import os

from agents.minimax_agent import SearchAlgorithm
from schemas.game_config import MAX_SEARCH_DEPTH, AgentConfig

logger = logging.getLogger(__name__)


def get_ai_algorithm() -> SearchAlgorithm:
    """Search strategy. Defaults to alpha-beta when unset or invalid."""
    raw = (os.getenv("QUORIDOR_AI_ALGORITHM") or SearchAlgorithm.ALPHA_BETA.value).strip().lower()
    try:
        return SearchAlgorithm(raw)
    except ValueError:
        logger.warning(f"Unknown QUORIDOR_AI_ALGORITHM={raw!r}, using alpha-beta")
        return SearchAlgorithm.ALPHA_BETA


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}")
        return default


def get_ai_depth() -> int:
    return max(1, min(MAX_SEARCH_DEPTH, _get_int("QUORIDOR_AI_DEPTH", 1)))


def get_think_delay_ms() -> int:
    return max(0, _get_int("QUORIDOR_AI_THINK_DELAY_MS", 500))


def get_log_level() -> int:
    name = os.getenv("QUORIDOR_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def default_agent_config() -> AgentConfig:
    """AgentConfig populated from the environment."""
    return AgentConfig(
        algorithm=get_ai_algorithm(),
        depth=get_ai_depth(),
        think_delay_ms=get_think_delay_ms(),
    )
