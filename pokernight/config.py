"""
Runtime configuration.

Settings are read from environment variables; a ``.env`` file in the
working directory is loaded first.

    POKERNIGHT_API_KEY           Language model key (falls back to API_KEY)
    POKERNIGHT_LLM_BASE_URL      OpenAI-compatible endpoint
    POKERNIGHT_LLM_MODEL         Model name
    POKERNIGHT_DECISION_TIMEOUT  Seconds to wait for a remote decision
    POKERNIGHT_LOG_LEVEL         Logging level name
    POKERNIGHT_SMALL_BLIND, POKERNIGHT_BIG_BLIND,
    POKERNIGHT_STARTING_CHIPS, POKERNIGHT_NUM_PLAYERS
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from pokernight.core.rules import (
    GameMode,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_STARTING_CHIPS, DEFAULT_NUM_PLAYERS,
)


DEFAULT_LLM_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_LLM_MODEL = "gemini-2.5-flash"
DEFAULT_DECISION_TIMEOUT = 10.0


@dataclass
class Settings:
    """Configuration for a Poker Night server."""
    api_key: Optional[str] = None
    llm_base_url: str = DEFAULT_LLM_BASE_URL
    llm_model: str = DEFAULT_LLM_MODEL
    decision_timeout: float = DEFAULT_DECISION_TIMEOUT
    log_level: str = "INFO"
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    starting_chips: int = DEFAULT_STARTING_CHIPS
    num_players: int = DEFAULT_NUM_PLAYERS

    @property
    def default_mode(self) -> GameMode:
        """Online when a key is configured, offline otherwise."""
        return GameMode.ONLINE if self.api_key else GameMode.OFFLINE

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            api_key=os.getenv("POKERNIGHT_API_KEY") or os.getenv("API_KEY"),
            llm_base_url=os.getenv("POKERNIGHT_LLM_BASE_URL", DEFAULT_LLM_BASE_URL),
            llm_model=os.getenv("POKERNIGHT_LLM_MODEL", DEFAULT_LLM_MODEL),
            decision_timeout=float(os.getenv("POKERNIGHT_DECISION_TIMEOUT", DEFAULT_DECISION_TIMEOUT)),
            log_level=os.getenv("POKERNIGHT_LOG_LEVEL", "INFO").upper(),
            small_blind=int(os.getenv("POKERNIGHT_SMALL_BLIND", DEFAULT_SMALL_BLIND)),
            big_blind=int(os.getenv("POKERNIGHT_BIG_BLIND", DEFAULT_BIG_BLIND)),
            starting_chips=int(os.getenv("POKERNIGHT_STARTING_CHIPS", DEFAULT_STARTING_CHIPS)),
            num_players=int(os.getenv("POKERNIGHT_NUM_PLAYERS", DEFAULT_NUM_PLAYERS)),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
