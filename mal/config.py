"""
mal configuration

Settings come from environment variables, with defaults suitable for an
interactive session:

- MAL_LOG_LEVEL: logging level name (default WARNING)
- MAL_PROMPT: prompt shown by the console (default "user> ")
- MAL_STAGE: interpreter stage run by the REPL, 0 to 4 (default 4)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_PROMPT = "user> "
LATEST_STAGE = 4


def _env_int(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class MalConfig:
    """Process-wide settings for the interpreter and its REPL."""
    log_level: str = "WARNING"
    prompt: str = DEFAULT_PROMPT
    stage: int = LATEST_STAGE

    @classmethod
    def from_env(cls) -> MalConfig:
        return cls(
            log_level=os.environ.get("MAL_LOG_LEVEL", "WARNING"),
            prompt=os.environ.get("MAL_PROMPT", DEFAULT_PROMPT),
            stage=min(max(_env_int("MAL_STAGE", LATEST_STAGE), 0), LATEST_STAGE),
        )


# Global configuration instance
_config: Optional[MalConfig] = None


def get_config() -> MalConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = MalConfig.from_env()
    return _config


def set_config(config: MalConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def setup_logging(level: str = "WARNING") -> None:
    """Setup logging for mal. Records go to stderr so they never mix with results."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
