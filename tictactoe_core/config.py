from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_AI_DELAY_MS = 375
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 5000


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from TTT_* environment variables."""
    ai_delay: float  # seconds
    seed: Optional[int]
    log_level: int
    host: str
    port: int
    debug: bool


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


def load_settings() -> Settings:
    delay_ms = _env_int('TTT_AI_DELAY_MS', DEFAULT_AI_DELAY_MS)
    level_name = os.getenv('TTT_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(level_name)
    return Settings(
        ai_delay=max(0, delay_ms or 0) / 1000.0,
        seed=_env_int('TTT_SEED', None),
        log_level=level if isinstance(level, int) else logging.WARNING,
        host=os.getenv('TTT_HOST', DEFAULT_HOST),
        port=_env_int('TTT_PORT', DEFAULT_PORT) or DEFAULT_PORT,
        debug=_env_flag('FLASK_DEBUG', os.getenv('DEBUG', '0')),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
