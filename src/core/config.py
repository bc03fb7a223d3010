# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "BANDPLAYER_"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppConfig:
    skip_seconds: float = 10.0
    load_timeout_ms: int = 15000   # 0 disables the timeout
    volume: float = 0.7            # 0.0 - 1.0
    log_level: str = "INFO"
    app_data_dir: str = ""
    music_dir: str = ""


def _env(env: Mapping[str, str], name: str) -> str | None:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _number(env: Mapping[str, str], name: str, default, cast, low=None, high=None):
    raw = _env(env, name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not a number", ENV_PREFIX, name, raw)
        return default
    if (low is not None and value < low) or (high is not None and value > high):
        logger.warning("Ignoring %s%s=%r: out of range", ENV_PREFIX, name, raw)
        return default
    return value


def load_config(env: Mapping[str, str] | None = None, app_data_dir: str = "", music_dir: str = "") -> AppConfig:
    """
    Build the config from BANDPLAYER_* environment variables.
    `app_data_dir` / `music_dir` are the platform defaults (resolved by the caller
    through QStandardPaths) used when the variables are not set.
    """
    env = os.environ if env is None else env
    defaults = AppConfig()

    log_level = (_env(env, "LOG_LEVEL") or defaults.log_level).upper()
    if log_level not in LOG_LEVELS:
        logger.warning("Ignoring %sLOG_LEVEL=%r", ENV_PREFIX, log_level)
        log_level = defaults.log_level

    return AppConfig(
        skip_seconds=_number(env, "SKIP_SECONDS", defaults.skip_seconds, float, low=0.0),
        load_timeout_ms=_number(env, "LOAD_TIMEOUT_MS", defaults.load_timeout_ms, int, low=0),
        volume=_number(env, "VOLUME", defaults.volume, float, low=0.0, high=1.0),
        log_level=log_level,
        app_data_dir=_env(env, "DATA_DIR") or app_data_dir,
        music_dir=_env(env, "MUSIC_DIR") or music_dir,
    )
