from __future__ import annotations
import logging
import os

# Defaults
_DEFAULT_PROMPT = "user=> "
_DEFAULT_LOG_LEVEL = "WARNING"


def value_from_env(var: str, default: str | None) -> str | None:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw


def get_prompt() -> str:
    return value_from_env("KAPPA_PROMPT", _DEFAULT_PROMPT)


def get_log_level() -> int:
    name = value_from_env("KAPPA_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in KAPPA_LOG_LEVEL: {name}")
    return level


def get_recursion_limit() -> int | None:
    raw = value_from_env("KAPPA_RECURSION_LIMIT", None)
    if raw is None:
        return None
    limit = int(raw)
    if limit <= 0:
        raise ValueError(f"KAPPA_RECURSION_LIMIT must be positive, got {limit}")
    return limit
