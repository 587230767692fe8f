"""
Environment configuration for the Fitness Progress Tracker.

All settings come from environment variables with documented defaults:

    FITNESS_STORAGE_BACKEND     memory | redis             (default: memory)
    REDIS_URL                   redis connection URL       (default: redis://localhost:6379/0)
    FITNESS_KEY_PREFIX          prefix for storage keys    (default: "")
    FITNESS_CLOCK_TICK_SECONDS  display clock cadence      (default: 60)
    FITNESS_RECLASSIFY_SECONDS  reclassification cadence   (default: 30)
    FITNESS_DEV_MODE            "1" for console logs       (default: 0)
    LOG_LEVEL                   root log level             (default: INFO)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from fitness_tracker.lib.exceptions import ConfigurationError

StorageBackend = Literal["memory", "redis"]

VALID_BACKENDS: set[str] = {"memory", "redis"}

DEFAULT_CLOCK_TICK_SECONDS = 60.0
DEFAULT_RECLASSIFY_SECONDS = 30.0


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    storage_backend: StorageBackend = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""
    clock_tick_seconds: float = DEFAULT_CLOCK_TICK_SECONDS
    reclassify_seconds: float = DEFAULT_RECLASSIFY_SECONDS
    dev_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: on an unknown backend or a bad interval
        """
        env = os.environ if env is None else env

        backend = env.get("FITNESS_STORAGE_BACKEND", "memory").strip().lower()
        if backend not in VALID_BACKENDS:
            raise ConfigurationError(
                f"FITNESS_STORAGE_BACKEND must be one of {sorted(VALID_BACKENDS)}, got {backend!r}"
            )

        return cls(
            storage_backend=backend,  # type: ignore[arg-type]
            redis_url=env.get("REDIS_URL", "redis://localhost:6379/0"),
            key_prefix=env.get("FITNESS_KEY_PREFIX", ""),
            clock_tick_seconds=_positive_float(
                env, "FITNESS_CLOCK_TICK_SECONDS", DEFAULT_CLOCK_TICK_SECONDS
            ),
            reclassify_seconds=_positive_float(
                env, "FITNESS_RECLASSIFY_SECONDS", DEFAULT_RECLASSIFY_SECONDS
            ),
            dev_mode=env.get("FITNESS_DEV_MODE", "0") == "1",
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
