"""
Runtime settings read from the environment.

Values come from process environment variables, optionally seeded from a
`.env` file via `load_env()`.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1"
DEFAULT_API_KEY = "1"  # TheMealDB public test key


class ConfigError(ValueError):
    pass


def _as_int(value: Any, *, key: str, minimum: int = 0) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid int for {key}: {value!r}") from e
    if n < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {n}")
    return n


def _as_float(value: Any, *, key: str) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid float for {key}: {value!r}") from e
    if f <= 0:
        raise ConfigError(f"{key} must be positive, got {f}")
    return f


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = DEFAULT_API_KEY
    timeout: float = 15.0
    cache_size: int = 10
    max_attempts: int = 5
    log_level: str = "WARNING"

    @property
    def api_root(self) -> str:
        """Base URL with the API key path segment, e.g. .../json/v1/1"""
        return f"{self.base_url.rstrip('/')}/{self.api_key}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Raises:
        ConfigError: If a numeric value is malformed or out of range
    """
    env = os.environ if environ is None else environ

    level = env.get("MEALPICKER_LOG_LEVEL", "WARNING").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"Invalid MEALPICKER_LOG_LEVEL: {level!r}")

    return Settings(
        base_url=env.get("MEALDB_BASE_URL", DEFAULT_BASE_URL),
        api_key=env.get("MEALDB_API_KEY", DEFAULT_API_KEY),
        timeout=_as_float(env.get("MEALDB_TIMEOUT", "15"), key="MEALDB_TIMEOUT"),
        cache_size=_as_int(env.get("MEALPICKER_CACHE_SIZE", "10"), key="MEALPICKER_CACHE_SIZE"),
        max_attempts=_as_int(
            env.get("MEALPICKER_MAX_ATTEMPTS", "5"), key="MEALPICKER_MAX_ATTEMPTS", minimum=1
        ),
        log_level=level,
    )
