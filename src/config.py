"""Centralized configuration for the aura map builder.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading

Usage:
    from config import PROJECT_ROOT, get_env

    cache_dir = get_cache_dir()
    timeout = get_request_timeout()
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from exceptions import ConfigurationError

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_WOWHEAD_URL = "https://www.wowhead.com"
DEFAULT_WOWDB_URL = "https://www.wowdb.com/api"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_PATCH = "8.2.0"


def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def get_wowhead_url() -> str:
    """Get base URL of the listing site."""
    return get_env("WOWHEAD_URL", default=DEFAULT_WOWHEAD_URL).rstrip("/")


def get_wowdb_url() -> str:
    """Get base URL of the item/spell record API."""
    return get_env("WOWDB_URL", default=DEFAULT_WOWDB_URL).rstrip("/")


def get_cache_dir() -> Path:
    """Get the cache root (one subdirectory per category)."""
    return Path(get_env("AURA_CACHE_DIR", default=str(PROJECT_ROOT / "cache")))


def get_request_timeout() -> float:
    """Get HTTP timeout in seconds.

    Raises:
        ConfigurationError: If REQUEST_TIMEOUT is not a positive number
    """
    raw = get_env("REQUEST_TIMEOUT", default=str(DEFAULT_REQUEST_TIMEOUT))
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number, got '{raw}'") from e
    if timeout <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {timeout}")
    return timeout


def get_patch() -> str:
    """Get the game patch stamped onto prepared listings."""
    return get_env("GAME_PATCH", default=DEFAULT_PATCH)
