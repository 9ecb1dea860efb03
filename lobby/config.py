"""Store configuration read from the environment."""

import os
from dataclasses import dataclass
from os import getenv
from pathlib import Path
from typing import Optional

DEFAULT_STORE_TIMEOUT = 15.0

ENV_FILE_PATHS = [
    Path.cwd() / ".env",
    Path(__file__).parent.parent / ".env",
]


@dataclass(frozen=True)
class StoreSettings:
    """Connection settings for the external store."""
    url: str
    anon_key: str
    timeout: float = DEFAULT_STORE_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)


def get_store_settings() -> StoreSettings:
    """Read the store settings. Called once per request, never cached."""
    raw_timeout = getenv("STORE_TIMEOUT", "")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_STORE_TIMEOUT
    except ValueError:
        timeout = DEFAULT_STORE_TIMEOUT

    return StoreSettings(
        url=getenv("SUPABASE_URL", "").rstrip("/"),
        anon_key=getenv("SUPABASE_ANON_KEY", ""),
        timeout=timeout,
    )


def is_debug() -> bool:
    return getenv("APP_DEBUG", "false").lower() == "true"


def load_env_file(paths: Optional[list[Path]] = None) -> int:
    """
    Load KEY=VALUE pairs from the first existing .env file.

    Variables already present in the environment are left untouched.
    Returns the number of variables that were set.
    """
    for env_file in paths if paths is not None else ENV_FILE_PATHS:
        if not (env_file.exists() and env_file.is_file()):
            continue

        loaded_count = 0
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                    value = value[1:-1]
                if key and value and key not in os.environ:
                    os.environ[key] = value
                    loaded_count += 1
        return loaded_count
    return 0
