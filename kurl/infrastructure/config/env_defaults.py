# infrastructure/config/env_defaults.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from kurl import __version__

DEFAULT_USER_AGENT = f"kurl/{__version__}"


def _parse_optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class EnvDefaults:
    """
    Defaults read from the environment and an optional .env file.
    The process environment wins over .env; explicit CLI flags win over both.
    """

    connect_timeout: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT
    insecure: bool = False

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None, env_file: Optional[Path] = None) -> "EnvDefaults":
        values = {}
        path = env_file if env_file is not None else Path(".env")
        if path.exists():
            values.update({k: v for k, v in dotenv_values(path).items() if v is not None})
        values.update(os.environ if env is None else env)

        return EnvDefaults(
            connect_timeout=_parse_optional_float(values.get("KURL_CONNECT_TIMEOUT")),
            user_agent=values.get("KURL_USER_AGENT") or DEFAULT_USER_AGENT,
            insecure=_parse_bool(values.get("KURL_INSECURE")),
        )
