"""Runtime settings read from ``POET_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_USERDICT_PATH = "./userdict.dict"
DEFAULT_DATAMUSE_URL = "https://api.datamuse.com/words"
DEFAULT_MAX_INTERPRETATIONS = 100_000

_TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or not str(value).strip():
        return default
    return str(value).strip().lower() in _TRUTHY


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _parse_float(value: Optional[str], default: float) -> float:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    cmudict_path: Optional[Path] = None
    userdict_path: Optional[Path] = Path(DEFAULT_USERDICT_PATH)
    log_level: Optional[str] = None
    max_interpretations: int = DEFAULT_MAX_INTERPRETATIONS
    remote_lookups: bool = False
    datamuse_url: str = DEFAULT_DATAMUSE_URL
    datamuse_timeout: float = 5.0
    share: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        cmudict = env.get("POET_CMUDICT_PATH")
        userdict = env.get("POET_USERDICT_PATH", DEFAULT_USERDICT_PATH)
        return cls(
            cmudict_path=Path(cmudict) if cmudict else None,
            userdict_path=Path(userdict) if userdict else None,
            log_level=env.get("POET_LOG_LEVEL") or None,
            max_interpretations=_parse_int(
                env.get("POET_MAX_INTERPRETATIONS"), DEFAULT_MAX_INTERPRETATIONS
            ),
            remote_lookups=parse_bool(env.get("POET_REMOTE_LOOKUPS")),
            datamuse_url=env.get("POET_DATAMUSE_URL") or DEFAULT_DATAMUSE_URL,
            datamuse_timeout=_parse_float(env.get("POET_DATAMUSE_TIMEOUT"), 5.0),
            share=parse_bool(env.get("POET_SHARE")),
        )


__all__ = ["Settings", "parse_bool"]
