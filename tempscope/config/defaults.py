"""tempscope config defaults.

No side effects on import. Values can be overridden via TS_* environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env(name: str, default: str) -> str:
    if not name.startswith("TS_"):
        raise ValueError(f"Only TS_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, str(default))
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_mode(name: str, default: int) -> int:
    """Parse a permission mode given in octal (``600``, ``0o600`` or ``0600``)."""
    raw = _env(name, oct(default)).strip().lower()
    if raw.startswith("0o"):
        raw = raw[2:]
    try:
        mode = int(raw, 8)
    except ValueError:
        return default
    if mode < 0 or mode > 0o7777:
        return default
    return mode


def _env_policy(name: str, default: str) -> str:
    raw = _env(name, default).strip().lower().replace("-", "_")
    if raw not in {"never", "unless_not_found", "always"}:
        return default
    return raw


@dataclass(frozen=True)
class TempDefaults:
    disposal_policy: str = _env_policy("TS_DISPOSAL_POLICY", "always")
    create_parents: bool = _env_bool("TS_CREATE_PARENTS", False)
    file_mode: int = _env_mode("TS_FILE_MODE", 0o600)
    dir_mode: int = _env_mode("TS_DIR_MODE", 0o700)


TMP = TempDefaults()
