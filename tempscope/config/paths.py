"""Path utilities for the default temporary base directory."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def resolve_temp_dir() -> Path:
    """Return the base directory new temporary paths are placed under.

    Prefers `TS_TEMP_DIR` and falls back to the system temporary directory.
    The value is read on every call, expands `~` and is resolved to an absolute
    path. The directory is not created.
    """
    configured = os.getenv("TS_TEMP_DIR") or tempfile.gettempdir()
    return Path(configured).expanduser().resolve()


__all__ = ["resolve_temp_dir"]
