"""Unique name generation for temporary paths.

Pure path computation: nothing here touches the filesystem. Names are the
32-character hex form of a random UUID, which makes accidental collisions
negligible. No retry-on-collision is attempted; an exclusive create in
:mod:`tempscope.fsops` surfaces the astronomically unlikely clash.
"""

from __future__ import annotations

import os
import re
import uuid
from pathlib import Path
from typing import Optional

from .errors import PathInputError

_CONTROL_RE = re.compile(r"[\x00-\x1F\x7F]")


def new_token() -> str:
    return uuid.uuid4().hex


def normalize_extension(extension: str) -> str:
    """Return ``extension`` without one leading dot.

    ``"json"`` and ``".json"`` both yield ``"json"``. Only a single dot is
    stripped, so ``"..json"`` yields ``".json"``.

    Raises:
        PathInputError: if the extension is empty, a dot segment, or contains
            separators or control characters.
    """
    if not isinstance(extension, str):
        raise PathInputError("extension must be a string")
    ext = extension[1:] if extension.startswith(".") else extension
    if not ext:
        raise PathInputError("extension cannot be empty")
    if ext in (".", ".."):
        raise PathInputError("reserved path segment")
    if "/" in ext or "\\" in ext or (os.altsep and os.altsep in ext):
        raise PathInputError("extension must not contain path separators")
    if _CONTROL_RE.search(ext):
        raise PathInputError("control characters not permitted in extension")
    return ext


def generate_name(extension: Optional[str] = None) -> str:
    name = new_token()
    if extension is not None:
        name = f"{name}.{normalize_extension(extension)}"
    return name


def generate_path(base_dir: str | os.PathLike[str], extension: Optional[str] = None) -> Path:
    """Join a freshly generated name (plus optional extension) onto ``base_dir``."""
    return Path(base_dir) / generate_name(extension)


def validate_segment(segment: str | os.PathLike[str]) -> str:
    """Validate one relative path segment appended to an unbound path."""
    raw = os.fspath(segment)
    if not isinstance(raw, str):
        raise PathInputError("path segment must be a string")
    if not raw:
        raise PathInputError("path segment cannot be empty")
    if _CONTROL_RE.search(raw):
        raise PathInputError("control characters not permitted in path segment")
    p = Path(raw)
    if p.is_absolute() or p.anchor:
        raise PathInputError("absolute path segments are not permitted")
    if any(part == ".." for part in p.parts):
        raise PathInputError("parent segments are not permitted")
    return raw


__all__ = ["new_token", "normalize_extension", "generate_name", "generate_path", "validate_segment"]
