from __future__ import annotations

from enum import Enum


class TempKind(Enum):
    """What the handle created on disk at construction time."""

    FILE = "file"
    DIRECTORY = "directory"
    UNBOUND = "unbound"  # nothing created; caller materializes the path


class DisposalPolicy(Enum):
    """Which removal failures are fatal when a handle is disposed."""

    NEVER = "never"
    UNLESS_NOT_FOUND = "unless_not_found"
    ALWAYS = "always"

    @classmethod
    def parse(cls, value: DisposalPolicy | str) -> DisposalPolicy:
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower().replace("-", "_")
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"unknown disposal policy {value!r} (expected one of: {allowed})")

    def tolerates(self, exc: BaseException) -> bool:
        """Return True if ``exc`` raised during removal should be swallowed."""
        if self is DisposalPolicy.NEVER:
            return True
        if self is DisposalPolicy.UNLESS_NOT_FOUND:
            return isinstance(exc, FileNotFoundError)
        return False
