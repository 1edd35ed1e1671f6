"""Exception hierarchy for tempscope.

Creation failures are not wrapped: the ``OSError`` subclass raised by the
operating system (``FileNotFoundError``, ``FileExistsError``, ``PermissionError``)
reaches the caller as-is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ._types import DisposalPolicy


class TempScopeError(Exception):
    """Base class for errors raised by tempscope itself."""


class PathInputError(TempScopeError, ValueError):
    """Raised when an extension or path segment is malformed."""


class TempPathStateError(TempScopeError, RuntimeError):
    """Raised when an operation is not valid in the handle's current state."""


class DisposalError(TempScopeError):
    """Removing a temporary path failed and the disposal policy treats it as fatal.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: Path, policy: DisposalPolicy, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"could not remove path {str(path)!r} (policy={policy.value}){detail}")
        self.path = path
        self.policy = policy


__all__ = ["TempScopeError", "PathInputError", "TempPathStateError", "DisposalError"]
