"""Scoped temporary files and directories for tempscope."""

from ._types import DisposalPolicy, TempKind
from .errors import DisposalError, PathInputError, TempPathStateError, TempScopeError
from .fsops import FilesystemAdapter
from .temp import TempPath, temp_dir, temp_file, temp_path

__version__ = "0.4.0"

__all__ = [
    "TempPath",
    "TempKind",
    "DisposalPolicy",
    "FilesystemAdapter",
    "TempScopeError",
    "DisposalError",
    "PathInputError",
    "TempPathStateError",
    "temp_file",
    "temp_dir",
    "temp_path",
]
