"""Thin filesystem adapter used by temporary path handles.

Every call maps onto one host filesystem operation. Errors propagate
unchanged; nothing is retried and nothing is canonicalized.
"""

from __future__ import annotations

import os
import shutil
import stat as _stat
from pathlib import Path
from typing import Optional

from .config import defaults as _defaults


class FilesystemAdapter:
    """Create and remove filesystem entries with restrictive permissions.

    Args:
        file_mode: Permission bits for new files (POSIX only).
        dir_mode: Permission bits for new directories (POSIX only).
        create_parents: When True, ``create_dir`` creates missing ancestors of
            the target first. The target itself is always created exclusively.
    """

    def __init__(self, file_mode: int = 0o600, dir_mode: int = 0o700, create_parents: bool = False) -> None:
        self.file_mode = file_mode
        self.dir_mode = dir_mode
        self.create_parents = bool(create_parents)

    def __repr__(self) -> str:
        return (
            f"FilesystemAdapter(file_mode={oct(self.file_mode)}, dir_mode={oct(self.dir_mode)}, "
            f"create_parents={self.create_parents})"
        )

    def create_file(self, path: Path) -> None:
        """Create a new empty regular file; fail if anything already exists there.

        Uses ``O_CREAT|O_EXCL`` so a pre-existing file is never truncated and
        ``O_NOFOLLOW`` where available so a planted symlink is not followed.
        """
        flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_CLOEXEC", 0)
        if hasattr(os, "O_NOFOLLOW"):
            flags |= os.O_NOFOLLOW
        fd = os.open(path, flags, self.file_mode)
        try:
            if os.name == "posix":
                # the umask can only narrow the mode given to open(); pin it exactly
                os.fchmod(fd, self.file_mode)
        finally:
            os.close(fd)

    def create_dir(self, path: Path) -> None:
        """Create a single directory with ``dir_mode`` permissions."""
        if self.create_parents:
            parent = Path(path).parent
            os.makedirs(parent, mode=self.dir_mode, exist_ok=True)
        os.mkdir(path, self.dir_mode)
        if os.name == "posix":
            try:
                os.chmod(path, self.dir_mode)
            except OSError:
                # don't leave a directory behind that we failed to lock down
                os.rmdir(path)
                raise

    def remove_file(self, path: Path) -> None:
        os.unlink(path)

    def remove_dir_recursive(self, path: Path) -> None:
        shutil.rmtree(path)

    def exists(self, path: Path) -> bool:
        # lexists: a dangling symlink is still something to clean up
        return os.path.lexists(path)

    def is_dir(self, path: Path) -> bool:
        """True only for a real directory; a symlink to one reports False."""
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return False
        return _stat.S_ISDIR(st.st_mode)


def default_adapter(defaults: Optional[_defaults.TempDefaults] = None) -> FilesystemAdapter:
    """Build an adapter from the TS_* configuration."""
    cfg = defaults or _defaults.TMP
    return FilesystemAdapter(
        file_mode=cfg.file_mode,
        dir_mode=cfg.dir_mode,
        create_parents=cfg.create_parents,
    )


__all__ = ["FilesystemAdapter", "default_adapter"]
