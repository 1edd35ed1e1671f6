"""Scoped temporary files, directories and unbound paths.

A :class:`TempPath` owns one uniquely named filesystem path and removes it
when its scope ends: on leaving a ``with`` block, on an explicit
:meth:`TempPath.dispose` call, or when the handle is garbage collected,
whichever happens first. :meth:`TempPath.release` hands the path back to the
caller and disarms the cleanup.

Example::

    with TempPath.new_dir() as workdir:
        (workdir / "out.json").write_text("{}")
    # workdir and everything in it is gone here
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ._types import DisposalPolicy, TempKind
from .config import defaults as _defaults
from .config.paths import resolve_temp_dir
from .errors import DisposalError, TempPathStateError
from .fsops import FilesystemAdapter, default_adapter
from .naming import generate_path, validate_segment

logger = logging.getLogger(__name__)


class TempPath:
    """Handle owning the lifecycle of one temporary filesystem path.

    Use the ``new_*`` constructors rather than instantiating directly; they
    generate the name and create the backing file or directory.

    A handle is single-owner and not thread-safe. Share the path, not the
    handle, if several threads need it.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        kind: TempKind,
        *,
        disposal_policy: Optional[DisposalPolicy | str] = None,
        adapter: Optional[FilesystemAdapter] = None,
    ) -> None:
        if disposal_policy is None:
            disposal_policy = _defaults.TMP.disposal_policy
        self._policy = DisposalPolicy.parse(disposal_policy)
        self._adapter = adapter or default_adapter()
        self._path = Path(path)
        self._kind = kind
        # set last: __del__ treats a handle without these as never armed
        self._released = False
        self._disposed = False

    # ---------- Constructors ----------
    @classmethod
    def _create(
        cls,
        kind: TempKind,
        base_dir: Optional[str | os.PathLike[str]],
        extension: Optional[str],
        disposal_policy: Optional[DisposalPolicy | str],
        adapter: Optional[FilesystemAdapter],
    ) -> TempPath:
        adapter = adapter or default_adapter()
        # parse before touching the filesystem
        policy = DisposalPolicy.parse(
            _defaults.TMP.disposal_policy if disposal_policy is None else disposal_policy
        )
        base = Path(os.path.abspath(base_dir)) if base_dir is not None else resolve_temp_dir()
        path = generate_path(base, extension)
        if kind is TempKind.FILE:
            adapter.create_file(path)
        elif kind is TempKind.DIRECTORY:
            adapter.create_dir(path)
        handle = cls(path, kind, disposal_policy=policy, adapter=adapter)
        logger.debug("Created temporary %s %s", kind.value, path)
        return handle

    @classmethod
    def new_file(
        cls,
        base_dir: Optional[str | os.PathLike[str]] = None,
        *,
        disposal_policy: Optional[DisposalPolicy | str] = None,
        adapter: Optional[FilesystemAdapter] = None,
    ) -> TempPath:
        """Create an empty file (mode 0600 on POSIX) under ``base_dir``.

        ``base_dir`` defaults to the configured temporary directory and must
        already exist; otherwise ``FileNotFoundError`` is raised and nothing is
        created.
        """
        return cls._create(TempKind.FILE, base_dir, None, disposal_policy, adapter)

    @classmethod
    def new_file_with_extension(
        cls,
        extension: str,
        base_dir: Optional[str | os.PathLike[str]] = None,
        *,
        disposal_policy: Optional[DisposalPolicy | str] = None,
        adapter: Optional[FilesystemAdapter] = None,
    ) -> TempPath:
        """Like :meth:`new_file`, with ``extension`` (``"json"`` or ``".json"``) appended."""
        return cls._create(TempKind.FILE, base_dir, extension, disposal_policy, adapter)

    @classmethod
    def new_dir(
        cls,
        base_dir: Optional[str | os.PathLike[str]] = None,
        *,
        disposal_policy: Optional[DisposalPolicy | str] = None,
        adapter: Optional[FilesystemAdapter] = None,
    ) -> TempPath:
        """Create an empty directory (mode 0700 on POSIX) under ``base_dir``."""
        return cls._create(TempKind.DIRECTORY, base_dir, None, disposal_policy, adapter)

    @classmethod
    def new_unbound_path(
        cls,
        base_dir: Optional[str | os.PathLike[str]] = None,
        *,
        disposal_policy: Optional[DisposalPolicy | str] = None,
        adapter: Optional[FilesystemAdapter] = None,
    ) -> TempPath:
        """Reserve a unique path without creating anything.

        The caller decides what to put there (a file, a directory, a socket).
        Whatever exists at the path when the handle is disposed is removed; if
        nothing was ever created, disposal does nothing.
        """
        return cls._create(TempKind.UNBOUND, base_dir, None, disposal_policy, adapter)

    @classmethod
    def new_file_in(cls, base_dir: str | os.PathLike[str], **kwargs) -> TempPath:
        return cls.new_file(base_dir, **kwargs)

    @classmethod
    def new_dir_in(cls, base_dir: str | os.PathLike[str], **kwargs) -> TempPath:
        return cls.new_dir(base_dir, **kwargs)

    # ---------- Accessors ----------
    @property
    def path(self) -> Path:
        return self._path

    @property
    def kind(self) -> TempKind:
        return self._kind

    @property
    def released(self) -> bool:
        return self._released

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def disposal_policy(self) -> DisposalPolicy:
        return self._policy

    @disposal_policy.setter
    def disposal_policy(self, policy: DisposalPolicy | str) -> None:
        self._policy = DisposalPolicy.parse(policy)

    def set_disposal_policy(self, policy: DisposalPolicy | str) -> None:
        """Choose which removal failures are fatal at disposal.

        The default, ``ALWAYS``, fails even when the path was already deleted by
        someone else. Use ``UNLESS_NOT_FOUND`` when racing with external cleanup.
        """
        self.disposal_policy = policy

    def to_path(self) -> Path:
        """Return a copy of the path; the handle keeps ownership."""
        return Path(self._path)

    def push(self, *segments: str | os.PathLike[str]) -> Path:
        """Append relative segments to an unbound path and return the new path.

        Only valid for armed ``UNBOUND`` handles, since the file or directory a
        bound handle created lives at the original path.
        """
        if self._kind is not TempKind.UNBOUND:
            raise TempPathStateError(f"cannot extend a {self._kind.value} handle's path")
        if self._released or self._disposed:
            raise TempPathStateError("handle no longer owns its path")
        parts = [validate_segment(s) for s in segments]
        self._path = self._path.joinpath(*parts)
        return self._path

    def __fspath__(self) -> str:
        return str(self._path)

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        state = "released" if self._released else ("disposed" if self._disposed else "armed")
        return f"TempPath({str(self._path)!r}, kind={self._kind.value}, {state})"

    def __truediv__(self, other: str | os.PathLike[str]) -> Path:
        return self._path / other

    # ---------- Ownership ----------
    def release(self) -> Path:
        """Give up ownership: disposal becomes a no-op and the path is returned.

        The caller is now responsible for removing it. Calling this again just
        returns the path.
        """
        if not self._released:
            self._released = True
            logger.debug("Released temporary %s %s", self._kind.value, self._path)
        return self.to_path()

    def dispose(self) -> None:
        """Remove the path now instead of at scope end.

        Does nothing if the handle was released or already disposed.

        Raises:
            DisposalError: removal failed and the disposal policy treats the
                failure as fatal.
        """
        self._dispose(unwinding=False)

    def _dispose(self, unwinding: bool) -> None:
        if self._released or self._disposed:
            return
        self._disposed = True
        path = self._path
        try:
            removed = self._remove(path)
        except OSError as exc:
            if self._policy.tolerates(exc):
                logger.debug("Ignoring failure to remove %s (policy=%s): %s", path, self._policy.value, exc)
                return
            if unwinding:
                # a second error must not replace the one already propagating
                logger.error(
                    "Could not remove temporary path %s while handling another exception",
                    path,
                    exc_info=exc,
                )
                return
            raise DisposalError(path, self._policy, exc) from exc
        if removed:
            logger.debug("Removed temporary %s %s", self._kind.value, path)

    def _remove(self, path: Path) -> bool:
        fs = self._adapter
        if not fs.exists(path):
            if self._kind is TempKind.UNBOUND:
                return False
            # vanished behind our back; the not-found error is for the policy to judge
            if self._kind is TempKind.DIRECTORY:
                fs.remove_dir_recursive(path)
            else:
                fs.remove_file(path)
            return True
        if fs.is_dir(path):
            fs.remove_dir_recursive(path)
        else:
            fs.remove_file(path)
        return True

    # ---------- Scope ----------
    def __enter__(self) -> TempPath:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._dispose(unwinding=exc_type is not None)

    def __del__(self) -> None:
        # __init__ may not have completed
        if getattr(self, "_released", True) or getattr(self, "_disposed", True):
            return
        try:
            self._dispose(unwinding=False)
        except DisposalError:
            # exceptions cannot propagate out of a finalizer
            logger.critical("Temporary path %s could not be removed on collection", self._path, exc_info=True)


def temp_file(base_dir: Optional[str | os.PathLike[str]] = None, extension: Optional[str] = None, **kwargs) -> TempPath:
    if extension is not None:
        return TempPath.new_file_with_extension(extension, base_dir, **kwargs)
    return TempPath.new_file(base_dir, **kwargs)


def temp_dir(base_dir: Optional[str | os.PathLike[str]] = None, **kwargs) -> TempPath:
    return TempPath.new_dir(base_dir, **kwargs)


def temp_path(base_dir: Optional[str | os.PathLike[str]] = None, **kwargs) -> TempPath:
    return TempPath.new_unbound_path(base_dir, **kwargs)


__all__ = ["TempPath", "temp_file", "temp_dir", "temp_path"]
