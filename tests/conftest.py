# tests/conftest.py
# Keep TS_* settings from the developer's shell out of the suite.

from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import Iterator, List

import pytest

from tempscope._types import DisposalPolicy
from tempscope.fsops import FilesystemAdapter


@pytest.fixture(autouse=True)
def clean_ts_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("TS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reload_defaults(monkeypatch):
    """Reload tempscope.config.defaults after setting env; restore on teardown."""
    from tempscope.config import defaults as mod

    def _reload():
        importlib.reload(mod)
        return mod

    yield _reload

    monkeypatch.undo()
    importlib.reload(mod)


class FailingAdapter(FilesystemAdapter):
    """Adapter whose removals raise a chosen error; creation is real."""

    def __init__(self, error: OSError) -> None:
        super().__init__()
        self.error = error
        self.removals: List[Path] = []

    def remove_file(self, path: Path) -> None:
        self.removals.append(path)
        raise self.error

    def remove_dir_recursive(self, path: Path) -> None:
        self.removals.append(path)
        raise self.error


@pytest.fixture
def permission_denied_adapter() -> Iterator[FailingAdapter]:
    yield FailingAdapter(PermissionError(13, "Permission denied"))


@pytest.fixture(params=list(DisposalPolicy))
def any_policy(request) -> DisposalPolicy:
    return request.param
