from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from tempscope.config.defaults import TempDefaults
from tempscope.fsops import FilesystemAdapter, default_adapter


def test_create_file_is_exclusive(tmp_path: Path):
    fs = FilesystemAdapter()
    target = tmp_path / "f"
    fs.create_file(target)
    assert target.is_file()
    with pytest.raises(FileExistsError):
        fs.create_file(target)


def test_create_dir_is_not_recursive_by_default(tmp_path: Path):
    fs = FilesystemAdapter()
    with pytest.raises(FileNotFoundError):
        fs.create_dir(tmp_path / "a" / "b")
    assert not (tmp_path / "a").exists()


def test_create_dir_fails_if_present(tmp_path: Path):
    fs = FilesystemAdapter(create_parents=True)
    fs.create_dir(tmp_path / "a" / "b")
    with pytest.raises(FileExistsError):
        fs.create_dir(tmp_path / "a" / "b")


def test_queries(tmp_path: Path):
    fs = FilesystemAdapter()
    f = tmp_path / "f"
    f.write_text("x", encoding="utf-8")
    assert fs.exists(f)
    assert not fs.is_dir(f)
    assert fs.is_dir(tmp_path)
    assert not fs.exists(tmp_path / "missing")
    assert not fs.is_dir(tmp_path / "missing")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_dangling_symlink_exists_and_is_not_dir(tmp_path: Path):
    fs = FilesystemAdapter()
    link = tmp_path / "link"
    os.symlink(tmp_path / "nowhere", link)
    assert fs.exists(link)
    assert not fs.is_dir(link)
    fs.remove_file(link)
    assert not os.path.lexists(link)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_symlink_to_dir_is_not_dir(tmp_path: Path):
    fs = FilesystemAdapter()
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    os.symlink(real, link, target_is_directory=True)
    assert not fs.is_dir(link)


def test_remove_operations_propagate_errors(tmp_path: Path):
    fs = FilesystemAdapter()
    with pytest.raises(FileNotFoundError):
        fs.remove_file(tmp_path / "missing")
    with pytest.raises(FileNotFoundError):
        fs.remove_dir_recursive(tmp_path / "missing")


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_custom_modes(tmp_path: Path):
    fs = FilesystemAdapter(file_mode=0o640, dir_mode=0o750)
    fs.create_file(tmp_path / "f")
    fs.create_dir(tmp_path / "d")
    assert stat.S_IMODE((tmp_path / "f").stat().st_mode) == 0o640
    assert stat.S_IMODE((tmp_path / "d").stat().st_mode) == 0o750


def test_default_adapter_follows_config():
    fs = default_adapter(TempDefaults(file_mode=0o644, dir_mode=0o755, create_parents=True))
    assert fs.file_mode == 0o644
    assert fs.dir_mode == 0o755
    assert fs.create_parents is True
