from __future__ import annotations

import re
from pathlib import Path

import pytest

from tempscope import PathInputError
from tempscope.naming import generate_name, generate_path, normalize_extension

_HEX32 = re.compile(r"^[0-9a-f]{32}$")


def test_generated_name_is_compact_hex():
    assert _HEX32.match(generate_name())


def test_generate_path_joins_base(tmp_path: Path):
    p = generate_path(tmp_path)
    assert p.parent == tmp_path
    assert _HEX32.match(p.name)
    assert not p.exists()


def test_generate_path_with_extension(tmp_path: Path):
    assert generate_path(tmp_path, "json").suffix == ".json"
    assert generate_path(tmp_path, ".json").suffix == ".json"


@pytest.mark.parametrize(
    "raw,expected",
    [("json", "json"), (".json", "json"), ("..json", ".json"), ("tar.gz", "tar.gz"), (".tar.gz", "tar.gz")],
)
def test_normalize_extension_strips_one_dot(raw: str, expected: str):
    assert normalize_extension(raw) == expected


@pytest.mark.parametrize("raw", ["", ".", "..", "...", "a/b", "a\\b", "x\ny"])
def test_normalize_extension_rejects_bad_input(raw: str):
    with pytest.raises(PathInputError):
        normalize_extension(raw)


def test_path_input_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_extension("")
