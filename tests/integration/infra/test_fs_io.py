from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, output directory bootstrapping and the
propagation of write failures.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bzlbench.infra.fs import copy_file, ensure_dir, normalize_path, reset_output_dir, write_text_file

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_normalize_path_expansion() -> None:
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

        with patch("os.path.expanduser", side_effect=lambda p: p.replace("~", "/home/user")):
            path = normalize_path("~/code", fallback=".")
            assert "code" in Path(path).parts


def test_normalize_path_uses_fallback(tmp_path: Path) -> None:
    assert normalize_path("   ", fallback=str(tmp_path)) == os.path.abspath(str(tmp_path))

# -----------------------------------------------------------------------------
# DIRECTORY MANAGEMENT TESTS
# -----------------------------------------------------------------------------

def test_reset_output_dir_wipes_content(tmp_path: Path) -> None:
    target = tmp_path / "out"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "old.txt").write_text("old")

    reset_output_dir(str(target))

    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_reset_output_dir_creates_missing(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    reset_output_dir(str(target))
    assert target.is_dir()


def test_reset_output_dir_replaces_file(tmp_path: Path) -> None:
    target = tmp_path / "out"
    target.write_text("not a dir")
    reset_output_dir(str(target))
    assert target.is_dir()


def test_ensure_dir_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "pkg_1" / "pkg_2"
    ensure_dir(str(target))
    ensure_dir(str(target))
    assert target.is_dir()


def test_ensure_dir_propagates_errors() -> None:
    with patch("os.makedirs", side_effect=OSError("Permission Denied")):
        with pytest.raises(OSError, match="Permission Denied"):
            ensure_dir("/root/forbidden")

# -----------------------------------------------------------------------------
# FILE WRITING TESTS
# -----------------------------------------------------------------------------

def test_write_text_file_truncates(tmp_path: Path) -> None:
    target = tmp_path / "BUILD.bazel"
    write_text_file(str(target), "first\n")
    write_text_file(str(target), "second\n")
    assert target.read_text(encoding="utf-8") == "second\n"


def test_copy_file_missing_source(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        copy_file(str(tmp_path / "missing"), str(tmp_path / "WORKSPACE"))


def test_copy_file(tmp_path: Path) -> None:
    source = tmp_path / "GEN_WORKSPACE"
    source.write_bytes(b"workspace()\n")
    copy_file(str(source), str(tmp_path / "WORKSPACE"))
    assert (tmp_path / "WORKSPACE").read_bytes() == b"workspace()\n"
