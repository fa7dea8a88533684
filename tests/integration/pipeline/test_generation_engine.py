from __future__ import annotations

"""
Integration tests for the Generation Engine.

Runs full generations into temporary directories and checks the resulting
workspace: scaffolding files, node layout, counts and fail-fast behaviour.
"""

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from bzlbench.core.addressing import address_of
from bzlbench.core.pipeline.engine import emit_all, projected_file_count, run_generation
from bzlbench.domain.node_models import TreeShape


def _build_files(root: Path):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("BUILD.bazel"))


def test_full_generation_small_tree(make_settings, workspace_template: Path) -> None:
    settings = make_settings(k=2, height=1, files=1)
    out = Path(settings.output_dir)

    result = run_generation(settings)

    assert result.ok is True
    assert result.node_count == 3
    assert result.library_count == 2
    assert result.files_written == projected_file_count(settings) == 3 + 1 + 2 * 3
    assert _build_files(out) == ["BUILD.bazel", "pkg_1/lib_1/BUILD.bazel", "pkg_1/lib_2/BUILD.bazel"]
    assert (out / "WORKSPACE").read_text(encoding="utf-8") == workspace_template.read_text(encoding="utf-8")
    assert (out / ".bazelversion").read_text(encoding="utf-8") == "5.0.0.7\n"
    assert "main" in (out / "main.m").read_text(encoding="utf-8")


def test_generation_wipes_previous_output(make_settings) -> None:
    settings = make_settings()
    out = Path(settings.output_dir)
    out.mkdir()
    (out / "stale.txt").write_text("old", encoding="utf-8")

    run_generation(settings)

    assert not (out / "stale.txt").exists()


@pytest.mark.parametrize("concurrency", [1, 3, 64])
def test_every_dependency_points_at_a_generated_library(make_settings, concurrency: int) -> None:
    settings = make_settings(k=3, height=2, files=2, concurrency=concurrency)
    out = Path(settings.output_dir)

    result = run_generation(settings)

    libraries = {f"//{p.rsplit('/', 1)[0]}" for p in _build_files(out) if p != "BUILD.bazel"}
    assert len(libraries) == result.library_count == 12

    for build in out.rglob("BUILD.bazel"):
        text = build.read_text(encoding="utf-8")
        deps = re.findall(r'"(//pkg_[^"]+)"', text)
        assert set(deps) <= libraries


def test_leaf_libraries_match_node_addresses(make_settings) -> None:
    settings = make_settings(k=3, height=2, files=2)
    out = Path(settings.output_dir)
    run_generation(settings)

    for index in range(4, 13):
        node = address_of(index, settings.shape)
        lib_dir = out / node.library_path
        assert len(list(lib_dir.glob("*_Hdr*.h"))) == 2
        assert len(list(lib_dir.glob("*_Src*.m"))) == 2


def test_dry_run_writes_nothing(make_settings) -> None:
    settings = make_settings(k=2, height=3, files=2)

    result = run_generation(settings, dry_run=True, print_tree=True)

    assert result.ok is True
    assert result.dry_run is True
    assert result.node_count == 15
    assert result.files_written == projected_file_count(settings)
    assert result.tree_lines
    assert not Path(settings.output_dir).exists()


def test_missing_output_dir_is_error_result(make_settings) -> None:
    result = run_generation(make_settings(output_dir=""))
    assert result.ok is False
    assert "output directory" in result.error


def test_protected_directory_is_refused(make_settings, tmp_path: Path) -> None:
    with patch("os.path.expanduser", return_value=str(tmp_path / "out")):
        result = run_generation(make_settings())
    assert result.ok is False
    assert "protected" in result.error


def test_invalid_shape_raises(make_settings) -> None:
    with pytest.raises(ValueError):
        run_generation(make_settings(k=1))


def test_missing_workspace_template_aborts(make_settings, tmp_path: Path) -> None:
    settings = make_settings(workspace_template=str(tmp_path / "nowhere"))

    with pytest.raises(FileNotFoundError):
        run_generation(settings)

    assert not (Path(settings.output_dir) / "pkg_1").exists()


def test_missing_template_leaves_existing_output_untouched(make_settings, tmp_path: Path) -> None:
    settings = make_settings(workspace_template=str(tmp_path / "nowhere"))
    out = Path(settings.output_dir)
    out.mkdir()
    (out / "precious.txt").write_text("keep me", encoding="utf-8")

    with pytest.raises(FileNotFoundError, match="Workspace template not found"):
        run_generation(settings)

    assert (out / "precious.txt").read_text(encoding="utf-8") == "keep me"


def test_template_inside_output_dir_is_refused(make_settings, tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()
    template = out / "WORKSPACE"
    template.write_text('workspace(name = "bench")\n', encoding="utf-8")
    settings = make_settings(workspace_template=str(template))

    result = run_generation(settings)

    assert result.ok is False
    assert "inside" in result.error
    assert template.read_text(encoding="utf-8") == 'workspace(name = "bench")\n'


def test_emit_all_fails_fast(make_settings) -> None:
    settings = make_settings(k=2, height=6, concurrency=2)
    Path(settings.output_dir).mkdir()
    calls = []

    def flaky(index, _settings):
        calls.append(index)
        if index == 3:
            raise OSError("Permission denied")
        return 1

    with patch("bzlbench.core.pipeline.engine.emit_index", side_effect=flaky):
        with pytest.raises(OSError, match="Permission denied"):
            emit_all(settings, range(127))

    assert len(calls) < 127


def test_emit_all_counts_files(make_settings) -> None:
    settings = make_settings(k=2, height=2, files=1)
    Path(settings.output_dir).mkdir()

    written = emit_all(settings, range(7))

    assert written == 1 + 6 * 3
    assert (Path(settings.output_dir) / "pkg_1" / "pkg_2" / "lib_4" / "BUILD.bazel").exists()


def test_shape_is_carried_in_settings(make_settings) -> None:
    assert make_settings(k=4, height=2).shape == TreeShape(branching_factor=4, max_depth=2)
