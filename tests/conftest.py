from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and generation settings.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from bzlbench.domain.config import GenerationSettings  # noqa: E402
from bzlbench.domain.node_models import TreeShape  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'bzlbench.domain.config'.
    """
    return {
        "output_dir": str(tmp_path / "out"),
        "workspace_template": str(tmp_path / "GEN_WORKSPACE"),
        "height": 2,
        "targets_per_level": 2,
        "files_per_target": 1,
        "bazel_version": "5.0.0.7",
        "bundle_id": "com.bazel.benchmark",
        "minimum_os_version": "15.0",
        "import_all_frameworks": False,
        "concurrency": 4,
    }


@pytest.fixture
def workspace_template(tmp_path: Path) -> Path:
    """Create a WORKSPACE template file to be copied by the generator."""
    template = tmp_path / "GEN_WORKSPACE"
    template.write_text('workspace(name = "bench")\n', encoding="utf-8")
    return template


@pytest.fixture
def make_settings(tmp_path: Path, workspace_template: Path) -> Callable[..., GenerationSettings]:
    """Factory producing GenerationSettings rooted in a temporary directory."""

    def _make(
            k: int = 2,
            height: int = 1,
            files: int = 1,
            concurrency: int = 4,
            **extra: Any,
    ) -> GenerationSettings:
        values: Dict[str, Any] = {
            "output_dir": str(tmp_path / "out"),
            "shape": TreeShape(branching_factor=k, max_depth=height),
            "files_per_target": files,
            "concurrency": concurrency,
            "workspace_template": str(workspace_template),
            "bazel_version": "5.0.0.7",
            "bundle_id": "com.bazel.benchmark",
            "minimum_os_version": "15.0",
        }
        values.update(extra)
        return GenerationSettings(**values)

    return _make
