from __future__ import annotations

"""
Configuration Domain Management.

Handles the default generation parameters, optional JSON configuration files
and the conversion of a validated configuration dictionary into the immutable
settings object consumed by the generation engine.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from bzlbench.domain.constants import (
    DEFAULT_BAZEL_VERSION,
    DEFAULT_BUNDLE_ID,
    DEFAULT_CONCURRENCY,
    DEFAULT_FILES_PER_TARGET,
    DEFAULT_HEIGHT,
    DEFAULT_MINIMUM_OS_VERSION,
    DEFAULT_TARGETS_PER_LEVEL,
    DEFAULT_WORKSPACE_TEMPLATE,
)
from bzlbench.domain.node_models import TreeShape

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "output_dir": "",
        "workspace_template": DEFAULT_WORKSPACE_TEMPLATE,

        # Tree Topology
        "height": DEFAULT_HEIGHT,
        "targets_per_level": DEFAULT_TARGETS_PER_LEVEL,
        "files_per_target": DEFAULT_FILES_PER_TARGET,

        # Emitted Content
        "bazel_version": DEFAULT_BAZEL_VERSION,
        "bundle_id": DEFAULT_BUNDLE_ID,
        "minimum_os_version": DEFAULT_MINIMUM_OS_VERSION,
        "import_all_frameworks": False,

        # Runtime
        "concurrency": DEFAULT_CONCURRENCY,
    }


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Load a JSON configuration file on top of the defaults.

    Unknown keys are discarded. A missing, unreadable or malformed file
    falls back to the defaults with a warning.

    Args:
        path: Location of the JSON file. None returns the defaults.

    Returns:
        Dict[str, Any]: Merged configuration.
    """
    config = get_default_config()
    if not path:
        return config

    if not os.path.exists(path):
        logger.warning(f"Config file not found: {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read config file '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Config file '{path}' does not hold an object. Using defaults.")
        return config

    for key, value in data.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")

    return config

# -----------------------------------------------------------------------------
# Frozen Settings
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationSettings:
    """
    Immutable parameters of a single generation run.

    Attributes:
        output_dir: Absolute root of the generated workspace.
        shape: Tree topology (branching factor and height).
        files_per_target: Header/implementation pairs per library.
        concurrency: Maximum number of concurrently emitted nodes.
        workspace_template: Absolute path of the WORKSPACE file to copy.
        bazel_version: Version written to '.bazelversion'.
        bundle_id: Bundle identifier of the root application.
        minimum_os_version: Deployment target of the root application.
        import_all_frameworks: Import every system framework from stub headers.
    """
    output_dir: str
    shape: TreeShape
    files_per_target: int
    concurrency: int
    workspace_template: str
    bazel_version: str
    bundle_id: str
    minimum_os_version: str
    import_all_frameworks: bool = False


def build_settings(cfg: Dict[str, Any]) -> GenerationSettings:
    """
    Freeze a validated configuration dictionary into GenerationSettings.

    Args:
        cfg: Configuration already normalized by the validator.

    Returns:
        GenerationSettings: Settings for the generation engine.
    """
    return GenerationSettings(
        output_dir=cfg["output_dir"],
        shape=TreeShape(
            branching_factor=cfg["targets_per_level"],
            max_depth=cfg["height"],
        ),
        files_per_target=cfg["files_per_target"],
        concurrency=cfg["concurrency"],
        workspace_template=cfg["workspace_template"],
        bazel_version=cfg["bazel_version"],
        bundle_id=cfg["bundle_id"],
        minimum_os_version=cfg["minimum_os_version"],
        import_all_frameworks=cfg["import_all_frameworks"],
    )
