from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper of the generation engine, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, path normalization and default value injection.

Topology constraints are never coerced: a branching factor below 2 or a
negative height makes the index arithmetic undefined and is always raised
as ValueError, regardless of strict mode.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from bzlbench.domain.config import get_default_config
from bzlbench.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI, JSON files) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.

    Raises:
        TypeError: In strict mode, on any type mismatch.
        ValueError: On topology or runtime values outside their domain.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = [
        "output_dir", "workspace_template", "bazel_version",
        "bundle_id", "minimum_os_version",
    ]
    int_fields = ["height", "targets_per_level", "files_per_target", "concurrency"]
    bool_fields = ["import_all_frameworks"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in int_fields:
        merged[field] = _as_int(
            merged.get(field), defaults[field], field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    # 4. Domain Constraints
    _check_ranges(merged)

    # 5. Path Normalization
    if merged["output_dir"]:
        merged["output_dir"] = normalize_path(merged["output_dir"], os.getcwd())
    merged["workspace_template"] = normalize_path(
        merged["workspace_template"], defaults["workspace_template"]
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN CONSTRAINTS
# -----------------------------------------------------------------------------

def _check_ranges(cfg: Dict[str, Any]) -> None:
    """Reject values that make generation undefined."""
    if cfg["targets_per_level"] < 2:
        raise ValueError(
            f"targets_per_level must be at least 2, received {cfg['targets_per_level']}."
        )
    if cfg["height"] < 0:
        raise ValueError(f"height must be non-negative, received {cfg['height']}.")
    if cfg["files_per_target"] < 0:
        raise ValueError(
            f"files_per_target must be non-negative, received {cfg['files_per_target']}."
        )
    if cfg["concurrency"] < 1:
        raise ValueError(f"concurrency must be at least 1, received {cfg['concurrency']}.")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric inputs into native integers."""
    if value is None:
        return fallback
    # bool is an int subclass and never a meaningful count
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, float) and value.is_integer():
            warnings.append(f"Field '{field}' converted from float {value} to int.")
            return int(value)
        if isinstance(value, str):
            s = value.strip()
            if s.lstrip("-").isdigit():
                warnings.append(f"Field '{field}' converted from '{value}' to int.")
                return int(s)

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
