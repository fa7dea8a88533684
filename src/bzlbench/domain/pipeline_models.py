from __future__ import annotations

"""
Generation Result Data Models.

Defines the result structure and factory functions used to communicate
the outcome of a generation run between the engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Unified result object of a complete generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        output_dir: Root directory of the generated workspace.
        node_count: Total nodes in the tree, root included.
        library_count: Generated framework libraries (every non-root node).
        files_written: Files written (or projected, on dry runs).
        dry_run: Whether the run skipped all disk writes.
        tree_lines: Optional ASCII preview of the generated layout.
        summary: Additional execution metadata.
    """
    ok: bool
    error: str

    output_dir: str

    node_count: int = 0
    library_count: int = 0
    files_written: int = 0
    dry_run: bool = False

    tree_lines: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        output_dir: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a failed generation result instance.

    Args:
        error: Detailed error description.
        output_dir: Target workspace directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable error result object.
    """
    return GenerationResult(
        ok=False,
        error=error,
        output_dir=output_dir,
        summary=summary_extra or {},
    )


def create_success_result(
        output_dir: str,
        node_count: int,
        files_written: int,
        dry_run: bool = False,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a successful generation result instance.

    Args:
        output_dir: Root directory of the generated workspace.
        node_count: Total nodes in the tree, root included.
        files_written: Number of files produced.
        dry_run: Whether disk writes were skipped.
        tree_lines: Rendered layout preview.
        summary_extra: Final execution metrics.

    Returns:
        GenerationResult: An immutable success result object.
    """
    return GenerationResult(
        ok=True,
        error="",
        output_dir=output_dir,
        node_count=node_count,
        library_count=max(node_count - 1, 0),
        files_written=files_written,
        dry_run=dry_run,
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )
