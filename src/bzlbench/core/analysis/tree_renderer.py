from __future__ import annotations

"""
Workspace Layout Renderer.

Builds the directory layout a generation run would produce and converts it
into a visual ASCII tree. Works purely from node addresses, so a preview can
be produced without touching the filesystem.
"""

from itertools import islice
from typing import List, Optional

from bzlbench.core.addressing import address_of, iter_indices, total_nodes
from bzlbench.core.emission.templates import header_file_name, source_file_name
from bzlbench.domain.constants import (
    BAZEL_VERSION_FILE_NAME,
    BUILD_FILE_NAME,
    ENTRY_POINT_FILE_NAME,
    WORKSPACE_FILE_NAME,
)
from bzlbench.domain.node_models import TreeShape
from bzlbench.domain.tree_models import FileNode, Tree

# Libraries shown before the preview is cut short
PREVIEW_LIBRARY_LIMIT = 50

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_layout(
        shape: TreeShape,
        files_per_target: int,
        limit: Optional[int] = PREVIEW_LIBRARY_LIMIT,
) -> Tree:
    """
    Construct the Tree model of a generated workspace.

    Libraries are added in breadth-first order. Once `limit` libraries are
    in the model the rest are summarized by a single trailing entry, so the
    preview stays small for trees of any height.

    Args:
        shape: Tree topology.
        files_per_target: Stub pairs per library.
        limit: Maximum number of libraries to include, or None for all.

    Returns:
        Tree: Nested mapping of directory names to sub-trees or files.
    """
    layout: Tree = {}
    for name in (BUILD_FILE_NAME, WORKSPACE_FILE_NAME, BAZEL_VERSION_FILE_NAME, ENTRY_POINT_FILE_NAME):
        layout[name] = FileNode(path=name)

    stop = None if limit is None else limit + 1
    for index in islice(iter_indices(shape), 1, stop):
        node = address_of(index, shape)

        level = layout
        for segment in node.library_path.split("/"):
            next_level = level.setdefault(segment, {})
            if isinstance(next_level, dict):
                level = next_level

        names = [BUILD_FILE_NAME]
        for i in range(1, files_per_target + 1):
            names.append(header_file_name(node.library_name, i))
            names.append(source_file_name(node.library_name, i))
        for name in names:
            level[name] = FileNode(path=f"{node.library_path}/{name}")

    libraries = total_nodes(shape) - 1
    if limit is not None and libraries > limit:
        marker = f"\u2026 ({libraries - limit} more libraries)"
        layout[marker] = FileNode(path=marker)

    return layout


def render_tree_structure(tree_structure: Tree, lines: List[str], prefix: str = "") -> None:
    """
    Recursively transform the Tree model into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories.

    Args:
        tree_structure: Current Tree node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = sorted(tree_structure.keys())
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{entry}")

        node = tree_structure[entry]
        if isinstance(node, dict):
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(node, lines, prefix=new_prefix)


def render_layout(
        shape: TreeShape,
        files_per_target: int,
        limit: Optional[int] = PREVIEW_LIBRARY_LIMIT,
) -> List[str]:
    """Build and render the layout preview in one step."""
    lines: List[str] = []
    render_tree_structure(build_layout(shape, files_per_target, limit), lines)
    return lines
