from __future__ import annotations

"""
Tree Addressing Data Models.

Defines the immutable value types describing the synthetic n-ary tree:
the topology of the whole tree and the address of a single node within it.
Naming of packages, libraries and Bazel labels is derived from an address
on demand and never stored.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from bzlbench.domain.constants import LIBRARY_SEGMENT_PREFIX, PACKAGE_SEGMENT_PREFIX

# -----------------------------------------------------------------------------
# TOPOLOGY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeShape:
    """
    Topology of a perfect n-ary tree.

    Attributes:
        branching_factor: Number of children of every non-leaf node.
        max_depth: Depth of the leaves (the root sits at depth 0).
    """
    branching_factor: int
    max_depth: int


# -----------------------------------------------------------------------------
# NODE ADDRESS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeAddress:
    """
    Position of a single node inside the tree.

    Attributes:
        index: Global breadth-first identifier (0 is the synthetic root).
        ancestors: Chain of enclosing nodes, nearest parent first and the
                   root last. Its length equals the node depth.
        position_in_level: 1-based rank of the node's library inside its
                           package. Always 0 for the root.
        shape: Topology the address was computed against.
    """
    index: int
    ancestors: Tuple["NodeAddress", ...]
    position_in_level: int
    shape: TreeShape

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    @property
    def is_root(self) -> bool:
        return self.index == 0

    @property
    def is_leaf(self) -> bool:
        return self.depth >= self.shape.max_depth

    @property
    def parent(self) -> Optional["NodeAddress"]:
        return self.ancestors[0] if self.ancestors else None

    @property
    def package_path(self) -> str:
        """Slash-joined package segments, one per depth level."""
        return "/".join(
            f"{PACKAGE_SEGMENT_PREFIX}{level}" for level in range(1, self.depth + 1)
        )

    @property
    def library_dir_name(self) -> str:
        return f"{LIBRARY_SEGMENT_PREFIX}{self.position_in_level}"

    @property
    def library_path(self) -> str:
        package = self.package_path
        if not package:
            return self.library_dir_name
        return f"{package}/{self.library_dir_name}"

    @property
    def library_name(self) -> str:
        """Module name of the generated library, e.g. 'Pkg1_Pkg2_Lib3'."""
        parts = [f"Pkg{level}" for level in range(1, self.depth + 1)]
        parts.append(f"Lib{self.position_in_level}")
        return "_".join(parts)

    @property
    def label(self) -> str:
        """Absolute Bazel label of the node's library target."""
        return f"//{self.library_path}"

    def __str__(self) -> str:
        return self.library_path if not self.is_root else "//"
