from __future__ import annotations

"""
Tree Addressing Service.

Maps a flat breadth-first node index onto its position in a perfect n-ary
tree: ancestor chain, depth and local rank inside its package. Every function
in this module is pure; addresses are rebuilt from (index, shape) on demand
instead of being cached.

Index layout for branching factor k:
    0                      root
    1 .. k                 depth 1
    k+1 .. k+k^2           depth 2
    ...
The parent of index n is (n - 1) // k and its children are n*k+1 .. n*k+k.
"""

from typing import Iterator, List

from bzlbench.domain.node_models import NodeAddress, TreeShape

# -----------------------------------------------------------------------------
# TREE ARITHMETIC
# -----------------------------------------------------------------------------

def validate_shape(shape: TreeShape) -> None:
    """
    Reject topologies the closed-form arithmetic cannot express.

    Raises:
        ValueError: If the branching factor is below 2 or the depth negative.
    """
    if shape.branching_factor < 2:
        raise ValueError(
            f"Branching factor must be at least 2, received {shape.branching_factor}."
        )
    if shape.max_depth < 0:
        raise ValueError(f"Tree height must be non-negative, received {shape.max_depth}.")


def num_nodes_in_tree(branching_factor: int, depth: int) -> int:
    """
    Count the nodes of a perfect tree down to and including 'depth'.

    Closed form of 1 + k + k^2 + ... + k^depth.

    Args:
        branching_factor: Children per node (k >= 2).
        depth: Deepest level counted (>= 0).

    Returns:
        int: Total node count.

    Raises:
        ValueError: On a branching factor below 2 or a negative depth.
    """
    validate_shape(TreeShape(branching_factor=branching_factor, max_depth=depth))
    return (branching_factor ** (depth + 1) - 1) // (branching_factor - 1)


def total_nodes(shape: TreeShape) -> int:
    return num_nodes_in_tree(shape.branching_factor, shape.max_depth)

# -----------------------------------------------------------------------------
# ADDRESS RESOLUTION
# -----------------------------------------------------------------------------

def root_address(shape: TreeShape) -> NodeAddress:
    return NodeAddress(index=0, ancestors=(), position_in_level=0, shape=shape)


def address_of(index: int, shape: TreeShape) -> NodeAddress:
    """
    Resolve the full address of a node from its global index.

    The ancestor chain is rebuilt by repeated integer division towards the
    root. The local rank is the node's offset from the first index of its
    depth level, counted from 1.

    Args:
        index: Global node index in [0, total_nodes(shape)).
        shape: Tree topology.

    Returns:
        NodeAddress: The resolved address.

    Raises:
        ValueError: If the shape is invalid or the index out of range.
    """
    validate_shape(shape)
    if index < 0 or index >= total_nodes(shape):
        raise ValueError(
            f"Node index {index} outside tree of {total_nodes(shape)} nodes."
        )
    return _resolve(index, shape)


def _resolve(index: int, shape: TreeShape) -> NodeAddress:
    if index == 0:
        return root_address(shape)

    parent = _resolve((index - 1) // shape.branching_factor, shape)
    ancestors = (parent,) + parent.ancestors
    depth = len(ancestors)
    position = 1 + index - num_nodes_in_tree(shape.branching_factor, depth - 1)

    return NodeAddress(
        index=index,
        ancestors=ancestors,
        position_in_level=position,
        shape=shape,
    )


def children(node: NodeAddress) -> List[NodeAddress]:
    """
    Compute the direct children of a node without walking the tree again.

    Args:
        node: Parent address.

    Returns:
        List[NodeAddress]: k child addresses in rank order, or an empty list
                           when the node already sits at max depth.
    """
    if node.is_leaf:
        return []

    k = node.shape.branching_factor
    ancestors = (node,) + node.ancestors
    result: List[NodeAddress] = []

    for i in range(k):
        if node.is_root:
            position = i + 1
        else:
            position = k * (node.position_in_level - 1) + i + 1
        result.append(
            NodeAddress(
                index=node.index * k + i + 1,
                ancestors=ancestors,
                position_in_level=position,
                shape=node.shape,
            )
        )

    return result


def iter_indices(shape: TreeShape) -> Iterator[int]:
    """Yield every node index of the tree lazily, root first."""
    return iter(range(total_nodes(shape)))
