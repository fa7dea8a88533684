from __future__ import annotations

"""
Node Emission Worker.

Writes the on-disk artifacts of a single tree node: its package directory,
its BUILD.bazel and its Objective-C stub pairs. Dependencies are declared
twice by construction, once in the BUILD deps list and once as '@import'
statements in every stub header, both derived from the same child list.

Functions here are designed to run inside a ThreadPoolExecutor. Each node
owns a disjoint library directory, so no locking is required.
"""

import logging
import os
from typing import List, Sequence

from bzlbench.core.addressing import children, root_address
from bzlbench.core.emission.templates import (
    header_file_name,
    render_header,
    render_library_build,
    render_root_build,
    render_source,
    source_file_name,
)
from bzlbench.domain.constants import ALL_FRAMEWORKS, BASE_FRAMEWORK, BUILD_FILE_NAME
from bzlbench.domain.node_models import NodeAddress, TreeShape
from bzlbench.infra.fs import ensure_dir, write_text_file

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def emit_root(
        shape: TreeShape,
        output_root: str,
        *,
        bundle_id: str,
        minimum_os_version: str,
) -> int:
    """
    Write the root BUILD file declaring the benchmark application.

    The application links every depth-1 library. No stub files are
    produced for the root; it consumes the workspace entry point.

    Args:
        shape: Tree topology.
        output_root: Workspace root directory.
        bundle_id: Application bundle identifier.
        minimum_os_version: Deployment target.

    Returns:
        int: Number of files written.
    """
    labels = [child.label for child in children(root_address(shape))]
    content = render_root_build(labels, bundle_id, minimum_os_version)
    write_text_file(os.path.join(output_root, BUILD_FILE_NAME), content)
    logger.debug(f"Root BUILD written with {len(labels)} deps.")
    return 1


def emit_node(
        node: NodeAddress,
        files_per_target: int,
        output_root: str,
        *,
        import_all_frameworks: bool = False,
) -> int:
    """
    Write the package directory, BUILD file and stubs of one library node.

    Args:
        node: Address of a non-root node.
        files_per_target: Number of header/implementation pairs to write.
        output_root: Workspace root directory.
        import_all_frameworks: Import the full system framework catalogue
                               instead of Foundation only.

    Returns:
        int: Number of files written.

    Raises:
        ValueError: If called with the root address.
        OSError: On any directory or file creation failure.
    """
    if node.is_root:
        raise ValueError("The root node is emitted through emit_root().")

    logger.debug(f"Handling {node.library_path}")

    lib_dir = os.path.join(output_root, *node.library_path.split("/"))
    ensure_dir(lib_dir)

    child_nodes = children(node)
    srcs: List[str] = []
    for i in range(1, files_per_target + 1):
        srcs.append(header_file_name(node.library_name, i))
        srcs.append(source_file_name(node.library_name, i))

    build_content = render_library_build(
        target_name=node.library_dir_name,
        module_name=node.library_name,
        srcs=srcs,
        deps=[child.label for child in child_nodes],
    )
    write_text_file(os.path.join(lib_dir, BUILD_FILE_NAME), build_content)

    frameworks = ALL_FRAMEWORKS if import_all_frameworks else [BASE_FRAMEWORK]
    stub_count = write_stub_files(lib_dir, node, child_nodes, files_per_target, frameworks)

    return 1 + stub_count


def write_stub_files(
        lib_dir: str,
        node: NodeAddress,
        child_nodes: Sequence[NodeAddress],
        files_per_target: int,
        frameworks: Sequence[str],
) -> int:
    """
    Write every header/implementation pair of a library.

    Args:
        lib_dir: Existing library directory.
        node: Owning node address.
        child_nodes: Children whose modules each header imports.
        files_per_target: Number of pairs to write.
        frameworks: System frameworks imported ahead of the child modules.

    Returns:
        int: Number of files written.
    """
    modules = list(frameworks) + [child.library_name for child in child_nodes]
    written = 0

    for i in range(1, files_per_target + 1):
        write_text_file(
            os.path.join(lib_dir, header_file_name(node.library_name, i)),
            render_header(node.library_name, i, modules),
        )
        write_text_file(
            os.path.join(lib_dir, source_file_name(node.library_name, i)),
            render_source(node.library_name, i),
        )
        written += 2

    return written
