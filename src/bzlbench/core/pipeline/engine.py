from __future__ import annotations

"""
Core generation pipeline.

This module coordinates the whole workspace generation:
1. Validates the output target and the workspace template, then computes
   the tree size. Nothing is written before these checks pass.
2. Wipes and recreates the output directory.
3. Installs the workspace scaffolding (WORKSPACE, .bazelversion, main.m).
4. Fans out one address-then-emit task per node index on a bounded
   thread pool, aborting on the first failure.
"""

import logging
import os
from concurrent.futures import FIRST_COMPLETED, FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Iterable, List, Set

from bzlbench.core.addressing import address_of, iter_indices, total_nodes, validate_shape
from bzlbench.core.analysis.tree_renderer import render_layout
from bzlbench.core.emission.templates import render_bazel_version, render_entry_point
from bzlbench.core.emission.writer import emit_node, emit_root
from bzlbench.domain.config import GenerationSettings
from bzlbench.domain.constants import (
    BAZEL_VERSION_FILE_NAME,
    EMIT_WORKER_PREFIX,
    ENTRY_POINT_FILE_NAME,
    WORKSPACE_FILE_NAME,
)
from bzlbench.domain.pipeline_models import (
    GenerationResult,
    create_error_result,
    create_success_result,
)
from bzlbench.infra.fs import copy_file, reset_output_dir, write_text_file

logger = logging.getLogger(__name__)

SCAFFOLDING_FILE_COUNT = 3


def run_generation(
        settings: GenerationSettings,
        *,
        dry_run: bool = False,
        print_tree: bool = False,
) -> GenerationResult:
    """
    Execute the full generation pipeline.

    Args:
        settings: Frozen generation parameters.
        dry_run: If True, compute counts and preview without writing to disk.
        print_tree: If True, log and return an ASCII preview of the layout.

    Returns:
        GenerationResult: Object containing status, metrics and summary.

    Raises:
        ValueError: If the tree shape is invalid.
        OSError: On the first filesystem failure of any stage.
    """
    logger.info("Generation started.")

    # -------------------------------------------------------------------------
    # 1) Pre-flight Checks
    # -------------------------------------------------------------------------
    validate_shape(settings.shape)
    output_dir = settings.output_dir

    if not output_dir:
        msg = "No output directory configured."
        logger.error(msg)
        return create_error_result(msg, output_dir)

    if _is_protected_dir(output_dir):
        msg = f"Refusing to wipe protected directory: {output_dir}"
        logger.error(msg)
        return create_error_result(msg, output_dir)

    # The output directory is wiped below; the template must survive it
    if _is_within(settings.workspace_template, output_dir):
        msg = (
            f"Workspace template {settings.workspace_template} lies inside the "
            f"output directory {output_dir} and would be wiped."
        )
        logger.error(msg)
        return create_error_result(msg, output_dir)

    if not os.path.isfile(settings.workspace_template):
        raise FileNotFoundError(f"Workspace template not found: {settings.workspace_template}")

    node_count = total_nodes(settings.shape)
    projected_files = projected_file_count(settings)
    logger.info(
        f"Tree shape: k={settings.shape.branching_factor}, height={settings.shape.max_depth} "
        f"-> {node_count} nodes, {projected_files} files."
    )

    tree_lines: List[str] = []
    if print_tree:
        tree_lines = render_layout(settings.shape, settings.files_per_target)
        logger.info("Layout Preview:\n" + "\n".join(tree_lines))

    summary = {
        "branching_factor": settings.shape.branching_factor,
        "height": settings.shape.max_depth,
        "files_per_target": settings.files_per_target,
        "concurrency": settings.concurrency,
    }

    if dry_run:
        logger.info("Dry run: no files written.")
        return create_success_result(
            output_dir, node_count, projected_files,
            dry_run=True, tree_lines=tree_lines, summary_extra=summary,
        )

    # -------------------------------------------------------------------------
    # 2) Output Directory & Scaffolding
    # -------------------------------------------------------------------------
    reset_output_dir(output_dir)
    written = install_scaffolding(settings)

    # -------------------------------------------------------------------------
    # 3) Parallel Node Emission
    # -------------------------------------------------------------------------
    written += emit_all(settings, iter_indices(settings.shape))

    logger.info(f"Generation finished: {node_count} nodes, {written} files in {output_dir}")
    return create_success_result(
        output_dir, node_count, written,
        tree_lines=tree_lines, summary_extra=summary,
    )


# -----------------------------------------------------------------------------
# STAGES
# -----------------------------------------------------------------------------

def install_scaffolding(settings: GenerationSettings) -> int:
    """
    Copy the WORKSPACE template and write the version pin and entry point.

    Returns:
        int: Number of files written.
    """
    out = settings.output_dir
    copy_file(settings.workspace_template, os.path.join(out, WORKSPACE_FILE_NAME))
    write_text_file(
        os.path.join(out, BAZEL_VERSION_FILE_NAME),
        render_bazel_version(settings.bazel_version),
    )
    write_text_file(os.path.join(out, ENTRY_POINT_FILE_NAME), render_entry_point())
    return SCAFFOLDING_FILE_COUNT


def emit_index(index: int, settings: GenerationSettings) -> int:
    """Address a single node and write its files. Index 0 is the root."""
    if index == 0:
        return emit_root(
            settings.shape,
            settings.output_dir,
            bundle_id=settings.bundle_id,
            minimum_os_version=settings.minimum_os_version,
        )
    node = address_of(index, settings.shape)
    return emit_node(
        node,
        settings.files_per_target,
        settings.output_dir,
        import_all_frameworks=settings.import_all_frameworks,
    )


def emit_all(settings: GenerationSettings, indices: Iterable[int]) -> int:
    """
    Emit every node index on a bounded thread pool.

    Indices are submitted lazily so that at most twice the worker count is
    in flight. The first failing task cancels the pending ones and its
    exception is re-raised.

    Args:
        settings: Frozen generation parameters.
        indices: Node indices to emit.

    Returns:
        int: Number of files written.
    """
    window = settings.concurrency * 2
    written = 0
    pending: Set[Future[int]] = set()

    with ThreadPoolExecutor(
            max_workers=settings.concurrency,
            thread_name_prefix=EMIT_WORKER_PREFIX,
    ) as executor:
        try:
            for index in indices:
                pending.add(executor.submit(emit_index, index, settings))
                if len(pending) >= window:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    written += _collect(done)

            done, pending = wait(pending, return_when=FIRST_EXCEPTION)
            written += _collect(done)
        except BaseException:
            for future in pending:
                future.cancel()
            logger.error("Node emission failed. Aborting remaining tasks.")
            raise

    return written


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def projected_file_count(settings: GenerationSettings) -> int:
    """Number of files a full run writes, scaffolding and root included."""
    libraries = total_nodes(settings.shape) - 1
    per_library = 1 + 2 * settings.files_per_target
    return SCAFFOLDING_FILE_COUNT + 1 + libraries * per_library


def _collect(done: Set[Future[int]]) -> int:
    return sum(future.result() for future in done)


def _is_protected_dir(path: str) -> bool:
    real = os.path.realpath(path)
    home = os.path.realpath(os.path.expanduser("~"))
    return real in (os.path.realpath(os.sep), home)


def _is_within(path: str, directory: str) -> bool:
    real_path = os.path.realpath(path)
    real_dir = os.path.realpath(directory)
    return os.path.commonpath([real_path, real_dir]) == real_dir
