from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types and defaults. Provides logic to translate raw argparse
namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the bzlbench CLI.

    Numeric options default to None so that config-file values survive
    unless explicitly overridden on the command line.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="bzlbench",
        description=(
            "Generate a Bazel benchmarking workspace shaped as a perfect n-ary "
            "tree of libraries. The number of generated targets is roughly "
            "targets_per_level ^ height."
        ),
    )

    # --- Tree Topology ---
    p.add_argument(
        "--output",
        dest="output_dir",
        default=None,
        help="Directory to write the workspace to. Existing content is wiped.",
    )
    p.add_argument(
        "--height",
        type=int,
        default=None,
        help="Height of the build graph (depth of the leaf libraries).",
    )
    p.add_argument(
        "--targets-per-level",
        dest="targets_per_level",
        type=int,
        default=None,
        help="Children of every non-leaf library (branching factor, >= 2).",
    )
    p.add_argument(
        "--files-per-target",
        dest="files_per_target",
        type=int,
        default=None,
        help="Header/implementation stub pairs generated per library.",
    )

    # --- Emitted Content ---
    p.add_argument(
        "--workspace-template",
        dest="workspace_template",
        default=None,
        help="WORKSPACE file copied into the output (default: ~/GEN_WORKSPACE).",
    )
    p.add_argument(
        "--bazel-version",
        dest="bazel_version",
        default=None,
        help="Version pinned in the generated .bazelversion.",
    )
    p.add_argument(
        "--import-all-frameworks",
        action="store_true",
        help="Import every Apple system framework from each stub header.",
    )

    # --- Runtime ---
    p.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Maximum number of libraries emitted concurrently.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the tree size without writing anything.",
    )
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Log an ASCII preview of the generated layout (first 50 libraries, breadth-first).",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the generation result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["output_dir"] = args.output_dir
    overrides["workspace_template"] = args.workspace_template
    overrides["bazel_version"] = args.bazel_version

    # Topology overrides
    overrides["height"] = args.height
    overrides["targets_per_level"] = args.targets_per_level
    overrides["files_per_target"] = args.files_per_target
    overrides["concurrency"] = args.concurrency

    if args.import_all_frameworks:
        overrides["import_all_frameworks"] = True

    return overrides
