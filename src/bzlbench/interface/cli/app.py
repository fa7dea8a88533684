from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, JSON file and CLI overrides),
generation and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from bzlbench.core.pipeline.engine import run_generation
from bzlbench.core.pipeline.validator import validate_config
from bzlbench.domain.config import build_settings, load_config
from bzlbench.domain.pipeline_models import GenerationResult
from bzlbench.infra.logging import configure_logging, get_logger, shutdown_logging
from bzlbench.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    configure_logging(debug=args.debug, log_file=args.log_file)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration and merge command-line overrides
    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    # 4. Schema validation and normalization
    try:
        clean_conf, warnings = validate_config(raw_conf, strict=False)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not clean_conf["output_dir"]:
        msg = "An output directory is required (--output)."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # 5. Generation phase
    settings = build_settings(clean_conf)
    logger.info(f"Targeting output directory: {settings.output_dir}")
    try:
        result = run_generation(
            settings,
            dry_run=bool(args.dry_run),
            print_tree=bool(args.print_tree),
        )
    except KeyboardInterrupt:
        logger.warning("Generation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except OSError as e:
        logger.critical(f"Generation failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and None values are skipped.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    """
    Format and print the generation result to the standard output.

    Args:
        result: The generation result to render.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if result.dry_run:
        print("Dry run: nothing was written.")
        print(f"Target path: {result.output_dir}")
        print(f"Projected nodes: {result.node_count}")
        print(f"Projected files: {result.files_written}")
        return

    print("Workspace generated.")
    print(f"Output directory: {result.output_dir}")
    print(f"Nodes: {result.node_count} ({result.library_count} libraries)")
    print(f"Files written: {result.files_written}")
