from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, JSON file, flags), scan or prompt-count execution,
and result rendering as an annotated tree or JSON.
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from contextscan.api import count_prompt_tokens, scan_directory
from contextscan.core.analysis.tree_queries import (
    count_source_files,
    total_token_count,
    tree_to_dicts,
)
from contextscan.core.analysis.tree_renderer import render_tree
from contextscan.core.services.config_loader import load_scan_config
from contextscan.core.services.observers import LoggingScanObserver
from contextscan.domain.errors import ContextScanError, TokenizerUnavailable
from contextscan.domain.tree_models import FileNode
from contextscan.infra.logging import LoggingConfig, configure_logging, get_logger
from contextscan.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
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
        int: Process exit code (0 success, 1 failure, 2 invalid input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.for_verbosity(
        verbose=args.verbose,
        debug=args.debug,
        log_file=cli_args.resolve_log_file(args),
    ))

    # 3. Configuration resolution
    config, warnings = load_scan_config(args.config_path, cli_args.args_to_overrides(args))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(asdict(config), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4a. Prompt counting mode
    if args.prompt is not None:
        try:
            print(count_prompt_tokens(args.prompt, encoding=config.encoding))
        except TokenizerUnavailable as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return EXIT_FAILURE
        return EXIT_OK

    # 4b. Scan mode
    input_path = cli_args.resolve_input_path(args)
    try:
        nodes = scan_directory(
            input_path,
            config=config,
            observer=LoggingScanObserver(logger, logging.INFO),
        )
    except ContextScanError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except KeyboardInterrupt:
        print("Scan interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Scan failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(tree_to_dicts(nodes), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(input_path, nodes)

    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(input_path: str, nodes: List[FileNode]) -> None:
    """Print the annotated tree followed by aggregate statistics."""
    print(input_path)
    for line in render_tree(nodes):
        print(line)

    print()
    print(f"Source files: {count_source_files(nodes)}")
    print(f"Total tokens: {total_token_count(nodes):,}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
