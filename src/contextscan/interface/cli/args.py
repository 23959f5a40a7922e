from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides for the validator.
"""

import argparse
from typing import Any, Dict, Optional

from contextscan.infra.fs import get_default_log_path

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the contextscan CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="contextscan",
        description=(
            "Scan a folder into a tree annotated with per-file token counts, "
            "to estimate how much of an LLM context window a codebase uses."
        ),
    )

    # --- Path Management ---
    p.add_argument(
        "input_path",
        nargs="?",
        default=None,
        help="Folder to scan (defaults to the current directory).",
    )
    p.add_argument(
        "-i", "--input",
        dest="input_option",
        default=None,
        help="Folder to scan (alternative to the positional argument).",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON file with scan configuration keys.",
    )

    # --- Scan Limits ---
    p.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Traversal depth limit (default: 10).",
    )
    p.add_argument(
        "--max-file-size",
        dest="max_file_size",
        type=int,
        default=None,
        help="Files larger than this many bytes are not counted (default: 10 MiB).",
    )
    p.add_argument(
        "--small-file-threshold",
        dest="small_file_threshold",
        type=int,
        default=None,
        help="Files above this many bytes are memory-mapped (default: 8 KiB).",
    )
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Counting worker pool size (default: CPU count).",
    )

    # --- Counting Behaviour ---
    p.add_argument(
        "--no-parallel",
        action="store_true",
        help="Count files sequentially.",
    )
    p.add_argument(
        "--no-tokens",
        action="store_true",
        help="Skip token counting entirely.",
    )
    p.add_argument(
        "--encoding",
        default=None,
        help="Tokenizer encoding: o200k_base, cl100k_base or hf:<repo-id>.",
    )
    p.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Descend into symlinked directories.",
    )
    p.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not prune entries listed in .gitignore or .ignore files.",
    )

    # --- Modes and Output ---
    p.add_argument(
        "--prompt",
        default=None,
        help="Count the tokens of this text and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the scan result as JSON.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--save-log",
        action="store_true",
        help="Also write diagnostics to the default log file in the user data folder.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report scan phase timings.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into ScanConfig overrides.

    Only explicitly provided options appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("max_depth", "max_file_size", "small_file_threshold", "max_workers", "encoding"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    if args.no_parallel:
        overrides["enable_parallel_counting"] = False
    if args.no_tokens:
        overrides["enable_token_counting"] = False
    if args.follow_symlinks:
        overrides["follow_symlinks"] = True
    if args.no_gitignore:
        overrides["respect_gitignore"] = False

    return overrides


def resolve_input_path(args: argparse.Namespace) -> str:
    """Pick the scan root from the positional argument or -i, defaulting to '.'."""
    return args.input_path or args.input_option or "."


def resolve_log_file(args: argparse.Namespace) -> Optional[str]:
    """Explicit --log-file wins; --save-log selects the default location."""
    if args.log_file:
        return args.log_file
    if args.save_log:
        return get_default_log_path()
    return None
