"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli                       (interactive console)
    python -m hashtree_cli console [--json]
    python -m hashtree_cli build [--raw] [--print] [--json] VALUES...
    python -m hashtree_cli proof [--raw] --index N [--json] VALUES...
    python -m hashtree_cli verify [--raw] [--raw-leaf] --index N --leaf L --proof P ... VALUES...
    python -m hashtree_cli config --init|--show

Environment Variables:
    HASHTREE_LOG_LEVEL          Log level (default: WARNING)
    HASHTREE_LOG_FILE           Also write logs to this file
    HASHTREE_PROMPT             Console prompt (default: "> ")
    HASHTREE_OUTPUT_FORMAT      Console output: human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree.schemas.errors import HashTreeException
from hashtree_cli import __version__
from hashtree_cli.commands import build, proof, verify
from hashtree_cli.config import load_config, get_default_config_template
from hashtree_cli.console import run_console


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "values",
        nargs="+",
        help="Leaf values in insertion order (digests, or raw text with --raw)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Hash each value before inserting it",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Merkle tree simulator - build trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./hashtree.json or ~/.config/hashtree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- console command ---
    console_parser = subparsers.add_parser(
        "console",
        help="Start the interactive console (default)",
        description="Read commands line by line and apply them to an in-memory tree.",
    )
    console_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Emit proofs, results and errors as JSON",
    )
    console_parser.set_defaults(func=console_cmd)

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its root",
    )
    _add_tree_arguments(build_parser)
    build_parser.add_argument(
        "--print",
        action="store_true",
        default=False,
        help="Also print every level of the tree",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof for a leaf",
    )
    _add_tree_arguments(proof_parser)
    proof_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Zero-based leaf index",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a tree",
        description="Exit code 0 when the proof verifies, 2 when it does not.",
    )
    _add_tree_arguments(verify_parser)
    verify_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Zero-based leaf index being claimed",
    )
    verify_parser.add_argument(
        "--leaf", "-l",
        type=str,
        required=True,
        help="Leaf digest being claimed",
    )
    verify_parser.add_argument(
        "--raw-leaf",
        action="store_true",
        default=False,
        help="Hash --leaf before verifying",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        action="append",
        default=None,
        help="Sibling digest, bottom-up (repeat for each level)",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="hashtree.json",
        help="Path for config file (default: hashtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def console_cmd(args: argparse.Namespace) -> int:
    """Handle console command."""
    config = args.cli_config
    if getattr(args, "json", None):
        config.output_format = "json"
    run_console(config)
    return EXIT_SUCCESS


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        args.func = console_cmd

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except HashTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
