"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m arbor_cli root <leaves> [--format lines|json|hex] [--hash ALG] [--json]
    python -m arbor_cli prove <leaves> --index N [--out PATH] [--format ...] [--hash ALG]
    python -m arbor_cli verify <proof> (--leaf TEXT | --leaf-hex 0x..) [--root 0x..] [--json]
    python -m arbor_cli config --init | --show

Environment Variables:
    ARBOR_HASH_ALGORITHM     Hash algorithm (default: keccak256)
    ARBOR_LEAF_ENCODING      Text encoding for string leaves (default: utf-8)
    ARBOR_LOG_LEVEL          Log level (default: INFO)
    ARBOR_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from arbor.crypto.hashing import HASH_FUNCTIONS
from arbor_cli import __version__
from arbor_cli.commands import prove, root, verify
from arbor_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from arbor_cli.config import get_default_config_template, load_config
from arbor_cli.leaves import LEAF_FORMATS


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

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


def _add_leaf_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        type=str,
        help="Path to the leaves file, or '-' to read stdin",
    )
    parser.add_argument(
        "--format", "-f",
        type=str,
        choices=LEAF_FORMATS,
        default="lines",
        help="Leaf file format (default: lines)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        choices=sorted(HASH_FUNCTIONS),
        default=None,
        help="Hash algorithm (default: from config, keccak256)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="arbor",
        description="Arbor CLI - Compute Merkle roots, build and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./arbor.yaml, ./arbor.json or ~/.config/arbor/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a leaf file",
        description="Hash every leaf and reduce pairwise to the Merkle root.",
    )
    _add_leaf_source_args(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Build an inclusion proof for one leaf",
        description="Write an InclusionProof JSON document for the leaf at --index.",
    )
    _add_leaf_source_args(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the leaf to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for the proof document (default: stdout)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a leaf against a proof document",
        description="Fold the leaf with the proof and compare against the root.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to an InclusionProof JSON document",
    )
    leaf_group = verify_parser.add_mutually_exclusive_group(required=True)
    leaf_group.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Leaf value as text (encoded with the configured leaf encoding)",
    )
    leaf_group.add_argument(
        "--leaf-hex",
        type=str,
        default=None,
        help="Leaf value as 0x-prefixed hex bytes",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted 0x-prefixed root (default: the document's root)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
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
        default="arbor.yaml",
        help="Path for config file (default: arbor.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ARBOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: arbor config [--init|--show]")
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
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
