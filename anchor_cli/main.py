"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    merkle-anchor hash FILE | --text TEXT
    merkle-anchor root LEAF... [--from-file PATH]
    merkle-anchor prove INDEX LEAF... [--from-file PATH]
    merkle-anchor verify LEAF --proof PATH [--root HEX]
    merkle-anchor anchor LEAF... [--from-file PATH] [--out PATH]
    merkle-anchor check LEAF [--proof PATH]
    merkle-anchor config --init

Environment Variables:
    ANCHOR_HASH_ALGORITHM       blake2s (default) or sha256
    ANCHOR_LEDGER_BACKEND       memory, file or http
    ANCHOR_LEDGER_ENDPOINT      Anchor service URL (http backend)
    ANCHOR_LEDGER_PATH          Ledger file (file backend)
    ANCHOR_LOG_LEVEL            Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from anchor_cli.commands import ledger, merkle
from anchor_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI. Logs go to stderr so stdout stays parseable."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_leaf_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        nargs="*",
        help="Leaf hashes as hex, in batch order",
    )
    parser.add_argument(
        "--from-file",
        type=str,
        default=None,
        help="Read additional leaf hashes from a file, one hex value per line",
    )


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-anchor",
        description="Anchor batches of content hashes as Merkle roots and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./anchor.yaml or ./anchor.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Hash a file, a string or stdin into a 32-byte leaf",
    )
    hash_parser.add_argument("file", nargs="?", default=None, help="File to hash")
    hash_parser.add_argument("--text", type=str, default=None, help="Hash this UTF-8 text instead")
    _add_output_args(hash_parser)
    hash_parser.set_defaults(func=merkle.hash_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a batch",
    )
    _add_leaf_args(root_parser)
    _add_output_args(root_parser)
    root_parser.set_defaults(func=merkle.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print the inclusion proof of one leaf",
    )
    prove_parser.add_argument("index", type=int, help="0-based index of the leaf")
    _add_leaf_args(prove_parser)
    _add_output_args(prove_parser)
    prove_parser.set_defaults(func=merkle.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Recompute a root from a leaf and proof",
        description="Recompute the Merkle root from a leaf and its proof; compare with --root if given.",
    )
    verify_parser.add_argument("leaf", type=str, help="Leaf hash as hex")
    verify_parser.add_argument("--proof", type=str, required=True, help="Proof JSON file")
    verify_parser.add_argument("--root", type=str, default=None, help="Expected root as hex")
    _add_output_args(verify_parser)
    verify_parser.set_defaults(func=merkle.verify_cmd)

    # --- anchor command ---
    anchor_parser = subparsers.add_parser(
        "anchor",
        help="Anchor a batch of leaves on the configured ledger",
    )
    _add_leaf_args(anchor_parser)
    anchor_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write root, block and per-leaf proofs to this JSON file",
    )
    _add_output_args(anchor_parser)
    anchor_parser.set_defaults(func=ledger.anchor_cmd)

    # --- check command ---
    check_parser = subparsers.add_parser(
        "check",
        help="Look up when a leaf was anchored",
    )
    check_parser.add_argument("leaf", type=str, help="Leaf hash as hex")
    check_parser.add_argument(
        "--proof",
        type=str,
        default=None,
        help="Proof JSON file (omit for direct anchors and single-leaf batches)",
    )
    _add_output_args(check_parser)
    check_parser.set_defaults(func=ledger.check_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show or create configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Print a configuration template",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Print the config template, or the effective configuration."""
    if args.init:
        print(get_default_config_template())
        return EXIT_SUCCESS

    print(json.dumps(args.cli_config.to_dict(), indent=2))
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not anchored)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
