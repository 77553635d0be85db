"""CLI subcommands."""

from anchor_cli.commands import ledger, merkle

__all__ = ["ledger", "merkle"]
