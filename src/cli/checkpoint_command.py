"""Checkpoint command wiring for Tend CLI."""

from __future__ import annotations

import argparse
from typing import Any

from ingest.sync_sdk import TendClient


def add_checkpoint_command(subparsers: Any) -> None:
    """Register checkpoint subcommand."""
    parser = subparsers.add_parser("checkpoint", help="Inspect or reset the batch checkpoint")
    parser.add_argument(
        "action",
        choices=("show", "reset"),
        help="Print the stored sequence or delete it",
    )


def run_checkpoint_command(client: TendClient, args: argparse.Namespace) -> int:
    """Show or reset the stored checkpoint."""
    if args.action == "reset":
        client.reset_checkpoint()
        print("checkpoint=0")
        return 0
    print(f"checkpoint={client.read_checkpoint()}")
    return 0
