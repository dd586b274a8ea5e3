"""Tend CLI entry points.
This module exposes commands for batch and single-contact syncs.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.checkpoint_command import add_checkpoint_command, run_checkpoint_command
from core.config import TendConfig
from core.errors import TendError
from core.types import BatchSyncOptions, UpsertResult
from ingest.sync_sdk import TendClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tend", description="Sync Clay contacts into a vault")
    parser.add_argument("--vault", help="Override TEND_VAULT_PATH for this command")
    parser.add_argument("--data-root", help="Override TEND_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sync_command(subparsers)
    _add_search_sync_command(subparsers)
    _add_sync_fixture_command(subparsers)
    add_checkpoint_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tend CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.vault, args.data_root)
        if args.command == "sync":
            return _run_sync_command(client, args)
        if args.command == "search-sync":
            return _run_search_sync_command(client, args)
        if args.command == "sync-fixture":
            return _run_sync_fixture_command(client, args)
        if args.command == "checkpoint":
            return run_checkpoint_command(client, args)
    except TendError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(vault: str | None, data_root: str | None) -> TendClient:
    """Build SDK client with optional path overrides.

    Args:
        vault: Optional vault path override.
        data_root: Optional data-root override.

    Returns:
        Configured SDK client.
    """
    config = TendConfig.from_env()
    if vault:
        config = replace(config, vault_path=Path(vault).expanduser().resolve())
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return TendClient(config)


def _run_sync_command(client: TendClient, args: argparse.Namespace) -> int:
    """Handle sync command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when any row failed.
    """
    options = BatchSyncOptions(
        source_uri=args.source,
        batch_size=args.batch_size,
        start_sequence=args.start_from,
        reset_checkpoint=args.reset_checkpoint,
        dry_run=args.dry_run,
    )
    result = client.sync_batch(options)
    for outcome in result.outcomes:
        print(f"{outcome.sequence}\t{outcome.external_id}\t{outcome.status}\t{outcome.message}")
    print(f"succeeded={result.succeeded}")
    print(f"failed={result.failed}")
    print(f"skipped={result.skipped_checkpointed}")
    print(f"checkpoint={result.checkpoint}")
    print(f"dry_run={str(result.dry_run).lower()}")
    return 0 if result.failed == 0 else 1


def _run_search_sync_command(client: TendClient, args: argparse.Namespace) -> int:
    """Handle search-sync command."""
    _print_upsert(client.sync_contact_by_name(args.name))
    return 0


def _run_sync_fixture_command(client: TendClient, args: argparse.Namespace) -> int:
    """Handle sync-fixture command."""
    _print_upsert(client.sync_fixture(Path(args.fixture).expanduser().resolve()))
    return 0


def _print_upsert(result: UpsertResult) -> None:
    print(f"path={result.path}")
    print(f"folder={result.folder}")
    print(f"created={str(result.was_created).lower()}")


def _add_sync_command(subparsers: Any) -> None:
    """Register sync subcommand."""
    parser = subparsers.add_parser("sync", help="Sync a CSV contact list into the vault")
    parser.add_argument("source", help="CSV file path or s3://bucket/key")
    parser.add_argument("--batch-size", type=int, help="Maximum rows to process this run")
    parser.add_argument(
        "--start-from",
        type=int,
        help="First sequence to process, ignoring the stored checkpoint",
    )
    parser.add_argument(
        "--reset-checkpoint",
        action="store_true",
        help="Delete the stored checkpoint before running",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report planned writes without touching the vault or checkpoint",
    )


def _add_search_sync_command(subparsers: Any) -> None:
    """Register search-sync subcommand."""
    parser = subparsers.add_parser("search-sync", help="Search Clay by name and sync one contact")
    parser.add_argument("name", help="Contact name to search for")


def _add_sync_fixture_command(subparsers: Any) -> None:
    """Register sync-fixture subcommand."""
    parser = subparsers.add_parser("sync-fixture", help="Sync one contact from a JSON file")
    parser.add_argument("fixture", help="Path to a Clay contact JSON payload")
