#!/usr/bin/env python3
"""Main entry point for the Notion merkle file fetcher."""

import argparse
import os
import sys
from pathlib import Path

from .config import (
    DEFAULT_MAPPING_PATH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROPERTIES,
    DEFAULT_STATUS_DONE,
    DEFAULT_STATUS_TYPE,
    MAX_PAGE_SIZE,
    NOTION_API_VERSION,
    STATUS_TYPES,
    TOKEN_ENV_VAR,
)
from .downloader import MerkleDownloader, check_target_dir
from .models import Mapping, NotionSyncError, PropertyNames, cycle_dir_name, cycle_label
from .notion_client import NotionClient
from .rows import build_query, collect_items


class ArgumentParser(argparse.ArgumentParser):
    """Reports bad flags as NotionSyncError instead of exiting with code 2."""

    def error(self, message):
        raise NotionSyncError(message)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = ArgumentParser(
        description="Download a cycle's merkle files referenced from a Notion database"
    )
    parser.add_argument("--database-id", default="", help="Notion database ID")
    parser.add_argument("--cycle", type=int, default=0, help="Cycle number to fetch (e.g. 20)")
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Repo root output directory")
    parser.add_argument(
        "--mapping",
        type=Path,
        default=Path(DEFAULT_MAPPING_PATH),
        help=f"JSON mapping file (default: {DEFAULT_MAPPING_PATH})",
    )
    parser.add_argument(
        "--notion-token",
        default=os.environ.get(TOKEN_ENV_VAR, ""),
        help=f"Notion token (or env {TOKEN_ENV_VAR})",
    )
    parser.add_argument(
        "--notion-version",
        default=NOTION_API_VERSION,
        help="Notion API version for the Notion-Version header",
    )
    parser.add_argument(
        "--allow-existing",
        action="store_true",
        help="Allow an existing cycle directory (re-download and overwrite files)",
    )
    parser.add_argument("--prop-title", default=DEFAULT_PROPERTIES["title"], help="Title property name")
    parser.add_argument("--prop-status", default=DEFAULT_PROPERTIES["status"], help="Status property name")
    parser.add_argument("--prop-chain", default=DEFAULT_PROPERTIES["chain"], help="Select property name")
    parser.add_argument("--prop-type", default=DEFAULT_PROPERTIES["type"], help="Multi-select property name")
    parser.add_argument("--prop-file", default=DEFAULT_PROPERTIES["file"], help="Files property name")
    parser.add_argument("--status-done", default=DEFAULT_STATUS_DONE, help="Status value to match")
    parser.add_argument(
        "--status-type",
        default=DEFAULT_STATUS_TYPE,
        help=f"Status property type ({' or '.join(STATUS_TYPES)})",
    )
    parser.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE, help="Notion query page_size")
    return parser.parse_args(argv)


def validate_args(args) -> None:
    if not args.database_id or args.cycle == 0:
        raise NotionSyncError("missing --database-id or --cycle")
    if not args.notion_token:
        raise NotionSyncError(f"missing Notion token (set {TOKEN_ENV_VAR} or --notion-token)")
    if args.status_type not in STATUS_TYPES:
        raise NotionSyncError(
            f"invalid --status-type {args.status_type!r} (must be {' or '.join(STATUS_TYPES)})"
        )
    if not 1 <= args.page_size <= MAX_PAGE_SIZE:
        raise NotionSyncError(f"invalid --page-size {args.page_size} (must be 1..{MAX_PAGE_SIZE})")


def run(args, client: NotionClient | None = None) -> list[Path]:
    """Fetch one cycle's merkle files. Returns the written paths."""
    validate_args(args)
    mapping = Mapping.load(args.mapping)
    props = PropertyNames(
        title=args.prop_title,
        status=args.prop_status,
        chain=args.prop_chain,
        type=args.prop_type,
        file=args.prop_file,
    )
    target_dir = args.out_dir / cycle_dir_name(args.cycle)
    check_target_dir(target_dir, args.allow_existing)

    print("=" * 60)
    print("Notion merkle file sync")
    print("=" * 60)
    print(f"Database: {args.database_id}")
    print(f"Cycle: {args.cycle}")
    print(f"Output: {target_dir}")
    print("=" * 60)

    client = client or NotionClient(args.notion_token, args.notion_version)
    with client:
        data_source_id = client.first_data_source_id(args.database_id)
        print(f"Data source: {data_source_id}")

        body = build_query(args.cycle, props, args.status_done, args.status_type, args.page_size)
        items = collect_items(client.iter_pages(data_source_id, body), props, mapping, args.cycle)
        print(f"Found {len(items)} merkle files for {cycle_label(args.cycle)}")

        downloader = MerkleDownloader(client, target_dir, args.cycle)
        paths = downloader.download_all(items)

    print(downloader.summary())
    return paths


def main(argv=None):
    """Main entry point."""
    try:
        run(parse_args(argv))
    except (NotionSyncError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
