"""
Notion merkle file fetcher.
Finds a cycle's finished rows in a Notion database and downloads the
attached merkle files into a cycle-N directory.
"""

from .models import (
    DownloadError,
    DownloadItem,
    Mapping,
    MappingError,
    NotionAPIError,
    NotionSyncError,
    OutputDirError,
    PropertyNames,
    RowError,
)
from .notion_client import NotionClient
from .rows import build_query, collect_items, parse_row
from .downloader import MerkleDownloader, check_target_dir
from .main import main

__all__ = [
    'DownloadError',
    'DownloadItem',
    'Mapping',
    'MappingError',
    'NotionAPIError',
    'NotionSyncError',
    'OutputDirError',
    'PropertyNames',
    'RowError',
    'NotionClient',
    'build_query',
    'collect_items',
    'parse_row',
    'MerkleDownloader',
    'check_target_dir',
    'main',
]
