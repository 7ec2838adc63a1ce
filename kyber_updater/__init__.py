"""Rewrites merkle file URLs in a values file to a newly fetched cycle."""

from .models import CyclePair, CycleScan, RewriteResult, UpdaterError
from .scanner import parse_merkle_filename, scan_cycle_dir
from .rewriter import merkle_url, rewrite_urls, update_values_file
from .main import main

__all__ = [
    'CyclePair',
    'CycleScan',
    'RewriteResult',
    'UpdaterError',
    'parse_merkle_filename',
    'scan_cycle_dir',
    'merkle_url',
    'rewrite_urls',
    'update_values_file',
    'main',
]
