"""Literal URL substitution in a values file.

The file is treated as plain text: any exact occurrence of a merkle URL is
rewritten, wherever it appears.
"""

from pathlib import Path
from typing import Iterable

from .config import URL_TEMPLATE
from .models import CyclePair, CycleScan, RewriteResult


def merkle_url(prefix: str, pair: CyclePair, cycle: int) -> str:
    if prefix.endswith("/"):
        prefix = prefix[:-1]
    return URL_TEMPLATE.format(
        prefix=prefix,
        cycle=cycle,
        chain_id=pair.chain_id,
        reward_type=pair.reward_type,
    )


def rewrite_urls(text: str, pairs: Iterable[CyclePair], cycle: int, prefix: str) -> RewriteResult:
    """Shift cycle N-1 URLs to N and cycle N-2 URLs to N-1."""
    replacements = 0
    for pair in sorted(pairs):
        new_url = merkle_url(prefix, pair, cycle)
        prev_url = merkle_url(prefix, pair, cycle - 1)
        old_url = merkle_url(prefix, pair, cycle - 2)

        # previous -> new first, so old -> previous is not shifted twice
        count = text.count(prev_url)
        if count:
            text = text.replace(prev_url, new_url)
            replacements += count
        count = text.count(old_url)
        if count:
            text = text.replace(old_url, prev_url)
            replacements += count
    return RewriteResult(text=text, replacements=replacements)


def update_values_file(values_path: Path, scan: CycleScan, prefix: str) -> RewriteResult:
    """Rewrite the values file in place if any URL matched."""
    # newline="" and surrogateescape keep every byte outside the URLs as-is
    with open(values_path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        original = f.read()
    result = rewrite_urls(original, scan.pairs, scan.cycle, prefix)
    if result.changed:
        with open(values_path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(result.text)
    return result
