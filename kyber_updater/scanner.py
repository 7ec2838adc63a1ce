"""Discovery of chain / reward type pairs in a cycle directory."""

import re
from pathlib import Path

from .config import MERKLE_FILE_PATTERN, MIN_CYCLE
from .models import CyclePair, CycleScan, UpdaterError

MERKLE_FILE_RE = re.compile(MERKLE_FILE_PATTERN)


def parse_merkle_filename(name: str) -> tuple[str, str, int] | None:
    """Split a merkle file name into (chain id, REWARD TYPE, cycle).

    Returns None for names that are not merkle files.
    """
    match = MERKLE_FILE_RE.match(name)
    if not match:
        return None
    return match.group(1), match.group(2).upper(), int(match.group(3))


def scan_cycle_dir(cycle_dir: Path) -> CycleScan:
    """Collect the pairs in a cycle directory; all files must share one cycle."""
    try:
        entries = sorted(cycle_dir.iterdir())
    except OSError as e:
        raise UpdaterError(f"read cycle dir: {e}") from e

    cycle: int | None = None
    pairs: set[CyclePair] = set()
    for entry in entries:
        if not entry.is_file():
            continue
        parsed = parse_merkle_filename(entry.name)
        if parsed is None:
            continue
        chain_id, reward_type, file_cycle = parsed
        if cycle is None:
            cycle = file_cycle
        elif cycle != file_cycle:
            raise UpdaterError(f"multiple cycle numbers found in {cycle_dir}")
        pairs.add(CyclePair(chain_id, reward_type))

    if cycle is None or not pairs:
        raise UpdaterError(f"no matching merkle files found in {cycle_dir}")
    if cycle < MIN_CYCLE:
        raise UpdaterError(f"cycle too small: {cycle}")
    return CycleScan(cycle=cycle, pairs=pairs)
