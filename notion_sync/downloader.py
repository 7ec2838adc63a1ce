"""Merkle file download into a cycle directory."""

from pathlib import Path

from .models import DownloadError, DownloadItem, OutputDirError
from .notion_client import NotionClient


def check_target_dir(target_dir: Path, allow_existing: bool) -> None:
    """Refuse to reuse a non-empty cycle directory unless allowed."""
    if target_dir.exists() and not target_dir.is_dir():
        raise OutputDirError(f"target {target_dir} exists and is not a directory")
    if target_dir.is_dir() and any(target_dir.iterdir()) and not allow_existing:
        raise OutputDirError(
            f"target folder {target_dir} already exists and is not empty (use --allow-existing)"
        )


class MerkleDownloader:
    """Downloads validated rows to {chain}_{TYPE}_{cycle}.json files."""

    def __init__(self, client: NotionClient, target_dir: Path, cycle: int):
        self.client = client
        self.target_dir = target_dir
        self.cycle = cycle
        self.downloaded = 0

    def download_all(self, items: list[DownloadItem]) -> list[Path]:
        """Download every item, stopping at the first failure."""
        self.target_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for item in items:
            out_path = self.target_dir / item.output_name(self.cycle)
            try:
                size = self.client.download(item.source_url, out_path)
            except DownloadError as e:
                raise DownloadError(f"download {out_path.name}: {e}") from e
            print(f"  {out_path.name}: {size} bytes")
            self.downloaded += 1
            paths.append(out_path)
        return paths

    def summary(self) -> str:
        return f"Downloaded {self.downloaded} files into {self.target_dir}"
