"""Data models for the Notion merkle file fetcher."""

import json
from dataclasses import dataclass, field
from pathlib import Path


class NotionSyncError(Exception):
    """Base error for a failed fetch run."""


class MappingError(NotionSyncError):
    """The mapping file is missing or malformed."""


class RowError(NotionSyncError):
    """A Notion row does not have the expected shape or content."""


class NotionAPIError(NotionSyncError):
    """A Notion API call failed or returned an undecodable body."""


class DownloadError(NotionSyncError):
    """A merkle file could not be downloaded."""


class OutputDirError(NotionSyncError):
    """The cycle output directory cannot be used."""


def cycle_label(cycle: int) -> str:
    """Return the label Notion row titles carry, e.g. "Cycle 20"."""
    return f"Cycle {cycle}"


def cycle_dir_name(cycle: int) -> str:
    return f"cycle-{cycle}"


def _string_table(raw: dict, key: str, path: Path) -> dict[str, str]:
    table = raw.get(key)
    if not isinstance(table, dict):
        raise MappingError(f"mapping {path}: {key!r} must be an object")
    for name, value in table.items():
        if not isinstance(value, str):
            raise MappingError(f"mapping {path}: {key}[{name!r}] must be a string")
    return dict(table)


@dataclass(frozen=True)
class Mapping:
    """Display name lookups for chains and reward types."""

    chains: dict[str, str] = field(default_factory=dict)  # chain name -> chain id
    types: dict[str, str] = field(default_factory=dict)  # type name -> reward type code

    @classmethod
    def load(cls, path: Path) -> "Mapping":
        """Read a mapping JSON file of the form {"chains": {...}, "types": {...}}."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as e:
            raise MappingError(f"read mapping: {e}") from e
        except ValueError as e:
            raise MappingError(f"parse mapping json: {e}") from e

        if not isinstance(raw, dict):
            raise MappingError(f"mapping {path}: expected a JSON object")
        return cls(
            chains=_string_table(raw, "chains", path),
            types=_string_table(raw, "types", path),
        )


@dataclass(frozen=True)
class PropertyNames:
    """Names of the Notion database properties the fetcher reads."""

    title: str
    status: str
    chain: str
    type: str
    file: str


@dataclass(frozen=True)
class DownloadItem:
    """A validated Notion row, ready for download."""

    chain_id: str
    reward_type: str
    page_id: str  # Notion page the file is attached to
    source_url: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.chain_id, self.reward_type)

    def output_name(self, cycle: int) -> str:
        """File name in the cycle directory, e.g. "1_ELASTIC_20.json"."""
        return f"{self.chain_id}_{self.reward_type}_{cycle}.json"
