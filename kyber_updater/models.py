"""Data models for the merkle URL updater."""

from dataclasses import dataclass, field


class UpdaterError(Exception):
    """Raised when the cycle directory or values file cannot be processed."""


@dataclass(frozen=True, order=True)
class CyclePair:
    """A chain / reward type combination present in a cycle."""

    chain_id: str
    reward_type: str  # upper-cased


@dataclass
class CycleScan:
    """Merkle files discovered in one cycle directory."""

    cycle: int
    pairs: set[CyclePair] = field(default_factory=set)


@dataclass
class RewriteResult:
    text: str
    replacements: int = 0

    @property
    def changed(self) -> bool:
        return self.replacements > 0
