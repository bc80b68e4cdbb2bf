"""Ruleset sources and suffix list configuration."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Set, Union

from pslsplit.core.staleness import StalenessTracker


@dataclass(frozen=True)
class TextSource:
    """Ruleset text supplied inline."""
    text: str


@dataclass(frozen=True)
class SnapshotSource:
    """The PSL snapshot bundled with the package."""


@dataclass(frozen=True)
class LocalSource:
    """A PSL file on the local filesystem."""
    path: Path


@dataclass(frozen=True)
class RemoteSource:
    """A PSL fetched over HTTP. No url means the built-in fallback list."""
    url: Optional[str] = None


RulesetSource = Union[TextSource, SnapshotSource, LocalSource, RemoteSource]


@dataclass
class SuffixListConfig:
    """Where the ruleset comes from and how it is compiled.

    The suffix sets are filled by the compiler and reset on every compile.
    """
    primary: RulesetSource = field(default_factory=SnapshotSource)
    extra: Optional[RulesetSource] = None
    disable_private_domains: bool = False
    tracker: StalenessTracker = field(default_factory=StalenessTracker)
    public_suffixes: Set[str] = field(default_factory=set)
    private_suffixes: Set[str] = field(default_factory=set)

    @property
    def expire(self) -> Optional[timedelta]:
        return self.tracker.expire

    @property
    def last_build(self) -> Optional[datetime]:
        return self.tracker.last_build

    def is_expired(self) -> bool:
        return self.tracker.is_expired()

    def reset(self) -> None:
        """Drop the suffix sets left by a previous compile."""
        self.public_suffixes = set()
        self.private_suffixes = set()

    def copy(self) -> "SuffixListConfig":
        """Independent config with the same sources and switches."""
        return SuffixListConfig(
            primary=self.primary,
            extra=self.extra,
            disable_private_domains=self.disable_private_domains,
            tracker=self.tracker.copy(),
            public_suffixes=set(self.public_suffixes),
            private_suffixes=set(self.private_suffixes),
        )
