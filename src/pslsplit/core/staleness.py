"""Time-based staleness flag for compiled suffix lists."""
from dataclasses import dataclass, field
from datetime import datetime, timezone, timedelta
from typing import Callable, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StalenessTracker:
    """Remembers when the ruleset was last compiled and when that goes stale.

    Without an expire duration the ruleset never goes stale.
    """
    expire: Optional[timedelta] = None
    last_build: Optional[datetime] = None
    clock: Callable[[], datetime] = field(default=utcnow, repr=False, compare=False)

    def mark_built(self) -> None:
        """Record a successful compile."""
        self.last_build = self.clock()

    def is_expired(self) -> bool:
        """True when more than `expire` has elapsed since the last build."""
        if self.expire is None or self.last_build is None:
            return False
        return self.clock() - self.last_build > self.expire

    def copy(self) -> "StalenessTracker":
        return StalenessTracker(expire=self.expire, last_build=self.last_build, clock=self.clock)
