from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from src.reader import Failure, ParseOutcome, Success

KB = 1024
MB = KB * 1024
GB = MB * 1024


@dataclass
class RunStats:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    elapsed: float = 0.0

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Sequence[ParseOutcome],
        bytes_written: int = 0,
        elapsed: float = 0.0,
    ) -> "RunStats":
        stats = cls(total=len(outcomes), bytes_written=bytes_written, elapsed=elapsed)
        for outcome in outcomes:
            if isinstance(outcome, Success):
                stats.succeeded += 1
                stats.bytes_read += outcome.byte_size
            elif isinstance(outcome, Failure):
                stats.failed += 1
        return stats

    @property
    def success_rate(self) -> Optional[float]:
        """Percentage of files that parsed, or ``None`` for an empty run."""
        if self.total == 0:
            return None
        return self.succeeded / self.total * 100.0

    def success_rate_text(self) -> str:
        rate = self.success_rate
        return "n/a" if rate is None else f"{rate:.1f}%"


def format_bytes(size: int) -> str:
    if size >= GB:
        return f"{size / GB:.2f} GB"
    if size >= MB:
        return f"{size / MB:.2f} MB"
    if size >= KB:
        return f"{size / KB:.2f} KB"
    return f"{size} B"


def format_duration(seconds: float) -> str:
    total_ms = int(round(seconds * 1000))
    secs, millis = divmod(total_ms, 1000)
    if secs >= 3600:
        hours, rest = divmod(secs, 3600)
        return f"{hours}h {rest // 60}m"
    if secs >= 60:
        minutes, rest = divmod(secs, 60)
        return f"{minutes}m {rest}s"
    if secs > 0:
        return f"{secs}.{millis:03d}s"
    return f"{millis}ms"


__all__ = ["RunStats", "format_bytes", "format_duration"]
