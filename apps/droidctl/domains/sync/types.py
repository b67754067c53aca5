from dataclasses import dataclass
from typing import Any, Dict

SUCCESS = "success"
TIMEOUT = "timeout"
EXHAUSTED = "exhausted"


@dataclass
class SyncTiming:
    poll_interval_ms: int = 500
    settle_interval_ms: int = 500
    stable_samples: int = 2
    scroll_duration_ms: int = 300

    @classmethod
    def from_settings(cls, settings) -> "SyncTiming":
        return cls(
            poll_interval_ms=settings.poll_interval_ms,
            settle_interval_ms=settings.settle_interval_ms,
            stable_samples=settings.stable_samples,
            scroll_duration_ms=settings.scroll_duration_ms,
        )


@dataclass
class SyncResult:
    status: str
    elapsed_ms: int
    ticks: int
    message: str
    scrolls: int = 0

    @property
    def success(self) -> bool:
        return self.status == SUCCESS

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "success": self.success,
            "elapsed_ms": self.elapsed_ms,
            "ticks": self.ticks,
            "scrolls": self.scrolls,
            "message": self.message,
        }
