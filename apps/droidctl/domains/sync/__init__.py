from .service import SCROLL_DIRECTIONS, Synchronizer, scroll_gesture
from .types import EXHAUSTED, SUCCESS, TIMEOUT, SyncResult, SyncTiming

__all__ = [
    "SCROLL_DIRECTIONS",
    "Synchronizer",
    "scroll_gesture",
    "EXHAUSTED",
    "SUCCESS",
    "TIMEOUT",
    "SyncResult",
    "SyncTiming",
]
