import logging
import time
from typing import Callable, Dict, Optional, Tuple

from infra.uiautomator import Snapshot, fingerprint
from shared.utils.geometry import round_half_up

from ..observe import DEFAULT_DUMP_PATH, acquire_snapshot, screen_size
from ..ports import DeviceClient
from .types import EXHAUSTED, SUCCESS, TIMEOUT, SyncResult, SyncTiming

SCROLL_DIRECTIONS = ("down", "up")

Predicate = Callable[[Snapshot], bool]


def scroll_gesture(
    size: Tuple[int, int], direction: str, duration_ms: int = 300
) -> Dict[str, int]:
    if direction not in SCROLL_DIRECTIONS:
        raise ValueError("unsupported scroll direction: {}".format(direction))
    width, height = size
    center_x = round_half_up(width / 2)
    low = round_half_up(height * 0.7)
    high = round_half_up(height * 0.3)
    start_y, end_y = (low, high) if direction == "down" else (high, low)
    return {
        "x1": center_x,
        "y1": start_y,
        "x2": center_x,
        "y2": end_y,
        "duration_ms": duration_ms,
    }


class Synchronizer:
    """Polling loops over fresh UI snapshots.

    Each tick refreshes the on-device dump, reads it back, parses it and
    evaluates a predicate. Ticks run strictly one after another; the only
    way out besides success is the deadline (or the scroll budget).
    Collaborator failures are not caught here and end the whole call.
    """

    def __init__(
        self,
        device: DeviceClient,
        timing: Optional[SyncTiming] = None,
        dump_path: str = DEFAULT_DUMP_PATH,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.device = device
        self.timing = timing or SyncTiming()
        self.dump_path = dump_path
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger("droidctl.sync")

    def snapshot(self) -> Snapshot:
        return acquire_snapshot(self.device, self.dump_path)

    def _elapsed_ms(self, start: float) -> int:
        return int(round((self._clock() - start) * 1000))

    def _poll(
        self, predicate: Predicate, timeout_s: float, interval_s: float
    ) -> Tuple[bool, int, int]:
        start = self._clock()
        ticks = 0
        while self._clock() - start < timeout_s:
            snapshot = self.snapshot()
            ticks += 1
            if predicate(snapshot):
                return True, self._elapsed_ms(start), ticks
            self._logger.debug("tick %d: condition not met", ticks)
            self._sleep(interval_s)
        return False, self._elapsed_ms(start), ticks

    def wait_for_appear(self, text: str, timeout_seconds: float = 10) -> SyncResult:
        matched, elapsed_ms, ticks = self._poll(
            lambda snapshot: snapshot.contains_text(text),
            timeout_s=timeout_seconds,
            interval_s=self.timing.poll_interval_ms / 1000.0,
        )
        if matched:
            message = 'Element "{}" found after {}s'.format(
                text, round(elapsed_ms / 1000)
            )
            result = SyncResult(SUCCESS, elapsed_ms, ticks, message)
        else:
            message = 'Timeout: Element "{}" not found after {:g}s'.format(
                text, timeout_seconds
            )
            result = SyncResult(TIMEOUT, elapsed_ms, ticks, message)
        self._logger.info("wait_for_appear %r: %s", text, result.status)
        return result

    def wait_for_disappear(self, text: str, timeout_ms: int = 10000) -> SyncResult:
        matched, elapsed_ms, ticks = self._poll(
            lambda snapshot: not snapshot.contains_text(text),
            timeout_s=timeout_ms / 1000.0,
            interval_s=self.timing.poll_interval_ms / 1000.0,
        )
        if matched:
            message = 'Element "{}" disappeared after {}s'.format(
                text, round(elapsed_ms / 1000)
            )
            result = SyncResult(SUCCESS, elapsed_ms, ticks, message)
        else:
            message = 'Timeout: Element "{}" still visible after {}ms'.format(
                text, timeout_ms
            )
            result = SyncResult(TIMEOUT, elapsed_ms, ticks, message)
        self._logger.info("wait_for_disappear %r: %s", text, result.status)
        return result

    def wait_for_stable(
        self, timeout_ms: int = 5000, check_interval_ms: Optional[int] = None
    ) -> SyncResult:
        if check_interval_ms is None:
            check_interval_ms = self.timing.poll_interval_ms
        required = self.timing.stable_samples
        state = {"previous": None, "run": 0}

        def settled(snapshot: Snapshot) -> bool:
            current = fingerprint(snapshot)
            if current == state["previous"]:
                state["run"] += 1
            else:
                state["previous"] = current
                state["run"] = 1
            return state["run"] >= required

        matched, elapsed_ms, ticks = self._poll(
            settled,
            timeout_s=timeout_ms / 1000.0,
            interval_s=check_interval_ms / 1000.0,
        )
        if matched:
            message = "UI stable after {}s".format(round(elapsed_ms / 1000))
            result = SyncResult(SUCCESS, elapsed_ms, ticks, message)
        else:
            message = "Timeout: UI did not stabilize within {}ms".format(timeout_ms)
            result = SyncResult(TIMEOUT, elapsed_ms, ticks, message)
        self._logger.info("wait_for_stable: %s after %d ticks", result.status, ticks)
        return result

    def scroll_until_visible(
        self, text: str, direction: str = "down", max_attempts: int = 10
    ) -> SyncResult:
        if direction not in SCROLL_DIRECTIONS:
            raise ValueError("unsupported scroll direction: {}".format(direction))
        start = self._clock()
        ticks = 0
        scrolls = 0
        gesture = None
        while True:
            snapshot = self.snapshot()
            ticks += 1
            if snapshot.contains_text(text):
                message = 'Found "{}" after {} scroll(s)'.format(text, scrolls)
                self._logger.info("scroll_until_visible %r: found", text)
                return SyncResult(
                    SUCCESS, self._elapsed_ms(start), ticks, message, scrolls=scrolls
                )
            if scrolls >= max_attempts:
                break
            if gesture is None:
                gesture = scroll_gesture(
                    screen_size(self.device),
                    direction,
                    duration_ms=self.timing.scroll_duration_ms,
                )
            self.device.send_gesture("swipe", dict(gesture))
            scrolls += 1
            self._sleep(self.timing.settle_interval_ms / 1000.0)
        message = 'Text "{}" not found after {} scrolls'.format(text, max_attempts)
        self._logger.info("scroll_until_visible %r: exhausted", text)
        return SyncResult(
            EXHAUSTED, self._elapsed_ms(start), ticks, message, scrolls=scrolls
        )
