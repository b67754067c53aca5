import pytest

from droidctl.domains.sync import (
    EXHAUSTED,
    SUCCESS,
    TIMEOUT,
    Synchronizer,
    SyncTiming,
    scroll_gesture,
)
from shared.errors import AdbError


def _sync(device, clock, **timing):
    return Synchronizer(device, timing=SyncTiming(**timing), clock=clock, sleep=clock.sleep)


def test_wait_for_appear_finds_text_on_third_tick(device, clock, node, dump):
    device.queue(dump(node(text="Loading")), dump(node(text="Loading")), dump(node(text="Welcome")))

    result = _sync(device, clock).wait_for_appear("welcome", timeout_seconds=10)

    assert result.status == SUCCESS
    assert result.ticks == 3
    assert result.elapsed_ms == 1000
    assert result.message == 'Element "welcome" found after 1s'


def test_wait_for_appear_times_out(device, clock, node, dump):
    device.queue(dump(node(text="Loading")))

    result = _sync(device, clock).wait_for_appear("Welcome", timeout_seconds=1)

    assert result.status == TIMEOUT
    assert result.ticks == 2
    assert result.elapsed_ms == 1000
    assert result.message == 'Timeout: Element "Welcome" not found after 1s'
    assert result.to_dict()["success"] is False


def test_wait_refreshes_dump_before_each_read(device, clock, node, dump):
    device.queue(dump(node(text="Welcome")))

    _sync(device, clock).wait_for_appear("Welcome")

    assert device.commands == ["uiautomator dump /sdcard/ui_dump.xml", "cat /sdcard/ui_dump.xml"]


def test_wait_for_disappear(device, clock, node, dump):
    device.queue(dump(node(text="Spinner")), dump(node(text="Done")))

    result = _sync(device, clock).wait_for_disappear("Spinner", timeout_ms=5000)

    assert result.success
    assert result.ticks == 2
    assert result.elapsed_ms == 500


def test_wait_for_disappear_times_out(device, clock, node, dump):
    device.queue(dump(node(text="Spinner")))

    result = _sync(device, clock).wait_for_disappear("Spinner", timeout_ms=2000)

    assert result.status == TIMEOUT
    assert result.message == 'Timeout: Element "Spinner" still visible after 2000ms'


def test_wait_for_stable_needs_consecutive_equal_fingerprints(device, clock, node, dump):
    a = dump(node(text="A"))
    b = dump(node(text="B"))
    device.queue(a, b, b, b)

    result = _sync(device, clock).wait_for_stable(timeout_ms=5000, check_interval_ms=100)

    assert result.success
    assert result.ticks == 3
    assert clock.sleeps == [0.1, 0.1]


def test_wait_for_stable_times_out_on_changing_ui(device, clock, node, dump):
    device.queue(*[dump(node(text="frame {}".format(i))) for i in range(20)])

    result = _sync(device, clock).wait_for_stable(timeout_ms=1000, check_interval_ms=250)

    assert result.status == TIMEOUT
    assert result.ticks == 4
    assert result.message == "Timeout: UI did not stabilize within 1000ms"


def test_wait_for_stable_honours_sample_count(device, clock, node, dump):
    same = dump(node(text="Same"))
    device.queue(same)

    result = _sync(device, clock, stable_samples=3).wait_for_stable(check_interval_ms=100)

    assert result.ticks == 3


def test_zero_timeout_never_samples(device, clock):
    result = _sync(device, clock).wait_for_appear("anything", timeout_seconds=0)

    assert result.status == TIMEOUT
    assert result.ticks == 0
    assert device.commands == []


def test_scroll_until_visible_swipes_until_found(device, clock, node, dump):
    device.queue(dump(node(text="Row 1")), dump(node(text="Row 2")), dump(node(text="Settings")))

    result = _sync(device, clock).scroll_until_visible("Settings", max_attempts=5)

    assert result.success
    assert result.scrolls == 2
    assert result.message == 'Found "Settings" after 2 scroll(s)'
    assert device.gestures == [
        ("swipe", {"x1": 540, "y1": 1680, "x2": 540, "y2": 720, "duration_ms": 300}),
        ("swipe", {"x1": 540, "y1": 1680, "x2": 540, "y2": 720, "duration_ms": 300}),
    ]
    assert device.commands.count("wm size") == 1


def test_scroll_until_visible_exhausts_budget(device, clock, node, dump):
    device.queue(dump(node(text="Row")))

    result = _sync(device, clock).scroll_until_visible("Missing", direction="up", max_attempts=3)

    assert result.status == EXHAUSTED
    assert result.scrolls == 3
    assert result.ticks == 4
    assert result.message == 'Text "Missing" not found after 3 scrolls'
    assert device.gestures[0][1]["y1"] == 720
    assert device.gestures[0][1]["y2"] == 1680


def test_scroll_with_zero_attempts_checks_once(device, clock, node, dump):
    device.queue(dump(node(text="Row")))

    result = _sync(device, clock).scroll_until_visible("Missing", max_attempts=0)

    assert result.status == EXHAUSTED
    assert result.ticks == 1
    assert device.gestures == []
    assert "wm size" not in device.commands


def test_scroll_gesture_geometry():
    assert scroll_gesture((1000, 2000), "down") == {
        "x1": 500,
        "y1": 1400,
        "x2": 500,
        "y2": 600,
        "duration_ms": 300,
    }
    with pytest.raises(ValueError):
        scroll_gesture((1000, 2000), "left")


def test_device_errors_propagate(device, clock):
    device.queue(AdbError("device offline"))

    with pytest.raises(AdbError):
        _sync(device, clock).wait_for_appear("Welcome")
