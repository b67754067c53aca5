import base64
import logging
import re
import shlex
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from shared.errors import AdbError
from shared.utils.geometry import clamp, parse_density, parse_screen_size, round_half_up

from ..observe import screen_size
from ..ports import DeviceHost

KEYCODES = {
    "BACK": 4,
    "HOME": 3,
    "ENTER": 66,
    "TAB": 61,
    "DELETE": 67,
    "MENU": 82,
    "POWER": 26,
    "VOLUME_UP": 24,
    "VOLUME_DOWN": 25,
}
KEYCODE_MOVE_END = 123
KEYCODE_DEL = 67
KEYCODE_CTRL_LEFT = 113
KEYCODE_A = 29

STATUS_BAR_HEIGHT = 50
NAV_BAR_HEIGHT = 120
EDGE_MARGIN = 10

PINCH_DISTANCE = 200
PINCH_INNER_OFFSET = 50

ORIENTATIONS = {"portrait": 0, "landscape": 1}
LOG_LEVELS = ("V", "D", "I", "W", "E")

CLIPBOARD_FILE = "/sdcard/clipboard_temp.txt"


def normalize_keycode(value):
    if value is None:
        raise AdbError("keyevent missing keycode")
    if isinstance(value, int):
        return value
    value = str(value).strip().upper()
    if value.startswith("KEYCODE_"):
        value = value[len("KEYCODE_"):]
    mapped = KEYCODES.get(value)
    if mapped is not None:
        return mapped
    if value.lstrip("-").isdigit():
        return int(value)
    raise AdbError("unknown key: {}".format(value))


class ScratchStore:
    """Per-device key/value scratch space kept outside the device."""

    def __init__(self) -> None:
        self._values: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    def put(self, scope: str, key: str, value: str) -> None:
        with self._lock:
            self._values.setdefault(scope, {})[key] = value

    def get(self, scope: str, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(scope, {}).get(key)


class DeviceActions:
    def __init__(
        self,
        host: DeviceHost,
        scope: str = "default",
        scratch: Optional[ScratchStore] = None,
        screenshot_dir: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.host = host
        self.scope = scope
        self.scratch = scratch or ScratchStore()
        self.screenshot_dir = screenshot_dir
        self._sleep = sleep
        self._logger = logger or logging.getLogger("droidctl.device")

    def _shell(self, command: str) -> str:
        return self.host.run_remote_command(command)

    # gestures

    def tap(self, x: int, y: int) -> Dict[str, Any]:
        self.host.send_gesture("tap", {"x": x, "y": y})
        return {"message": "Tapped at ({}, {})".format(x, y)}

    def double_tap(self, x: int, y: int) -> Dict[str, Any]:
        self.multi_tap(x, y, taps=2, interval_ms=100)
        return {"message": "Double tapped at ({}, {})".format(x, y)}

    def multi_tap(self, x: int, y: int, taps: int = 2, interval_ms: int = 100) -> Dict[str, Any]:
        for index in range(taps):
            self.host.send_gesture("tap", {"x": x, "y": y})
            if index < taps - 1:
                self._sleep(interval_ms / 1000.0)
        return {"message": "Performed {} taps at ({}, {})".format(taps, x, y)}

    def long_press(self, x: int, y: int, duration_ms: int = 1000) -> Dict[str, Any]:
        self.host.send_gesture("long_press", {"x": x, "y": y, "duration_ms": duration_ms})
        return {
            "message": "Long pressed at ({}, {}) for {}ms".format(x, y, duration_ms)
        }

    def swipe(self, x1: int, y1: int, x2: int, y2: int, duration_ms: int = 300) -> Dict[str, Any]:
        self.host.send_gesture(
            "swipe",
            {"x1": x1, "y1": y1, "x2": x2, "y2": y2, "duration_ms": duration_ms},
        )
        return {"message": "Swiped from ({}, {}) to ({}, {})".format(x1, y1, x2, y2)}

    def drag(self, x1: int, y1: int, x2: int, y2: int, duration_ms: int = 1000) -> Dict[str, Any]:
        self.swipe(x1, y1, x2, y2, duration_ms=duration_ms)
        return {
            "message": "Dragged from ({}, {}) to ({}, {}) over {}ms".format(
                x1, y1, x2, y2, duration_ms
            )
        }

    def scroll(self, direction: str, amount: int = 500) -> Dict[str, Any]:
        width, height = screen_size(self.host)
        center_x = round_half_up(width / 2)
        center_y = round_half_up(height / 2)
        half = round_half_up(amount / 2)
        x1 = x2 = center_x
        y1 = y2 = center_y
        if direction == "up":
            y1, y2 = center_y + half, center_y - half
        elif direction == "down":
            y1, y2 = center_y - half, center_y + half
        elif direction == "left":
            x1, x2 = center_x + half, center_x - half
        elif direction == "right":
            x1, x2 = center_x - half, center_x + half
        else:
            raise ValueError("unsupported scroll direction: {}".format(direction))
        self.swipe(x1, y1, x2, y2, duration_ms=300)
        return {"message": "Scrolled {}".format(direction)}

    def tap_safe(
        self, x: int, y: int, avoid_status_bar: bool = True, avoid_nav_bar: bool = True
    ) -> Dict[str, Any]:
        width, height = screen_size(self.host)
        safe_y = y
        adjustments: List[str] = []
        if avoid_status_bar and y < STATUS_BAR_HEIGHT:
            safe_y = STATUS_BAR_HEIGHT + EDGE_MARGIN
            adjustments.append("status bar ({} -> {})".format(y, safe_y))
        if avoid_nav_bar and y > height - NAV_BAR_HEIGHT:
            safe_y = height - NAV_BAR_HEIGHT - EDGE_MARGIN
            adjustments.append("nav bar ({} -> {})".format(y, safe_y))
        safe_x = clamp(x, EDGE_MARGIN, width - EDGE_MARGIN)
        self.host.send_gesture("tap", {"x": safe_x, "y": safe_y})
        message = "Tapped at ({}, {})".format(safe_x, safe_y)
        if adjustments:
            message += " [adjusted to avoid {}]".format(", ".join(adjustments))
        return {"x": safe_x, "y": safe_y, "adjusted": bool(adjustments), "message": message}

    def pinch_zoom(self, x: int, y: int, scale: float, duration_ms: int = 500) -> Dict[str, Any]:
        # two sequential single-finger swipes; not a real multi-touch pinch
        if scale > 1:
            half = round_half_up(round_half_up(PINCH_DISTANCE * scale) / 2)
            strokes = [
                (y - PINCH_INNER_OFFSET, y - half),
                (y + PINCH_INNER_OFFSET, y + half),
            ]
        else:
            half = round_half_up(PINCH_DISTANCE / 2)
            target = round_half_up(PINCH_DISTANCE * scale / 2)
            strokes = [(y - half, y - target), (y + half, y + target)]
        for start_y, end_y in strokes:
            self.swipe(x, start_y, x, end_y, duration_ms=duration_ms)
        self._logger.warning("pinch_zoom is approximated with sequential swipes")
        return {
            "approximate": True,
            "message": "Pinch zoom at ({}, {}) with scale {}. Note: True multitouch "
            "requires instrumentation.".format(x, y, scale),
        }

    # text input

    def type_text(self, text: str) -> Dict[str, Any]:
        self.host.input_text(text)
        return {"message": 'Typed: "{}"'.format(text)}

    def clear_input(self, max_chars: int = 100) -> Dict[str, Any]:
        self.host.keyevent(KEYCODE_MOVE_END)
        for _ in range(max_chars):
            self.host.keyevent(KEYCODE_DEL)
        return {
            "message": "Cleared input field (deleted up to {} characters)".format(
                max_chars
            )
        }

    def select_all(self) -> Dict[str, Any]:
        self._shell("input keyevent --longpress {} {}".format(KEYCODE_CTRL_LEFT, KEYCODE_A))
        return {"message": "Selected all text in focused field"}

    def set_text(self, text: str, max_clear_chars: int = 100) -> Dict[str, Any]:
        self.clear_input(max_clear_chars)
        self.type_text(text)
        return {"message": 'Cleared field and typed: "{}"'.format(text)}

    def press_key(self, key: str) -> Dict[str, Any]:
        self.host.keyevent(normalize_keycode(key))
        return {"message": "Pressed {} key".format(key)}

    # apps

    def launch_app(self, package: str) -> Dict[str, Any]:
        self.host.start_app(package)
        return {"message": "Launched {}".format(package)}

    def install_apk(self, path: str) -> Dict[str, Any]:
        output = self.host.install(path, replace=True)
        return {"message": "APK installed: {}".format(output), "output": output}

    def list_packages(self, filter: Optional[str] = None) -> Dict[str, Any]:
        output = self._shell("pm list packages")
        packages = [
            line.strip().replace("package:", "", 1)
            for line in output.splitlines()
            if line.strip()
        ]
        if filter:
            packages = [name for name in packages if filter.lower() in name.lower()]
        return {"count": len(packages), "packages": packages}

    def clear_app_data(self, package: str) -> Dict[str, Any]:
        self._shell("pm clear {}".format(shlex.quote(package)))
        return {"message": "Data cleared for {}".format(package)}

    def force_stop(self, package: str) -> Dict[str, Any]:
        self._shell("am force-stop {}".format(shlex.quote(package)))
        return {"message": "Force stopped {}".format(package)}

    def get_current_activity(self) -> Dict[str, Any]:
        output = self._shell("dumpsys activity activities")
        resumed = [line.strip() for line in output.splitlines() if "mResumedActivity" in line]
        activity = resumed[0] if resumed else ""
        return {"activity": activity, "message": "Current activity: {}".format(activity)}

    # device state

    def get_logs(
        self, filter: Optional[str] = None, lines: int = 50, level: Optional[str] = None
    ) -> Dict[str, Any]:
        command = "logcat -d -t {}".format(int(lines))
        if level:
            if level not in LOG_LEVELS:
                raise ValueError("unsupported log level: {}".format(level))
            command += " *:{}".format(level)
        output = self._shell(command)
        entries = output.splitlines()
        if filter:
            entries = [line for line in entries if filter.lower() in line.lower()]
        return {"count": len(entries), "logs": "\n".join(entries)}

    def get_screen_size(self) -> Dict[str, Any]:
        size = parse_screen_size(self._shell("wm size")) or (0, 0)
        density = parse_density(self._shell("wm density")) or 0
        return {"width": size[0], "height": size[1], "density": density}

    def device_info(self) -> Dict[str, Any]:
        battery = self._shell("dumpsys battery")
        match = re.search(r"level:\s*(\d+)", battery)
        return {
            "model": self._shell("getprop ro.product.model"),
            "android": self._shell("getprop ro.build.version.release"),
            "sdk": self._shell("getprop ro.build.version.sdk"),
            "screen": self._shell("wm size").replace("Physical size: ", ""),
            "density": self._shell("wm density").replace("Physical density: ", ""),
            "battery": int(match.group(1)) if match else None,
        }

    def rotate_device(self, orientation: str) -> Dict[str, Any]:
        if orientation not in ORIENTATIONS:
            raise ValueError("unsupported orientation: {}".format(orientation))
        self._shell("settings put system accelerometer_rotation 0")
        self._shell("settings put system user_rotation {}".format(ORIENTATIONS[orientation]))
        return {"message": "Device rotated to {}".format(orientation)}

    def screenshot(self) -> Dict[str, Any]:
        png = self.host.screenshot_bytes()
        result = {
            "mime_type": "image/png",
            "data": base64.b64encode(png).decode("ascii"),
            "size": len(png),
        }
        if self.screenshot_dir:
            directory = Path(self.screenshot_dir)
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / "screenshot_{}.png".format(int(time.time() * 1000))
            path.write_bytes(png)
            self._logger.info("screenshot saved to %s", path)
            result["path"] = str(path)
        return result

    # clipboard

    def set_clipboard(self, text: str) -> Dict[str, Any]:
        self._shell("am broadcast -a clipper.set -e text {}".format(shlex.quote(text)))
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        self._shell('echo "{}" | base64 -d > {}'.format(encoded, CLIPBOARD_FILE))
        self.scratch.put(self.scope, "clipboard", text)
        preview = text[:50] + ("..." if len(text) > 50 else "")
        return {"message": 'Clipboard set to: "{}"'.format(preview)}

    def get_clipboard(self) -> Dict[str, Any]:
        try:
            output = self._shell("am broadcast -a clipper.get")
        except AdbError:
            self._logger.debug("clipper broadcast unavailable")
            output = ""
        match = re.search(r'data="([^"]*)"', output)
        if match:
            return {"text": match.group(1), "source": "clipper"}
        stored = self.scratch.get(self.scope, "clipboard")
        if stored is not None:
            return {"text": stored, "source": "scratch"}
        content = self._shell("cat {} 2>/dev/null || echo ''".format(CLIPBOARD_FILE))
        return {"text": content, "source": "file"}
