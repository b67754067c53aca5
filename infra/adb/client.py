import logging
import subprocess
from typing import Any, Dict, Optional

from shared.errors import AdbError
from shared.text import is_ascii


def adb_text_escape(text):
    escaped = []
    for ch in text:
        if ch == " ":
            escaped.append("%s")
        elif ch in "\\'\"&|<>;()$`":
            escaped.append("\\" + ch)
        else:
            escaped.append(ch)
    return "".join(escaped)


class AdbClient:
    def __init__(
        self,
        adb_path="adb",
        device_id=None,
        timeout: float = 30,
        logger: Optional[logging.Logger] = None,
    ):
        self.adb_path = adb_path
        self.device_id = device_id or None
        self.timeout = timeout
        self._logger = logger or logging.getLogger("droidctl.adb")

    def _base_cmd(self):
        cmd = [self.adb_path]
        if self.device_id:
            cmd += ["-s", self.device_id]
        return cmd

    def run(self, args, timeout=None, check=True, text=True, input_data=None):
        cmd = self._base_cmd() + list(args)
        self._logger.debug("adb %s", " ".join(cmd[1:]))
        try:
            result = subprocess.run(
                cmd,
                input=input_data,
                capture_output=True,
                timeout=timeout or self.timeout,
                text=text,
            )
        except FileNotFoundError as exc:
            raise AdbError("adb not found: {}".format(self.adb_path)) from exc
        except subprocess.TimeoutExpired as exc:
            raise AdbError("adb timed out: {}".format(" ".join(cmd))) from exc
        if check and result.returncode != 0:
            stderr = result.stderr
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            raise AdbError(
                "adb failed: {}\n{}".format(" ".join(cmd), (stderr or "").strip())
            )
        return result

    def devices(self):
        return [
            device_id
            for device_id, status in self.list_devices()
            if status == "device"
        ]

    def list_devices(self):
        output = self.run(["devices"], timeout=10).stdout.splitlines()
        devices = []
        for line in output[1:]:
            parts = line.split()
            if len(parts) >= 2:
                devices.append((parts[0], parts[1]))
        return devices

    def shell(self, cmd, timeout=None, check=True):
        if isinstance(cmd, str):
            args = ["shell", cmd]
        else:
            args = ["shell"] + list(cmd)
        return self.run(args, timeout=timeout, check=check)

    def exec_out(self, cmd, timeout=None):
        if isinstance(cmd, str):
            args = ["exec-out", cmd]
        else:
            args = ["exec-out"] + list(cmd)
        return self.run(args, timeout=timeout, check=True, text=False)

    def run_remote_command(self, command: str) -> str:
        return (self.shell(command).stdout or "").strip()

    def send_gesture(self, kind: str, params: Dict[str, Any]) -> None:
        if kind == "tap":
            self.tap(params["x"], params["y"])
        elif kind == "swipe":
            self.swipe(
                params["x1"],
                params["y1"],
                params["x2"],
                params["y2"],
                duration_ms=params.get("duration_ms", 300),
            )
        elif kind == "long_press":
            x, y = params["x"], params["y"]
            self.swipe(x, y, x, y, duration_ms=params.get("duration_ms", 1000))
        else:
            raise AdbError("unsupported gesture: {}".format(kind))

    def tap(self, x, y):
        self.shell(["input", "tap", str(x), str(y)])

    def swipe(self, x1, y1, x2, y2, duration_ms=300):
        self.shell(
            [
                "input",
                "swipe",
                str(x1),
                str(y1),
                str(x2),
                str(y2),
                str(duration_ms),
            ]
        )

    def keyevent(self, keycode):
        self.shell(["input", "keyevent", str(keycode)])

    def input_text(self, text):
        if text is None:
            return
        text = str(text)
        if not text:
            return
        if is_ascii(text):
            self.shell(["input", "text", adb_text_escape(text)])
            return
        try:
            self.shell(["cmd", "clipboard", "set", text])
            self.keyevent(279)
        except AdbError as exc:
            raise AdbError(
                "failed to input non-ASCII text; the device does not accept "
                "clipboard paste"
            ) from exc

    def start_app(self, package):
        self.shell(
            [
                "monkey",
                "-p",
                package,
                "-c",
                "android.intent.category.LAUNCHER",
                "1",
            ]
        )

    def install(self, apk_path, replace=True):
        args = ["install"]
        if replace:
            args.append("-r")
        args.append(str(apk_path))
        return (self.run(args, timeout=300).stdout or "").strip()

    def screenshot_bytes(self):
        result = self.exec_out(["screencap", "-p"])
        return result.stdout
