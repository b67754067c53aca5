import subprocess

import pytest

from infra.adb import AdbClient, adb_text_escape
from shared.errors import AdbError


class Recorder:
    def __init__(self, stdout="", returncode=0, stderr="", raises=None):
        self.calls = []
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.raises = raises

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def recorder(monkeypatch):
    recorder = Recorder()
    monkeypatch.setattr(subprocess, "run", recorder)
    return recorder


def test_run_remote_command_strips_output(recorder):
    recorder.stdout = "Physical size: 1080x2400\n"
    client = AdbClient(device_id="emulator-5554")

    assert client.run_remote_command("wm size") == "Physical size: 1080x2400"
    assert recorder.calls == [["adb", "-s", "emulator-5554", "shell", "wm size"]]


def test_send_gesture_tap_and_swipe(recorder):
    client = AdbClient()
    client.send_gesture("tap", {"x": 1, "y": 2})
    client.send_gesture("swipe", {"x1": 1, "y1": 2, "x2": 3, "y2": 4, "duration_ms": 250})
    client.send_gesture("long_press", {"x": 5, "y": 6})

    assert recorder.calls == [
        ["adb", "shell", "input", "tap", "1", "2"],
        ["adb", "shell", "input", "swipe", "1", "2", "3", "4", "250"],
        ["adb", "shell", "input", "swipe", "5", "6", "5", "6", "1000"],
    ]


def test_unknown_gesture_raises(recorder):
    with pytest.raises(AdbError):
        AdbClient().send_gesture("pinch", {})


def test_nonzero_exit_raises(recorder):
    recorder.returncode = 1
    recorder.stderr = "error: device offline"

    with pytest.raises(AdbError, match="device offline"):
        AdbClient().run_remote_command("getprop")


def test_missing_adb_binary(monkeypatch):
    monkeypatch.setattr(subprocess, "run", Recorder(raises=FileNotFoundError()))

    with pytest.raises(AdbError, match="adb not found"):
        AdbClient(adb_path="/nope/adb").devices()


def test_timeout_raises_adb_error(monkeypatch):
    monkeypatch.setattr(
        subprocess, "run", Recorder(raises=subprocess.TimeoutExpired(["adb"], 1))
    )

    with pytest.raises(AdbError, match="timed out"):
        AdbClient().run_remote_command("logcat")


def test_list_devices(recorder):
    recorder.stdout = (
        "List of devices attached\n"
        "emulator-5554\tdevice\n"
        "R58M\tunauthorized\n"
    )
    client = AdbClient()

    assert client.list_devices() == [("emulator-5554", "device"), ("R58M", "unauthorized")]
    assert client.devices() == ["emulator-5554"]


def test_adb_text_escape():
    assert adb_text_escape("a b&c") == "a%sb\\&c"


def test_input_text_escapes_shell_metacharacters(recorder):
    AdbClient().input_text('say "hi"; reboot')

    assert recorder.calls == [
        ["adb", "shell", "input", "text", 'say%s\\"hi\\"\\;%sreboot']
    ]


def test_input_text_pastes_non_ascii(recorder):
    AdbClient().input_text("héllo")

    assert recorder.calls == [
        ["adb", "shell", "cmd", "clipboard", "set", "héllo"],
        ["adb", "shell", "input", "keyevent", "279"],
    ]


def test_start_app_uses_launcher_intent(recorder):
    AdbClient().start_app("com.example.app")

    assert recorder.calls == [
        [
            "adb",
            "shell",
            "monkey",
            "-p",
            "com.example.app",
            "-c",
            "android.intent.category.LAUNCHER",
            "1",
        ]
    ]
