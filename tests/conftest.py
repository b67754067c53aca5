import html
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "apps"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

DUMP_HEADER = (
    "<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>"
    '<hierarchy rotation="0">'
)


def build_node(
    text="",
    resource_id="",
    class_name="android.widget.TextView",
    bounds=(0, 0, 100, 50),
    clickable=False,
    enabled=True,
    focused=False,
    content_desc="",
):
    return (
        '<node index="0" text="{}" resource-id="{}" class="{}" package="com.example.app" '
        'content-desc="{}" checkable="false" checked="false" clickable="{}" '
        'enabled="{}" focusable="true" focused="{}" scrollable="false" '
        'long-clickable="false" password="false" selected="false" '
        'bounds="[{},{}][{},{}]" />'
    ).format(
        html.escape(text),
        resource_id,
        class_name,
        html.escape(content_desc),
        str(clickable).lower(),
        str(enabled).lower(),
        str(focused).lower(),
        *bounds
    )


def build_dump(*nodes):
    return DUMP_HEADER + "".join(nodes) + "</hierarchy>"


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeDevice:
    """Scripted stand-in for an adb-backed device.

    Each ``cat <dump>`` returns the next queued dump and keeps returning the
    last one once the queue runs dry.
    """

    def __init__(self, dumps=None, dump_path="/sdcard/ui_dump.xml"):
        self.dump_path = dump_path
        self.dumps = list(dumps or [])
        self.reads = 0
        self.responses = {"wm size": "Physical size: 1080x2400"}
        self.commands = []
        self.gestures = []
        self.keyevents = []
        self.typed = []
        self.installed = []
        self.started = []
        self.png = b"\x89PNG\r\n\x1a\nfake"

    def queue(self, *dumps):
        self.dumps.extend(dumps)

    def _next_dump(self):
        if not self.dumps:
            return build_dump()
        index = min(self.reads, len(self.dumps) - 1)
        self.reads += 1
        value = self.dumps[index]
        if isinstance(value, Exception):
            raise value
        return value

    def run_remote_command(self, command):
        self.commands.append(command)
        if command == "cat {}".format(self.dump_path):
            return self._next_dump()
        if command.startswith("uiautomator dump"):
            return "UI hierchary dumped to: {}".format(self.dump_path)
        value = self.responses.get(command, "")
        if isinstance(value, Exception):
            raise value
        return value

    def send_gesture(self, kind, params):
        self.gestures.append((kind, dict(params)))

    def keyevent(self, keycode):
        self.keyevents.append(keycode)

    def input_text(self, text):
        self.typed.append(text)

    def start_app(self, package):
        self.started.append(package)

    def install(self, apk_path, replace=True):
        self.installed.append((apk_path, replace))
        return "Success"

    def screenshot_bytes(self):
        return self.png


@pytest.fixture
def node():
    return build_node


@pytest.fixture
def dump():
    return build_dump


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def device():
    return FakeDevice()
