from typing import Optional, Tuple

from infra.uiautomator import DEFAULT_PARSER, WINDOW, Snapshot, UiAutomatorParser
from shared.utils.geometry import DEFAULT_SCREEN_SIZE, parse_screen_size

from ..ports import DeviceClient

DEFAULT_DUMP_PATH = "/sdcard/ui_dump.xml"


def dump_commands(dump_path: str = DEFAULT_DUMP_PATH) -> Tuple[str, str]:
    return "uiautomator dump {}".format(dump_path), "cat {}".format(dump_path)


def read_ui_dump(device: DeviceClient, dump_path: str = DEFAULT_DUMP_PATH) -> str:
    refresh, read = dump_commands(dump_path)
    device.run_remote_command(refresh)
    return device.run_remote_command(read)


def acquire_snapshot(
    device: DeviceClient,
    dump_path: str = DEFAULT_DUMP_PATH,
    parser: Optional[UiAutomatorParser] = None,
    mode: str = WINDOW,
) -> Snapshot:
    parser = parser or DEFAULT_PARSER
    return parser.parse(read_ui_dump(device, dump_path), mode=mode)


def screen_size(device: DeviceClient) -> Tuple[int, int]:
    size = parse_screen_size(device.run_remote_command("wm size"))
    return size or DEFAULT_SCREEN_SIZE
