from typing import Any, Dict, Protocol


class DeviceClient(Protocol):
    def run_remote_command(self, command: str) -> str:
        ...

    def send_gesture(self, kind: str, params: Dict[str, Any]) -> None:
        ...


class DeviceHost(DeviceClient, Protocol):
    def screenshot_bytes(self) -> bytes:
        ...

    def install(self, apk_path: str, replace: bool = True) -> str:
        ...

    def input_text(self, text: str) -> None:
        ...

    def keyevent(self, keycode: int) -> None:
        ...

    def start_app(self, package: str) -> None:
        ...
