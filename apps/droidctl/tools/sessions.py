import threading
from typing import Callable, Dict, List, Optional

from infra.adb import AdbClient
from shared.errors import AdbError

from ..domains.device import ScratchStore
from ..domains.sync import SyncTiming
from ..settings import Settings
from .registry import ToolContext

HostFactory = Callable[[Optional[str]], AdbClient]


def resolve_device_id(adb, device_id):
    if device_id:
        return device_id
    devices = adb.devices()
    if not devices:
        raise AdbError("no adb devices found")
    if len(devices) > 1:
        raise AdbError("multiple devices attached, pass --device")
    return devices[0]


class ToolSessions:
    """One ToolContext per device, created on first use."""

    def __init__(self, settings: Settings, host_factory: Optional[HostFactory] = None) -> None:
        self.settings = settings
        self._host_factory = host_factory or self._adb_host
        self._contexts: Dict[str, ToolContext] = {}
        self._scratch = ScratchStore()
        self._lock = threading.Lock()

    def _adb_host(self, device_id: Optional[str]) -> AdbClient:
        return AdbClient(
            adb_path=self.settings.adb_path,
            device_id=device_id,
            timeout=self.settings.command_timeout,
        )

    def list_devices(self) -> List[Dict[str, str]]:
        adb = self._host_factory(None)
        return [
            {"device_id": device_id, "status": status}
            for device_id, status in adb.list_devices()
        ]

    def resolve(self, device_id: Optional[str] = None) -> str:
        device_id = device_id or self.settings.device_id
        if device_id:
            return device_id
        return resolve_device_id(self._host_factory(None), None)

    def get(self, device_id: Optional[str] = None) -> ToolContext:
        device_id = self.resolve(device_id)
        with self._lock:
            context = self._contexts.get(device_id)
            if context is None:
                context = ToolContext.for_host(
                    self._host_factory(device_id),
                    timing=SyncTiming.from_settings(self.settings.sync),
                    dump_path=self.settings.dump_path,
                    scope=device_id,
                    scratch=self._scratch,
                    screenshot_dir=self.settings.screenshot_dir,
                )
                self._contexts[device_id] = context
        return context
