from .service import KEYCODES, DeviceActions, ScratchStore, normalize_keycode

__all__ = [
    "KEYCODES",
    "DeviceActions",
    "ScratchStore",
    "normalize_keycode",
]
