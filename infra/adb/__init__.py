from infra.adb.client import AdbClient, adb_text_escape

__all__ = [
    "AdbClient",
    "adb_text_escape",
]
