from .service import (
    DEFAULT_DUMP_PATH,
    acquire_snapshot,
    dump_commands,
    read_ui_dump,
    screen_size,
)

__all__ = [
    "DEFAULT_DUMP_PATH",
    "acquire_snapshot",
    "dump_commands",
    "read_ui_dump",
    "screen_size",
]
