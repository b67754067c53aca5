from shared.utils.geometry import (
    DEFAULT_SCREEN_SIZE,
    bounds_center,
    clamp,
    parse_density,
    parse_screen_size,
    round_half_up,
)

__all__ = [
    "DEFAULT_SCREEN_SIZE",
    "bounds_center",
    "clamp",
    "parse_density",
    "parse_screen_size",
    "round_half_up",
]
