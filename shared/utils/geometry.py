import math
import re
from typing import Optional, Tuple

DEFAULT_SCREEN_SIZE = (1080, 2400)

_SIZE_RE = re.compile(r"(\d+)\s*x\s*(\d+)")


def clamp(value, low, high):
    return max(low, min(high, value))


def round_half_up(value):
    return int(math.floor(value + 0.5))


def bounds_center(bounds):
    left, top, right, bottom = bounds
    return round_half_up((left + right) / 2), round_half_up((top + bottom) / 2)


def parse_screen_size(output: str) -> Optional[Tuple[int, int]]:
    match = _SIZE_RE.search(output or "")
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_density(output: str) -> Optional[int]:
    match = re.search(r"(\d+)", output or "")
    if not match:
        return None
    return int(match.group(1))
