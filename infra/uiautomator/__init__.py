from infra.uiautomator.fingerprint import fingerprint
from infra.uiautomator.locator import element_matches, locate, locate_all
from infra.uiautomator.parser import (
    DEFAULT_PARSER,
    LOOSE,
    WINDOW,
    UiAutomatorParser,
    iter_elements,
    parse,
    parse_bounds,
)
from infra.uiautomator.types import (
    Element,
    MatchQuery,
    MatchResult,
    Rect,
    Snapshot,
)

__all__ = [
    "DEFAULT_PARSER",
    "LOOSE",
    "WINDOW",
    "UiAutomatorParser",
    "iter_elements",
    "parse",
    "parse_bounds",
    "fingerprint",
    "element_matches",
    "locate",
    "locate_all",
    "Element",
    "MatchQuery",
    "MatchResult",
    "Rect",
    "Snapshot",
]
