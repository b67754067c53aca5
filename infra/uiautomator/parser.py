import html
import re
from typing import Dict, Iterable, Optional, Tuple

from infra.uiautomator.types import Element, Rect, Snapshot

WINDOW = "window"
LOOSE = "loose"
PARSE_MODES = (WINDOW, LOOSE)

BOUNDS_RE = re.compile(r'bounds="\[(\d+),(\d+)\]\[(\d+),(\d+)\]"')

ATTRIBUTES = {
    "text": "text",
    "resource_id": "resource-id",
    "class_name": "class",
    "content_desc": "content-desc",
    "clickable": "clickable",
    "enabled": "enabled",
    "focused": "focused",
}
FLAGS = ("clickable", "enabled", "focused")


def _attribute_pattern(name: str):
    # whole attribute names only: "text" must not match "hint-text"
    return re.compile(r'(?<![\w-]){}="([^"]*)"'.format(re.escape(name)))


class UiAutomatorParser:
    """Turns a uiautomator dump into a flat Snapshot.

    Every ``bounds="[x1,y1][x2,y2]"`` occurrence yields one Element. The
    remaining attributes are looked up around that occurrence:

    * ``window`` scopes the lookup to the enclosing ``<node ...>`` tag, so
      flags never leak between adjacent nodes;
    * ``loose`` reads the attributes written since the last tag delimiter
      (or the previous bounds occurrence) and falls back to the ones
      following it, which copes with dumps that lost their tag delimiters.

    Parsing never raises on bad input; unrecognised text is skipped.
    """

    def __init__(self) -> None:
        self._patterns = {
            field: _attribute_pattern(name) for field, name in ATTRIBUTES.items()
        }

    def parse_bounds(self, bounds: str) -> Optional[Tuple[int, int, int, int]]:
        match = re.search(r"\[(\d+),(\d+)\]\[(\d+),(\d+)\]", bounds or "")
        if not match:
            return None
        left, top, right, bottom = (int(group) for group in match.groups())
        return left, top, right, bottom

    def parse(self, raw: Optional[str], mode: str = WINDOW) -> Snapshot:
        raw = raw or ""
        return Snapshot(elements=tuple(self.iter_elements(raw, mode=mode)), raw=raw)

    def iter_elements(self, raw: Optional[str], mode: str = WINDOW) -> Iterable[Element]:
        if mode not in PARSE_MODES:
            raise ValueError("unknown parse mode: {}".format(mode))
        if not raw:
            return
        anchors = list(BOUNDS_RE.finditer(raw))
        for position, anchor in enumerate(anchors):
            lower = anchors[position - 1].end() if position else 0
            if position + 1 < len(anchors):
                upper = anchors[position + 1].start()
            else:
                upper = len(raw)
            if mode == WINDOW:
                before, after = self._tag_window(raw, anchor, lower, upper), ""
            else:
                before, after = self._loose_window(raw, anchor, lower, upper)
            yield self._build_element(anchor, before, after)

    def _tag_window(self, raw: str, anchor, lower: int, upper: int) -> str:
        start = raw.rfind("<", lower, anchor.start())
        if start == -1 or raw.find(">", start, anchor.start()) != -1:
            start = lower
        end = raw.find(">", anchor.end(), upper)
        end = upper if end == -1 else end + 1
        return raw[start:end]

    def _loose_window(self, raw: str, anchor, lower: int, upper: int) -> Tuple[str, str]:
        # attributes of the previous node end at its tag delimiter
        opened = raw.rfind("<", lower, anchor.start())
        closed = raw.rfind(">", lower, anchor.start())
        lower = max(lower, opened, closed + 1)
        for delimiter in ("<", ">"):
            cut = raw.find(delimiter, anchor.end(), upper)
            if cut != -1:
                upper = cut
        return raw[lower:anchor.start()], raw[anchor.end():upper]

    def _lookup(self, field: str, before: str, after: str) -> Optional[str]:
        pattern = self._patterns[field]
        found = pattern.findall(before)
        if found:
            return html.unescape(found[-1])
        match = pattern.search(after)
        if match:
            return html.unescape(match.group(1))
        return None

    def _build_element(self, anchor, before: str, after: str) -> Element:
        x1, y1, x2, y2 = (int(group) for group in anchor.groups())
        values: Dict[str, object] = {}
        for field in ATTRIBUTES:
            value = self._lookup(field, before, after)
            if field in FLAGS:
                values[field] = (value or "").strip().lower() == "true"
            else:
                values[field] = value or ""
        return Element(bounds=Rect.from_corners(x1, y1, x2, y2), **values)


DEFAULT_PARSER = UiAutomatorParser()


def parse(raw: Optional[str], mode: str = WINDOW) -> Snapshot:
    return DEFAULT_PARSER.parse(raw, mode=mode)


def parse_bounds(bounds: str) -> Optional[Tuple[int, int, int, int]]:
    return DEFAULT_PARSER.parse_bounds(bounds)


def iter_elements(raw: Optional[str], mode: str = WINDOW) -> Iterable[Element]:
    return DEFAULT_PARSER.iter_elements(raw, mode=mode)
