from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from shared.utils.geometry import bounds_center


@dataclass(frozen=True)
class Rect:
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int) -> "Rect":
        return cls(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    @property
    def center(self) -> Tuple[int, int]:
        return bounds_center(self.as_tuple())

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x1, self.y1, self.x2, self.y2

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x1, "y": self.y1, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Element:
    bounds: Rect
    text: str = ""
    resource_id: str = ""
    class_name: str = ""
    content_desc: str = ""
    clickable: bool = False
    enabled: bool = False
    focused: bool = False

    @property
    def short_class(self) -> str:
        return self.class_name.rsplit(".", 1)[-1]

    @property
    def center(self) -> Tuple[int, int]:
        return self.bounds.center

    def to_dict(self) -> Dict[str, Any]:
        x, y = self.center
        return {
            "text": self.text,
            "resource_id": self.resource_id,
            "class": self.short_class,
            "content_desc": self.content_desc,
            "bounds": self.bounds.to_dict(),
            "center": {"x": x, "y": y},
            "clickable": self.clickable,
            "enabled": self.enabled,
            "focused": self.focused,
        }


def visual_sort_key(element: Element) -> Tuple[int, int]:
    x, y = element.center
    return y, x


@dataclass(frozen=True)
class Snapshot:
    elements: Tuple[Element, ...] = ()
    raw: str = ""

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def visual_order(self) -> List[Element]:
        return sorted(self.elements, key=visual_sort_key)

    def contains_text(self, text: str) -> bool:
        if not text:
            return False
        return text.lower() in self.raw.lower()


@dataclass(frozen=True)
class MatchQuery:
    text: Optional[str] = None
    resource_id: Optional[str] = None
    exact: bool = False
    index: int = 0

    def describe(self) -> str:
        if self.resource_id:
            return 'resource-id="{}"'.format(self.resource_id)
        if self.exact:
            return 'text="{}"'.format(self.text)
        return 'text containing "{}"'.format(self.text)


FOUND = "found"
NOT_FOUND = "not_found"
OUT_OF_RANGE = "out_of_range"
INVALID = "invalid"


@dataclass
class MatchResult:
    status: str
    match_count: int = 0
    index: int = 0
    element: Optional[Element] = None
    matches: List[Element] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND

    @property
    def bounds(self) -> Optional[Rect]:
        return self.element.bounds if self.element else None

    @property
    def center(self) -> Optional[Tuple[int, int]]:
        return self.element.center if self.element else None

    def to_dict(self) -> Dict[str, Any]:
        if not self.found:
            payload: Dict[str, Any] = {"found": False, "error": self.error}
            if self.status == OUT_OF_RANGE:
                payload["matchCount"] = self.match_count
            return payload
        x, y = self.center
        return {
            "found": True,
            "matchCount": self.match_count,
            "index": self.index,
            "bounds": self.bounds.to_dict(),
            "center": {"x": x, "y": y},
        }
