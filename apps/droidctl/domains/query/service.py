import logging
from typing import Any, Dict, Optional

from infra.uiautomator import (
    LOOSE,
    WINDOW,
    MatchQuery,
    MatchResult,
    Snapshot,
    locate,
    locate_all,
)

from ..observe import DEFAULT_DUMP_PATH, acquire_snapshot
from ..ports import DeviceClient

MAX_XML_CHARS = 5000


def _located(result: MatchResult) -> Dict[str, Any]:
    x, y = result.center
    bounds = result.bounds.to_dict()
    bounds.update({"centerX": x, "centerY": y})
    return bounds


class ScreenQuery:
    """Element lookups against a freshly dumped screen."""

    def __init__(
        self,
        device: DeviceClient,
        dump_path: str = DEFAULT_DUMP_PATH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.device = device
        self.dump_path = dump_path
        self._logger = logger or logging.getLogger("droidctl.query")

    def snapshot(self, mode: str = WINDOW) -> Snapshot:
        return acquire_snapshot(self.device, self.dump_path, mode=mode)

    def find(self, query: MatchQuery) -> MatchResult:
        result = locate(self.snapshot(), query)
        self._logger.debug("%s: %s", query.describe(), result.status)
        return result

    def get_ui_tree(self, max_xml_chars: int = MAX_XML_CHARS) -> Dict[str, Any]:
        snapshot = self.snapshot(mode=LOOSE)
        labelled = [element for element in snapshot.elements if element.text]
        lines = [
            '"{}" at ({}, {})'.format(element.text, *element.center)
            for element in labelled
        ]
        xml = snapshot.raw
        truncated = len(xml) > max_xml_chars
        return {
            "count": len(snapshot),
            "elements": [element.to_dict() for element in labelled],
            "summary": "\n".join(lines),
            "xml": xml[:max_xml_chars],
            "truncated": truncated,
        }

    def list_clickable_elements(self, include_disabled: bool = False) -> Dict[str, Any]:
        elements = locate_all(
            self.snapshot(), clickable_only=True, include_disabled=include_disabled
        )
        return {
            "count": len(elements),
            "elements": [element.to_dict() for element in elements],
        }

    def list_text_elements(self, include_disabled: bool = True) -> Dict[str, Any]:
        elements = locate_all(
            self.snapshot(), text_only=True, include_disabled=include_disabled
        )
        return {
            "count": len(elements),
            "elements": [element.to_dict() for element in elements],
        }

    def _tap(self, result: MatchResult, query: MatchQuery) -> Dict[str, Any]:
        if not result.found:
            payload = {"tapped": False, "error": result.error}
            if result.match_count:
                payload["matchCount"] = result.match_count
            return payload
        x, y = result.center
        self.device.send_gesture("tap", {"x": x, "y": y})
        message = "Tapped element with {} at ({}, {})".format(query.describe(), x, y)
        if result.match_count > 1:
            message += " [match {}/{}]".format(result.index + 1, result.match_count)
        self._logger.info(message)
        return {
            "tapped": True,
            "x": x,
            "y": y,
            "matchCount": result.match_count,
            "index": result.index,
            "message": message,
        }

    def tap_text(self, text: str, exact: bool = False) -> Dict[str, Any]:
        query = MatchQuery(text=text, exact=exact)
        return self._tap(self.find(query), query)

    def tap_element(
        self,
        text: Optional[str] = None,
        resource_id: Optional[str] = None,
        index: int = 0,
        exact: bool = False,
    ) -> Dict[str, Any]:
        query = MatchQuery(text=text, resource_id=resource_id, exact=exact, index=index)
        if not text and not resource_id:
            return {"tapped": False, "error": "Must provide either text or resourceId"}
        return self._tap(self.find(query), query)

    def is_element_visible(
        self, text: Optional[str] = None, resource_id: Optional[str] = None
    ) -> Dict[str, Any]:
        if not text and not resource_id:
            return {"visible": False, "error": "Must provide text or resourceId"}
        result = self.find(MatchQuery(text=text, resource_id=resource_id))
        if not result.found:
            return {"visible": False, "bounds": None}
        return {"visible": True, "bounds": _located(result)}

    def get_element_bounds(
        self,
        text: Optional[str] = None,
        resource_id: Optional[str] = None,
        index: int = 0,
        exact: bool = False,
    ) -> Dict[str, Any]:
        query = MatchQuery(text=text, resource_id=resource_id, exact=exact, index=index)
        if not text and not resource_id:
            return {"found": False, "error": "Must provide text or resourceId"}
        return self.find(query).to_dict()

    def get_focused_element(self) -> Dict[str, Any]:
        focused = [element for element in self.snapshot() if element.focused]
        if not focused:
            return {"focused": False, "element": None}
        element = focused[0]
        x, y = element.center
        return {
            "focused": True,
            "element": {
                "text": element.text,
                "resource_id": element.resource_id,
                "class": element.short_class,
                "bounds": element.bounds.to_dict(),
                "center": {"x": x, "y": y},
            },
        }

    def assert_screen_contains(self, text: str, exact: bool = False) -> Dict[str, Any]:
        snapshot = self.snapshot()
        if exact:
            found = any(element.text == text for element in snapshot)
        else:
            found = snapshot.contains_text(text)
        return {
            "assertion": "PASS" if found else "FAIL",
            "expected": text,
            "found": found,
        }
