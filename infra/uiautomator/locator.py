from typing import Iterable, List, Optional

from infra.uiautomator.types import (
    FOUND,
    INVALID,
    NOT_FOUND,
    OUT_OF_RANGE,
    Element,
    MatchQuery,
    MatchResult,
    Snapshot,
    visual_sort_key,
)


def element_matches(element: Element, query: MatchQuery) -> bool:
    if query.resource_id:
        return element.resource_id == query.resource_id
    if not query.text:
        return False
    wanted = query.text.lower()
    actual = element.text.lower()
    if query.exact:
        return actual == wanted
    return wanted in actual


def iter_matches(snapshot: Snapshot, query: MatchQuery) -> Iterable[Element]:
    for element in snapshot.elements:
        if element_matches(element, query):
            yield element


def locate(snapshot: Snapshot, query: MatchQuery) -> MatchResult:
    if not query.text and not query.resource_id:
        return MatchResult(status=INVALID, error="Must provide text or resourceId")
    if query.index < 0:
        return MatchResult(
            status=INVALID,
            index=query.index,
            error="Index {} must not be negative".format(query.index),
        )
    matches = list(iter_matches(snapshot, query))
    if not matches:
        return MatchResult(
            status=NOT_FOUND,
            index=query.index,
            error="Element with {} not found".format(query.describe()),
        )
    if query.index >= len(matches):
        return MatchResult(
            status=OUT_OF_RANGE,
            match_count=len(matches),
            index=query.index,
            matches=matches,
            error="Index {} out of range. Found {} matches for {}".format(
                query.index, len(matches), query.describe()
            ),
        )
    return MatchResult(
        status=FOUND,
        match_count=len(matches),
        index=query.index,
        element=matches[query.index],
        matches=matches,
    )


def locate_all(
    snapshot: Snapshot,
    query: Optional[MatchQuery] = None,
    *,
    clickable_only: bool = False,
    text_only: bool = False,
    include_disabled: bool = True,
) -> List[Element]:
    if query is None:
        candidates: Iterable[Element] = snapshot.elements
    else:
        candidates = iter_matches(snapshot, query)
    selected = []
    for element in candidates:
        if clickable_only and not element.clickable:
            continue
        if text_only and not element.text:
            continue
        if not include_disabled and not element.enabled:
            continue
        selected.append(element)
    return sorted(selected, key=visual_sort_key)
