from infra.uiautomator.types import Element, Snapshot


def fingerprint_record(element: Element) -> str:
    bounds = element.bounds
    return "{}|{}|{},{},{},{}".format(
        element.text, element.class_name, bounds.x1, bounds.y1, bounds.x2, bounds.y2
    )


def fingerprint(snapshot: Snapshot) -> str:
    # document order is not a visible change, so records are sorted
    records = [
        fingerprint_record(element)
        for element in snapshot.elements
        if element.text or element.class_name
    ]
    records.sort()
    return "\n".join(records)
