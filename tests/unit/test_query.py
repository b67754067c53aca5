from droidctl.domains.query import ScreenQuery


def _query(device, node, dump):
    device.queue(
        dump(
            node(text="Submit", resource_id="app:id/submit", bounds=(100, 200, 300, 250), clickable=True),
            node(text="Cancel", resource_id="app:id/cancel", bounds=(400, 200, 600, 250), clickable=True),
            node(text="Submit later", bounds=(100, 400, 300, 450)),
            node(text="", resource_id="app:id/name", class_name="android.widget.EditText",
                 bounds=(0, 500, 1080, 600), focused=True),
        )
    )
    return ScreenQuery(device)


def test_tap_text_taps_center(device, node, dump):
    result = _query(device, node, dump).tap_text("Submit", exact=True)

    assert result["tapped"] is True
    assert (result["x"], result["y"]) == (200, 225)
    assert device.gestures == [("tap", {"x": 200, "y": 225})]


def test_tap_element_reports_match_position(device, node, dump):
    result = _query(device, node, dump).tap_element(text="submit", index=1)

    assert result["tapped"] is True
    assert result["matchCount"] == 2
    assert result["message"].endswith("[match 2/2]")
    assert device.gestures == [("tap", {"x": 200, "y": 425})]


def test_tap_element_out_of_range_does_not_tap(device, node, dump):
    result = _query(device, node, dump).tap_element(text="submit", index=4)

    assert result["tapped"] is False
    assert result["matchCount"] == 2
    assert device.gestures == []


def test_tap_element_requires_selector(device, node, dump):
    result = _query(device, node, dump).tap_element()

    assert result == {"tapped": False, "error": "Must provide either text or resourceId"}
    assert device.commands == []


def test_tap_text_not_found(device, node, dump):
    result = _query(device, node, dump).tap_text("Checkout")

    assert result["tapped"] is False
    assert "not found" in result["error"]
    assert device.gestures == []


def test_is_element_visible_by_resource_id(device, node, dump):
    result = _query(device, node, dump).is_element_visible(resource_id="app:id/cancel")

    assert result["visible"] is True
    assert result["bounds"] == {
        "x": 400,
        "y": 200,
        "width": 200,
        "height": 50,
        "centerX": 500,
        "centerY": 225,
    }


def test_is_element_visible_missing(device, node, dump):
    assert _query(device, node, dump).is_element_visible(text="Nope") == {
        "visible": False,
        "bounds": None,
    }


def test_get_element_bounds(device, node, dump):
    result = _query(device, node, dump).get_element_bounds(resource_id="app:id/submit")

    assert result["found"] is True
    assert result["center"] == {"x": 200, "y": 225}


def test_get_focused_element(device, node, dump):
    result = _query(device, node, dump).get_focused_element()

    assert result["focused"] is True
    assert result["element"]["resource_id"] == "app:id/name"
    assert result["element"]["class"] == "EditText"


def test_list_clickable_elements(device, node, dump):
    result = _query(device, node, dump).list_clickable_elements()

    assert result["count"] == 2
    assert [element["text"] for element in result["elements"]] == ["Submit", "Cancel"]


def test_get_ui_tree_truncates_xml(device, node, dump):
    result = _query(device, node, dump).get_ui_tree(max_xml_chars=50)

    assert result["count"] == 4
    assert len(result["xml"]) == 50
    assert result["truncated"] is True
    assert '"Submit" at (200, 225)' in result["summary"]


def test_assert_screen_contains(device, node, dump):
    query = _query(device, node, dump)

    assert query.assert_screen_contains("cancel")["assertion"] == "PASS"
    assert query.assert_screen_contains("cancel", exact=True)["assertion"] == "FAIL"
    assert query.assert_screen_contains("Cancel", exact=True)["found"] is True


def test_get_ui_tree_reads_dump_without_node_tags(device):
    device.queue(
        'text="Inbox" class="android.widget.TextView" bounds="[0,100][540,200]" '
        'text="Sent" class="android.widget.TextView" bounds="[540,100][1080,200]"'
    )

    result = ScreenQuery(device).get_ui_tree()

    assert [element["text"] for element in result["elements"]] == ["Inbox", "Sent"]
    assert result["summary"] == '"Inbox" at (270, 150)\n"Sent" at (810, 150)'
