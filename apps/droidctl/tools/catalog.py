from . import schemas
from .registry import ToolRegistry

REGISTRY = ToolRegistry()
tool = REGISTRY.register


# screen queries


@tool(
    "get_ui_tree",
    "Get the UI element tree of the device (like DOM but for Android). "
    "Returns elements with text and their coordinates.",
    schemas.UiTreeArgs,
)
def get_ui_tree(ctx, args):
    return ctx.query.get_ui_tree(max_xml_chars=args.max_xml_chars)


@tool(
    "list_clickable_elements",
    "List clickable elements sorted top-to-bottom, left-to-right",
    schemas.ListElementsArgs,
)
def list_clickable_elements(ctx, args):
    return ctx.query.list_clickable_elements(include_disabled=args.include_disabled)


@tool(
    "list_text_elements",
    "List elements that carry text, sorted top-to-bottom, left-to-right",
    schemas.ListElementsArgs,
)
def list_text_elements(ctx, args):
    return ctx.query.list_text_elements(include_disabled=args.include_disabled)


@tool("tap_text", "Find an element by its text content and tap on it", schemas.TapTextArgs)
def tap_text(ctx, args):
    return ctx.query.tap_text(args.text, exact=args.exact)


@tool(
    "tap_element",
    "Find and tap an element by text or resource-id",
    schemas.IndexedElementArgs,
)
def tap_element(ctx, args):
    return ctx.query.tap_element(
        text=args.text, resource_id=args.resource_id, index=args.index, exact=args.exact
    )


@tool(
    "is_element_visible",
    "Check if an element with specific text or resource-id is visible on screen",
    schemas.ElementArgs,
)
def is_element_visible(ctx, args):
    return ctx.query.is_element_visible(text=args.text, resource_id=args.resource_id)


@tool(
    "get_element_bounds",
    "Get the exact bounds and center coordinates of an element",
    schemas.IndexedElementArgs,
)
def get_element_bounds(ctx, args):
    return ctx.query.get_element_bounds(
        text=args.text, resource_id=args.resource_id, index=args.index, exact=args.exact
    )


@tool(
    "get_focused_element",
    "Get information about the currently focused UI element",
    schemas.NoArgs,
)
def get_focused_element(ctx, args):
    return ctx.query.get_focused_element()


@tool(
    "assert_screen_contains",
    "Assert that specific text is visible on screen (useful for testing)",
    schemas.AssertArgs,
)
def assert_screen_contains(ctx, args):
    return ctx.query.assert_screen_contains(args.text, exact=args.exact)


# synchronization


@tool(
    "wait_for_element",
    "Wait for a UI element with specific text to appear",
    schemas.WaitForElementArgs,
)
def wait_for_element(ctx, args):
    return ctx.sync.wait_for_appear(args.text, timeout_seconds=args.timeout).to_dict()


@tool(
    "wait_for_element_gone",
    "Wait for an element to disappear from the screen",
    schemas.WaitForElementGoneArgs,
)
def wait_for_element_gone(ctx, args):
    return ctx.sync.wait_for_disappear(args.text, timeout_ms=args.timeout).to_dict()


@tool(
    "wait_for_ui_stable",
    "Wait for the UI to stop changing (useful after animations)",
    schemas.WaitForStableArgs,
)
def wait_for_ui_stable(ctx, args):
    return ctx.sync.wait_for_stable(
        timeout_ms=args.timeout, check_interval_ms=args.check_interval
    ).to_dict()


@tool(
    "scroll_to_text",
    "Scroll the screen until an element with specific text is visible",
    schemas.ScrollToTextArgs,
)
def scroll_to_text(ctx, args):
    return ctx.sync.scroll_until_visible(
        args.text, direction=args.direction, max_attempts=args.max_scrolls
    ).to_dict()


# gestures


@tool("tap", "Tap at the specified coordinates on the screen", schemas.PointArgs)
def tap(ctx, args):
    return ctx.actions.tap(args.x, args.y)


@tool("double_tap", "Perform a double tap at the specified coordinates", schemas.PointArgs)
def double_tap(ctx, args):
    return ctx.actions.double_tap(args.x, args.y)


@tool("multi_tap", "Perform multiple rapid taps at the same position", schemas.MultiTapArgs)
def multi_tap(ctx, args):
    return ctx.actions.multi_tap(args.x, args.y, taps=args.taps, interval_ms=args.interval)


@tool(
    "long_press",
    "Perform a long press at the specified coordinates (useful for context menus)",
    schemas.LongPressArgs,
)
def long_press(ctx, args):
    return ctx.actions.long_press(args.x, args.y, duration_ms=args.duration)


@tool(
    "tap_safe",
    "Tap at coordinates while avoiding system navigation bars",
    schemas.TapSafeArgs,
)
def tap_safe(ctx, args):
    return ctx.actions.tap_safe(
        args.x,
        args.y,
        avoid_status_bar=args.avoid_status_bar,
        avoid_nav_bar=args.avoid_nav_bar,
    )


@tool("swipe", "Perform a swipe gesture on the screen", schemas.SwipeArgs)
def swipe(ctx, args):
    return ctx.actions.swipe(args.x1, args.y1, args.x2, args.y2, duration_ms=args.duration)


@tool(
    "drag",
    "Perform a drag gesture from one point to another (slower than swipe, for drag & drop)",
    schemas.DragArgs,
)
def drag(ctx, args):
    return ctx.actions.drag(args.x1, args.y1, args.x2, args.y2, duration_ms=args.duration)


@tool("scroll", "Scroll the screen in a direction", schemas.ScrollArgs)
def scroll(ctx, args):
    return ctx.actions.scroll(args.direction, amount=args.amount)


@tool(
    "pinch_zoom",
    "Approximate a pinch zoom with two sequential single-finger swipes",
    schemas.PinchZoomArgs,
)
def pinch_zoom(ctx, args):
    return ctx.actions.pinch_zoom(args.x, args.y, args.scale, duration_ms=args.duration)


# text input and keys


@tool("type_text", "Type text into the currently focused input field", schemas.TextArgs)
def type_text(ctx, args):
    return ctx.actions.type_text(args.text)


@tool("clear_input", "Clear the currently focused text input field", schemas.ClearInputArgs)
def clear_input(ctx, args):
    return ctx.actions.clear_input(max_chars=args.max_chars)


@tool("select_all", "Select all text in the currently focused input field", schemas.NoArgs)
def select_all(ctx, args):
    return ctx.actions.select_all()


@tool(
    "set_text",
    "Clear the current input field and type new text (combines clear + type)",
    schemas.SetTextArgs,
)
def set_text(ctx, args):
    return ctx.actions.set_text(args.text, max_clear_chars=args.max_clear_chars)


@tool("press_key", "Press a system key (BACK, HOME, ENTER, etc)", schemas.PressKeyArgs)
def press_key(ctx, args):
    return ctx.actions.press_key(args.key)


# apps


@tool("launch_app", "Launch an application by its package name", schemas.PackageArgs)
def launch_app(ctx, args):
    return ctx.actions.launch_app(args.package)


@tool("install_apk", "Install an APK file on the device", schemas.InstallApkArgs)
def install_apk(ctx, args):
    return ctx.actions.install_apk(args.path)


@tool("list_packages", "List installed packages on the device", schemas.ListPackagesArgs)
def list_packages(ctx, args):
    return ctx.actions.list_packages(filter=args.filter)


@tool("clear_app_data", "Clear all data for an application", schemas.PackageArgs)
def clear_app_data(ctx, args):
    return ctx.actions.clear_app_data(args.package)


@tool("force_stop", "Force stop an application", schemas.PackageArgs)
def force_stop(ctx, args):
    return ctx.actions.force_stop(args.package)


@tool("get_current_activity", "Get the currently focused activity/screen", schemas.NoArgs)
def get_current_activity(ctx, args):
    return ctx.actions.get_current_activity()


# device


@tool(
    "screenshot",
    "Take a screenshot of the device and return it as a base64 PNG",
    schemas.NoArgs,
)
def screenshot(ctx, args):
    return ctx.actions.screenshot()


@tool("get_logs", "Get device logs (logcat)", schemas.GetLogsArgs)
def get_logs(ctx, args):
    return ctx.actions.get_logs(filter=args.filter, lines=args.lines, level=args.level)


@tool("device_info", "Get information about the connected device", schemas.NoArgs)
def device_info(ctx, args):
    return ctx.actions.device_info()


@tool(
    "get_screen_size",
    "Get the screen dimensions and density of the device",
    schemas.NoArgs,
)
def get_screen_size(ctx, args):
    return ctx.actions.get_screen_size()


@tool(
    "rotate_device",
    "Rotate the device to portrait or landscape orientation",
    schemas.RotateArgs,
)
def rotate_device(ctx, args):
    return ctx.actions.rotate_device(args.orientation)


@tool("set_clipboard", "Set text to the device clipboard", schemas.ClipboardArgs)
def set_clipboard(ctx, args):
    return ctx.actions.set_clipboard(args.text)


@tool("get_clipboard", "Get the current device clipboard content", schemas.NoArgs)
def get_clipboard(ctx, args):
    return ctx.actions.get_clipboard()
