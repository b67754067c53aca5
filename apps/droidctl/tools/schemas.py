from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class NoArgs(ToolArgs):
    pass


class PointArgs(ToolArgs):
    x: int = Field(description="X coordinate")
    y: int = Field(description="Y coordinate")


class TapSafeArgs(PointArgs):
    avoid_status_bar: bool = Field(
        default=True,
        alias="avoidStatusBar",
        description="Avoid status bar area (default: true)",
    )
    avoid_nav_bar: bool = Field(
        default=True,
        alias="avoidNavBar",
        description="Avoid navigation bar area (default: true)",
    )


class MultiTapArgs(PointArgs):
    taps: int = Field(default=2, ge=1, description="Number of taps (default: 2)")
    interval: int = Field(
        default=100, ge=0, description="Interval between taps in ms (default: 100)"
    )


class LongPressArgs(PointArgs):
    duration: int = Field(
        default=1000, ge=1, description="Duration in milliseconds (default: 1000)"
    )


class SwipeArgs(ToolArgs):
    x1: int = Field(description="Starting X coordinate")
    y1: int = Field(description="Starting Y coordinate")
    x2: int = Field(description="Ending X coordinate")
    y2: int = Field(description="Ending Y coordinate")
    duration: int = Field(
        default=300, ge=1, description="Duration in milliseconds (default: 300)"
    )


class DragArgs(SwipeArgs):
    duration: int = Field(
        default=1000, ge=1, description="Duration in milliseconds (default: 1000)"
    )


class ScrollArgs(ToolArgs):
    direction: Literal["up", "down", "left", "right"] = Field(
        description="Direction to scroll"
    )
    amount: int = Field(
        default=500, ge=1, description="Scroll amount in pixels (default: 500)"
    )


class PinchZoomArgs(PointArgs):
    scale: float = Field(gt=0, description="Scale factor (>1 zoom in, <1 zoom out)")
    duration: int = Field(
        default=500, ge=1, description="Duration in milliseconds (default: 500)"
    )


class TextArgs(ToolArgs):
    text: str = Field(description="Text to type")


class ClearInputArgs(ToolArgs):
    max_chars: int = Field(
        default=100,
        ge=0,
        alias="maxChars",
        description="Maximum characters to delete (default: 100)",
    )


class SetTextArgs(ToolArgs):
    text: str = Field(description="Text to type after clearing")
    max_clear_chars: int = Field(
        default=100,
        ge=0,
        alias="maxClearChars",
        description="Maximum characters to clear (default: 100)",
    )


class PressKeyArgs(ToolArgs):
    key: Literal[
        "BACK",
        "HOME",
        "ENTER",
        "TAB",
        "DELETE",
        "MENU",
        "POWER",
        "VOLUME_UP",
        "VOLUME_DOWN",
    ] = Field(description="Key to press")


class PackageArgs(ToolArgs):
    package: str = Field(
        min_length=1, description="Package name of the app (e.g., com.android.chrome)"
    )


class InstallApkArgs(ToolArgs):
    path: str = Field(min_length=1, description="Path to the APK file")


class ListPackagesArgs(ToolArgs):
    filter: Optional[str] = Field(
        default=None, description="Filter packages by name (optional)"
    )


class GetLogsArgs(ToolArgs):
    filter: Optional[str] = Field(
        default=None, description="Filter logs by tag or keyword"
    )
    lines: int = Field(
        default=50, ge=1, description="Number of lines to retrieve (default: 50)"
    )
    level: Optional[Literal["V", "D", "I", "W", "E"]] = Field(
        default=None, description="Minimum log level"
    )


class RotateArgs(ToolArgs):
    orientation: Literal["portrait", "landscape"] = Field(
        description="Target orientation"
    )


class ClipboardArgs(ToolArgs):
    text: str = Field(description="Text to copy to clipboard")


class UiTreeArgs(ToolArgs):
    max_xml_chars: int = Field(
        default=5000,
        ge=0,
        alias="maxXmlChars",
        description="Maximum characters of raw XML to include (default: 5000)",
    )


class ListElementsArgs(ToolArgs):
    include_disabled: bool = Field(
        default=False,
        alias="includeDisabled",
        description="Include disabled elements (default: false)",
    )


class TapTextArgs(ToolArgs):
    text: str = Field(min_length=1, description="Text of the element to find and tap")
    exact: bool = Field(
        default=False,
        description="If true, match exact text. Default: false (partial match)",
    )


class ElementArgs(ToolArgs):
    text: Optional[str] = Field(default=None, description="Text to search for")
    resource_id: Optional[str] = Field(
        default=None, alias="resourceId", description="Resource ID to search for"
    )


class IndexedElementArgs(ElementArgs):
    index: int = Field(
        default=0, description="Index if multiple matches (0-based, default: 0)"
    )
    exact: bool = Field(default=False, description="Exact text match (default: false)")


class AssertArgs(ToolArgs):
    text: str = Field(min_length=1, description="Text that should be visible")
    exact: bool = Field(default=False, description="Exact match (default: false)")


class WaitForElementArgs(ToolArgs):
    text: str = Field(min_length=1, description="Text of the element to wait for")
    timeout: float = Field(
        default=10, ge=0, description="Timeout in seconds (default: 10)"
    )


class WaitForElementGoneArgs(ToolArgs):
    text: str = Field(
        min_length=1, description="Text of the element to wait for disappearance"
    )
    timeout: int = Field(
        default=10000, ge=0, description="Timeout in milliseconds (default: 10000)"
    )


class WaitForStableArgs(ToolArgs):
    timeout: int = Field(
        default=5000, ge=0, description="Timeout in milliseconds (default: 5000)"
    )
    check_interval: Optional[int] = Field(
        default=None,
        ge=1,
        alias="checkInterval",
        description="Check interval in milliseconds (default: 500)",
    )


class ScrollToTextArgs(ToolArgs):
    text: str = Field(min_length=1, description="Text to search for")
    direction: Literal["up", "down"] = Field(
        default="down", description="Scroll direction (default: down)"
    )
    max_scrolls: int = Field(
        default=10,
        ge=0,
        alias="maxScrolls",
        description="Maximum scroll attempts (default: 10)",
    )
