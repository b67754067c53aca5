from .catalog import REGISTRY
from .errors import ToolArgumentsError, ToolError, UnknownToolError
from .registry import Tool, ToolContext, ToolRegistry
from .sessions import ToolSessions, resolve_device_id

__all__ = [
    "REGISTRY",
    "ToolArgumentsError",
    "ToolError",
    "UnknownToolError",
    "Tool",
    "ToolContext",
    "ToolRegistry",
    "ToolSessions",
    "resolve_device_id",
]
