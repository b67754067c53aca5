import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..domains.device import DeviceActions, ScratchStore
from ..domains.observe import DEFAULT_DUMP_PATH
from ..domains.ports import DeviceHost
from ..domains.query import ScreenQuery
from ..domains.sync import Synchronizer, SyncTiming
from .errors import ToolArgumentsError, UnknownToolError

ToolResult = Dict[str, Any]


@dataclass
class ToolContext:
    host: DeviceHost
    query: ScreenQuery
    sync: Synchronizer
    actions: DeviceActions
    lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def for_host(
        cls,
        host: DeviceHost,
        timing: Optional[SyncTiming] = None,
        dump_path: str = DEFAULT_DUMP_PATH,
        scope: str = "default",
        scratch: Optional[ScratchStore] = None,
        screenshot_dir: Optional[str] = None,
        **sync_kwargs: Any,
    ) -> "ToolContext":
        return cls(
            host=host,
            query=ScreenQuery(host, dump_path=dump_path),
            sync=Synchronizer(host, timing=timing, dump_path=dump_path, **sync_kwargs),
            actions=DeviceActions(
                host, scope=scope, scratch=scratch, screenshot_dir=screenshot_dir
            ),
        )


Handler = Callable[[ToolContext, Any], ToolResult]


@dataclass
class Tool:
    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler

    def input_schema(self) -> Dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema(),
        }


class ToolRegistry:
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._tools: Dict[str, Tool] = {}
        self._logger = logger or logging.getLogger("droidctl.tools")

    def register(self, name: str, description: str, arguments: Type[BaseModel]):
        def decorator(handler: Handler) -> Handler:
            if name in self._tools:
                raise ValueError("tool already registered: {}".format(name))
            self._tools[name] = Tool(name, description, arguments, handler)
            return handler

        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> List[str]:
        return list(self._tools)

    def tools(self) -> List[Tool]:
        return list(self._tools.values())

    def get(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def validate(self, name: str, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        tool = self.get(name)
        try:
            return tool.arguments.model_validate(arguments or {})
        except ValidationError as exc:
            raise ToolArgumentsError(
                name, exc.errors(include_url=False, include_context=False)
            ) from exc

    def call(
        self, context: ToolContext, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> ToolResult:
        tool = self.get(name)
        params = self.validate(name, arguments)
        # one operation per device at a time
        with context.lock:
            self._logger.info("tool %s", name)
            return tool.handler(context, params)
