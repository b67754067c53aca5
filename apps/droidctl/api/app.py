import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from shared.errors import DeviceCommandError

from ..settings import load_settings
from ..tools import (
    REGISTRY,
    ToolArgumentsError,
    ToolSessions,
    UnknownToolError,
)
from .schemas import DeviceInfo, ErrorDetail, ToolCallResponse, ToolInfo

logger = logging.getLogger("droidctl.api")

router = APIRouter()

SETTINGS = load_settings()
sessions = ToolSessions(SETTINGS)


def get_sessions() -> ToolSessions:
    return sessions


def _error(status_code: int, message: str, errors=None) -> HTTPException:
    detail = ErrorDetail(message=message, errors=errors)
    return HTTPException(status_code=status_code, detail=detail.model_dump(exclude_none=True))


@router.get("/api/devices", response_model=list[DeviceInfo])
def list_devices(tool_sessions: ToolSessions = Depends(get_sessions)):
    try:
        return tool_sessions.list_devices()
    except DeviceCommandError as exc:
        raise _error(502, str(exc)) from exc


@router.get("/api/tools", response_model=list[ToolInfo])
def list_tools():
    return [tool.describe() for tool in REGISTRY.tools()]


@router.get("/api/tools/{name}", response_model=ToolInfo)
def get_tool(name: str):
    try:
        return REGISTRY.get(name).describe()
    except UnknownToolError as exc:
        raise _error(404, str(exc)) from exc


@router.post("/api/tools/{name}", response_model=ToolCallResponse)
def call_tool(
    name: str,
    arguments: Optional[Dict[str, Any]] = Body(default=None),
    device: Optional[str] = None,
    tool_sessions: ToolSessions = Depends(get_sessions),
):
    if name not in REGISTRY:
        raise _error(404, "unknown tool: {}".format(name))
    try:
        REGISTRY.validate(name, arguments)
        device_id = tool_sessions.resolve(device)
        context = tool_sessions.get(device_id)
        result = REGISTRY.call(context, name, arguments)
    except UnknownToolError as exc:
        raise _error(404, str(exc)) from exc
    except ToolArgumentsError as exc:
        raise _error(422, str(exc), errors=exc.errors) from exc
    except DeviceCommandError as exc:
        logger.exception("tool %s failed", name)
        raise _error(502, str(exc)) from exc
    except ValueError as exc:
        raise _error(400, str(exc)) from exc
    return {"tool": name, "device_id": device_id, "result": result}
