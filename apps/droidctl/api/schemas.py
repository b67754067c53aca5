from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class DeviceInfo(BaseModel):
    device_id: str
    status: str


class ToolInfo(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]


class ToolCallResponse(BaseModel):
    tool: str
    device_id: str
    result: Dict[str, Any]

    model_config = ConfigDict(extra="allow")


class ErrorDetail(BaseModel):
    message: str
    errors: Optional[List[Dict[str, Any]]] = None
