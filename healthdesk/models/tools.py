"""
Tool-call models.

Plain JSON envelope ({tool, arguments}) and JSON-RPC 2.0 request shapes
accepted by the tool-call transport, plus the uniform ToolResult.

Dependencies: pydantic
System role: Tool dispatcher and MCP transport contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SERVER_NAME = "Healthcare AI Assistant MCP Server"
SERVER_VERSION = "1.0.0"


class ToolResult(BaseModel):
    """Uniform result of a tool dispatch."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: Any | None = None
    error: str | None = None
    available_tools: list[str] | None = Field(default=None, alias="availableTools")


class ToolCallRequest(BaseModel):
    """Plain JSON tool invocation."""

    tool: str | None = None
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallResponse(BaseModel):
    """Plain JSON tool invocation result envelope."""

    tool: str
    arguments: dict[str, Any]
    result: dict[str, Any]
    timestamp: str
    server: str = f"{SERVER_NAME} v{SERVER_VERSION}"


class ServerInfoResponse(BaseModel):
    """GET /{transport} discovery document."""

    model_config = ConfigDict(populate_by_name=True)

    server: str = SERVER_NAME
    version: str = SERVER_VERSION
    transport: str
    status: str = "running"
    available_tools: list[str] = Field(alias="availableTools")
    tools_count: int = Field(alias="toolsCount")
    capabilities: list[str] = Field(
        default=[
            "Healthcare Document Management",
            "Insurance Policy Analysis",
            "Medical Cost Intelligence",
        ]
    )


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request."""

    jsonrpc: Literal["2.0"]
    id: int | str | None = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
