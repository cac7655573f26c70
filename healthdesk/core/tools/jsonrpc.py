"""
JSON-RPC 2.0 adapter for the tool registry.

Answers the subset of the Model Context Protocol the assistant needs:
initialize, tools/list and tools/call.

Dependencies: pydantic, healthdesk.core.tools.registry
System role: Protocol translation between MCP clients and ToolRegistry
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from healthdesk.core.tools.registry import ToolRegistry
from healthdesk.models.tools import SERVER_NAME, SERVER_VERSION, JsonRpcRequest

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
TOOL_ERROR = -32000


def _error(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def _result(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _tool_text(data: Any) -> str:
    return data if isinstance(data, str) else str(data)


class JsonRpcToolServer:
    """Maps JSON-RPC requests onto ToolRegistry calls."""

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    def handle(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Handle one JSON-RPC request.

        Returns:
            dict: JSON-RPC response object (never raises)
        """
        try:
            request = JsonRpcRequest.model_validate(payload)
        except PydanticValidationError as e:
            return _error(payload.get("id"), INVALID_REQUEST, f"Invalid request: {e.errors()[0]['msg']}")

        if request.method == "initialize":
            return _result(
                request.id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                },
            )

        if request.method == "tools/list":
            return _result(
                request.id,
                {
                    "tools": [
                        {
                            "name": spec.name,
                            "description": spec.description,
                            "inputSchema": spec.input_schema,
                        }
                        for spec in self._registry.specs
                    ]
                },
            )

        if request.method == "tools/call":
            name = request.params.get("name")
            arguments = request.params.get("arguments") or {}
            result = self._registry.dispatch(name, arguments)
            if result.available_tools is not None:
                return _error(
                    request.id,
                    TOOL_ERROR,
                    f"{result.error}. Available tools: {', '.join(result.available_tools)}",
                    data={"availableTools": result.available_tools},
                )
            if result.success:
                return _result(
                    request.id,
                    {"content": [{"type": "text", "text": _tool_text(result.data)}]},
                )
            return _result(
                request.id,
                {"content": [{"type": "text", "text": result.error or ""}], "isError": True},
            )

        logger.warning("Unsupported JSON-RPC method", extra={"method": request.method})
        return _error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")
