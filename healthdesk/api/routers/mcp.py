"""
Tool-call transport endpoints.

Routes:
- GET /{transport} - Server discovery document
- POST /{transport} - Plain {tool, arguments} call, or JSON-RPC 2.0 answered
  as a single Server-Sent Events frame

The transport segment (mcp, sse, http, ...) is informational only.

Dependencies: healthdesk.core.tools, healthdesk.models.tools
System role: MCP-compatible HTTP shim over the ToolRegistry
"""

import json
import logging
from datetime import datetime, timezone
from json import JSONDecodeError

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from healthdesk.api.deps import get_jsonrpc_server, get_tool_registry
from healthdesk.core.tools import JsonRpcToolServer, ToolRegistry
from healthdesk.models.tools import ServerInfoResponse, ToolCallRequest, ToolCallResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mcp"])


def sse_frame(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


@router.get("/{transport}", response_model=ServerInfoResponse)
async def server_info(
    transport: str,
    registry: ToolRegistry = Depends(get_tool_registry),
) -> ServerInfoResponse:
    """Describe the tool server and its tools."""
    return ServerInfoResponse(
        transport=transport,
        available_tools=registry.names,
        tools_count=len(registry.names),
    )


@router.post("/{transport}")
async def call_tool(
    transport: str,
    request: Request,
    registry: ToolRegistry = Depends(get_tool_registry),
    rpc_server: JsonRpcToolServer = Depends(get_jsonrpc_server),
):
    """
    Invoke a tool.

    Returns:
        200 ToolCallResponse, 400 for unknown tools or malformed bodies,
        text/event-stream frame for JSON-RPC requests
    """
    try:
        body = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON body"})
    if not isinstance(body, dict):
        return JSONResponse(status_code=400, content={"success": False, "error": "Request body must be an object"})

    if "jsonrpc" in body:
        method = str(body.get("method", ""))
        if method.startswith("notifications/"):
            return Response(status_code=202)
        logger.info("JSON-RPC request", extra={"transport": transport, "method": method})
        reply = await run_in_threadpool(rpc_server.handle, body)
        return Response(content=sse_frame(reply), media_type="text/event-stream")

    try:
        call = ToolCallRequest.model_validate(body)
    except PydanticValidationError:
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid tool call"})

    result = await run_in_threadpool(registry.dispatch, call.tool, call.arguments)
    if result.available_tools is not None:
        return JSONResponse(
            status_code=400,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )

    return ToolCallResponse(
        tool=call.tool or "",
        arguments=call.arguments,
        result=result.model_dump(by_alias=True, exclude_none=True),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
