"""
Session API endpoints.

Routes:
- GET /session - Current session info
- POST /session - initialize | clear | info
- DELETE /session - Clear all session documents

Dependencies: healthdesk.core.session_manager, healthdesk.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from healthdesk.api.deps import get_session_manager
from healthdesk.core.session_manager import SessionManager
from healthdesk.models.common import ErrorResponse, MessageResponse, SuccessResponse
from healthdesk.models.session import SessionActionRequest, SessionInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])

VALID_ACTIONS = ("initialize", "clear", "info")


@router.get("", response_model=SuccessResponse[SessionInfo])
async def get_session_info(
    session_manager: SessionManager = Depends(get_session_manager),
) -> SuccessResponse[SessionInfo]:
    """
    Get current session info.

    Returns:
        SuccessResponse[SessionInfo]: Session id, live document count, config, uptime

    Raises:
        HealthDeskException: Vector store unavailable (mapped by the app handler)
    """
    info = await run_in_threadpool(session_manager.get_info)
    return SuccessResponse[SessionInfo](data=info)


@router.post(
    "",
    response_model=SuccessResponse[SessionInfo] | MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def manage_session(
    request: SessionActionRequest,
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Initialize, clear or describe the session.

    Args:
        request: Action and optional config
        session_manager: Injected SessionManager

    Returns:
        MessageResponse for initialize/clear, SuccessResponse for info

    Raises:
        400: Unknown action
    """
    if request.action not in VALID_ACTIONS:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Invalid action. Use: initialize, clear, or info").model_dump(),
        )

    logger.info("Session action", extra={"action": request.action})

    if request.action == "initialize":
        await run_in_threadpool(session_manager.initialize, request.config)
        return MessageResponse(message="Session initialized successfully")

    if request.action == "clear":
        await run_in_threadpool(session_manager.clear_current)
        return MessageResponse(message="Session documents cleared successfully")

    info = await run_in_threadpool(session_manager.get_info)
    return SuccessResponse[SessionInfo](data=info)


@router.delete("", response_model=MessageResponse)
async def clear_session(
    session_manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Clear all session documents."""
    await run_in_threadpool(session_manager.clear_current)
    return MessageResponse(message="All session documents cleared successfully")
