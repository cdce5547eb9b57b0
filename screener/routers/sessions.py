from fastapi import APIRouter, Request
from typing import List

from screener.models.workflow import WorkflowSnapshot
from screener.services.session_manager import SessionManager
from screener.services.workflow import WorkflowController
from screener.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_controller(request: Request, session_id: str) -> WorkflowController:
    return get_session_manager(request).get(session_id)


@router.post("", response_model=WorkflowSnapshot)
async def create_session(request: Request):
    """Start a new workflow; the role catalog is fetched before returning"""
    controller = await get_session_manager(request).create_session()
    return controller.snapshot()


@router.get("", response_model=List[str])
async def list_sessions(request: Request):
    """Ids of all open sessions"""
    return get_session_manager(request).session_ids()


@router.get("/{session_id}", response_model=WorkflowSnapshot)
async def get_session(session_id: str, request: Request):
    return get_controller(request, session_id).snapshot()


@router.delete("/{session_id}", status_code=204)
async def close_session(session_id: str, request: Request):
    request_id = getattr(request.state, 'request_id', 'unknown')
    get_session_manager(request).close(session_id)
    logger.info(f"Session closed: {session_id}", extra={"request_id": request_id})
