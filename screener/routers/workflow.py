from fastapi import APIRouter, File, Request, UploadFile

from screener.models.requests import RoleSelection
from screener.models.rubric import UploadedResume
from screener.models.workflow import WorkflowSnapshot
from screener.routers.sessions import get_controller
from screener.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/{session_id}/resume", response_model=WorkflowSnapshot)
async def upload_resume(session_id: str, request: Request, file: UploadFile = File(...)):
    """Select the resume to score (.pdf or .docx)"""
    controller = get_controller(request, session_id)
    content = await file.read()
    resume = UploadedResume.create(file.filename, content)
    controller.select_resume(resume)

    logger.info(
        f"Resume {resume.filename} ({len(content)} bytes) selected in session {session_id}",
        extra={"request_id": getattr(request.state, 'request_id', 'unknown')}
    )
    return controller.snapshot()


@router.put("/{session_id}/role", response_model=WorkflowSnapshot)
async def select_role(session_id: str, payload: RoleSelection, request: Request):
    controller = get_controller(request, session_id)
    controller.select_role(payload.role)
    return controller.snapshot()


@router.post("/{session_id}/submit", response_model=WorkflowSnapshot)
async def submit(session_id: str, request: Request):
    """Score the selected resume; waits for the scoring service to answer"""
    controller = get_controller(request, session_id)
    return await controller.submit()


@router.post("/{session_id}/catalog/refresh", response_model=WorkflowSnapshot)
async def refresh_catalog(session_id: str, request: Request):
    controller = get_controller(request, session_id)
    await controller.load_catalog()
    return controller.snapshot()
