"""
Role-creation dialog endpoints: open, edit, confirm or cancel a role draft
"""
import math

from fastapi import APIRouter, Request

from screener.models.requests import DraftRoleName, SkillUpdate, KeywordUpdate, EducationUpdate, WeightUpdate
from screener.models.workflow import WorkflowSnapshot
from screener.routers.sessions import get_controller
from screener.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/{session_id}/draft", response_model=WorkflowSnapshot)
async def open_draft(session_id: str, request: Request):
    controller = get_controller(request, session_id)
    controller.open_role_dialog()
    return controller.snapshot()


@router.get("/{session_id}/draft", response_model=WorkflowSnapshot)
async def get_draft(session_id: str, request: Request):
    return get_controller(request, session_id).snapshot()


@router.delete("/{session_id}/draft", response_model=WorkflowSnapshot)
async def cancel_draft(session_id: str, request: Request):
    controller = get_controller(request, session_id)
    controller.cancel_role_dialog()
    return controller.snapshot()


@router.put("/{session_id}/draft/role", response_model=WorkflowSnapshot)
async def set_role_name(session_id: str, payload: DraftRoleName, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.set_role_name(payload.name)
    return controller.snapshot()


@router.post("/{session_id}/draft/skills", response_model=WorkflowSnapshot)
async def add_skill(session_id: str, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.add_skill()
    return controller.snapshot()


@router.put("/{session_id}/draft/skills/{index}", response_model=WorkflowSnapshot)
async def update_skill(session_id: str, index: int, payload: SkillUpdate, request: Request):
    controller = get_controller(request, session_id)
    draft = controller.draft
    if payload.name is not None:
        draft.set_skill_name(index, payload.name)
    if payload.synonyms is not None:
        draft.set_skill_synonyms(index, payload.synonyms)
    return controller.snapshot()


@router.delete("/{session_id}/draft/skills/{index}", response_model=WorkflowSnapshot)
async def remove_skill(session_id: str, index: int, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.remove_skill(index)
    return controller.snapshot()


@router.post("/{session_id}/draft/keywords", response_model=WorkflowSnapshot)
async def add_keyword(session_id: str, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.add_experience_keyword()
    return controller.snapshot()


@router.put("/{session_id}/draft/keywords/{index}", response_model=WorkflowSnapshot)
async def update_keyword(session_id: str, index: int, payload: KeywordUpdate, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.set_experience_keyword(index, payload.value)
    return controller.snapshot()


@router.delete("/{session_id}/draft/keywords/{index}", response_model=WorkflowSnapshot)
async def remove_keyword(session_id: str, index: int, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.remove_experience_keyword(index)
    return controller.snapshot()


@router.put("/{session_id}/draft/education", response_model=WorkflowSnapshot)
async def set_education(session_id: str, payload: EducationUpdate, request: Request):
    controller = get_controller(request, session_id)
    controller.draft.set_education(payload.text)
    return controller.snapshot()


@router.put("/{session_id}/draft/weights/{dimension}", response_model=WorkflowSnapshot)
async def set_weight(session_id: str, dimension: str, payload: WeightUpdate, request: Request):
    controller = get_controller(request, session_id)
    value = controller.draft.set_weight(dimension, payload.value)
    if math.isnan(value):
        logger.debug(f"Weight '{dimension}' in session {session_id} is not a number: {payload.value!r}")
    return controller.snapshot()


@router.post("/{session_id}/draft/confirm", response_model=WorkflowSnapshot)
async def confirm_draft(session_id: str, request: Request):
    """Create the drafted role; problems are reported in role_dialog.error"""
    controller = get_controller(request, session_id)
    return await controller.confirm_role()
