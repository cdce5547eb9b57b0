import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from screener.models.rubric import MatchResult, SkillEntry, WEIGHT_DIMENSIONS


class SubmissionPhase(str, Enum):
    """Upload/scoring states of a workflow"""
    IDLE = "idle"              # nothing selected
    SELECTING = "selecting"    # only one of file / role selected
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class DialogPhase(str, Enum):
    """Role-creation dialog states"""
    CLOSED = "closed"
    OPEN = "open"
    CREATING = "creating"


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


class DraftWeights(BaseModel):
    skills: Optional[float] = None
    experience: Optional[float] = None
    education: Optional[float] = None


class DraftView(BaseModel):
    """JSON-safe view of a RubricBuilder; unparseable weights show as null"""
    role: str
    skills: List[SkillEntry]
    experience_keywords: List[str]
    education: str
    weights: DraftWeights
    weight_total: Optional[float] = None
    invalid_weights: List[str] = []

    @classmethod
    def from_builder(cls, builder) -> "DraftView":
        rubric = builder.to_rubric()
        weights = rubric.weights
        return cls(
            role=rubric.role,
            skills=rubric.skills,
            experience_keywords=rubric.experience_keywords,
            education=rubric.education,
            weights=DraftWeights(**{dim: _finite_or_none(getattr(weights, dim)) for dim in WEIGHT_DIMENSIONS}),
            weight_total=_finite_or_none(weights.total),
            invalid_weights=weights.invalid_dimensions(),
        )


class RoleDialogState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: DialogPhase = DialogPhase.CLOSED
    draft: Optional[DraftView] = None
    error: Optional[Dict[str, Any]] = None


class WorkflowSnapshot(BaseModel):
    """Everything a front end needs to render one workflow"""
    model_config = ConfigDict(frozen=True)

    session_id: Optional[str] = None
    phase: SubmissionPhase
    resume_filename: Optional[str] = None
    role: Optional[str] = None
    result: Optional[MatchResult] = None
    error: Optional[Dict[str, Any]] = None
    catalog: List[str] = []
    catalog_loaded: bool = False
    catalog_error: Optional[Dict[str, Any]] = None
    role_dialog: RoleDialogState = RoleDialogState()

    @property
    def loading(self) -> bool:
        return self.phase == SubmissionPhase.SUBMITTING
