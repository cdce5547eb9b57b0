import math
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from screener.utils.exceptions import InputError, ValidationError

WEIGHT_DIMENSIONS = ("skills", "experience", "education")

ACCEPTED_RESUME_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


# -------- Role rubric --------
class SkillEntry(BaseModel):
    name: str = ""
    synonyms: List[str] = []


class RubricWeights(BaseModel):
    skills: float = 0.4
    experience: float = 0.4
    education: float = 0.2

    @property
    def total(self) -> float:
        # Not required to be 1.0; exposed so callers can enforce it.
        return self.skills + self.experience + self.education

    def invalid_dimensions(self) -> List[str]:
        return [
            dim for dim in WEIGHT_DIMENSIONS
            if not math.isfinite(getattr(self, dim)) or getattr(self, dim) < 0
        ]


class RoleRubric(BaseModel):
    """A job role and the weights used to score resumes against it.

    Instances may be incomplete while a draft is being edited; call
    ``check_submittable`` before sending one to the catalog.
    """
    role: str = ""
    skills: List[SkillEntry] = []
    experience_keywords: List[str] = []
    education: str = ""
    weights: RubricWeights = Field(default_factory=RubricWeights)

    def submission_problems(self) -> List[str]:
        problems = []
        if not self.role.strip():
            problems.append("role name is required")
        if not self.skills:
            problems.append("at least one skill is required")
        for index, skill in enumerate(self.skills):
            if not skill.name.strip():
                problems.append(f"skill {index + 1} needs a name")
        for dim in self.weights.invalid_dimensions():
            problems.append(f"{dim} weight must be a non-negative number")
        return problems

    def check_submittable(self) -> None:
        problems = self.submission_problems()
        if problems:
            raise ValidationError(
                f"Role '{self.role}' cannot be submitted: " + "; ".join(problems),
                problems=problems
            )

    def to_payload(self) -> Dict[str, Any]:
        """Wire form for POST /api/roles, synonyms trimmed"""
        payload = self.model_dump()
        for skill in payload["skills"]:
            skill["synonyms"] = [s.strip() for s in skill["synonyms"]]
        return payload


# -------- Match --------
class MatchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score_without_llm: float = Field(validation_alias="score_without_chatgpt")
    score_with_llm: float = Field(validation_alias="score_with_chatgpt")
    summary: str


class UploadedResume(BaseModel):
    filename: str
    content: bytes

    @property
    def content_type(self) -> str:
        return ACCEPTED_RESUME_TYPES.get(Path(self.filename).suffix.lower(), "application/octet-stream")

    @classmethod
    def create(cls, filename: str, content: bytes) -> "UploadedResume":
        if not filename or not filename.strip():
            raise InputError("Resume file name is missing", field="file")
        suffix = Path(filename).suffix.lower()
        if suffix not in ACCEPTED_RESUME_TYPES:
            raise InputError(
                f"Unsupported resume type '{suffix or filename}', expected .pdf or .docx",
                field="file"
            )
        return cls(filename=filename, content=content)
