from pydantic import BaseModel, Field
from typing import Optional, Union

# -------- Workflow --------
class RoleSelection(BaseModel):
    role: str = Field(..., description="Role name from the catalog")

# -------- Role draft --------
class DraftRoleName(BaseModel):
    name: str

class SkillUpdate(BaseModel):
    name: Optional[str] = None
    synonyms: Optional[str] = Field(default=None, description="Comma-separated synonyms, as typed")

class KeywordUpdate(BaseModel):
    value: str

class EducationUpdate(BaseModel):
    text: str

class WeightUpdate(BaseModel):
    # kept as typed; the draft stores NaN for anything that is not a number
    value: Union[float, str]
