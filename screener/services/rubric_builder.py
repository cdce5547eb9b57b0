"""
Editable draft of a RoleRubric, one field edit at a time
"""
import re
from typing import List

from screener.models.rubric import RoleRubric, RubricWeights, SkillEntry, WEIGHT_DIMENSIONS
from screener.utils.exceptions import InputError


def parse_synonyms(raw: str) -> List[str]:
    """Split a comma-separated field, trimming each part but keeping empty ones."""
    return [part.strip() for part in raw.split(",")]


_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:Infinity|[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?))")


def parse_weight(raw) -> float:
    """Read the longest leading decimal number, so "0.5abc" is 0.5 and "1_0" is 1.

    Text with no leading number is NaN, never zero.
    """
    match = _LEADING_NUMBER.match(str(raw))
    if match is None:
        return float("nan")
    return float(match.group(1))


class RubricBuilder:
    """In-progress role definition owned by a single role-creation dialog"""

    def __init__(self):
        self.role = ""
        self.skills: List[SkillEntry] = [SkillEntry(name="", synonyms=[""])]
        self.experience_keywords: List[str] = [""]
        self.education = ""
        self.weights = RubricWeights()

    # -------- Role / education --------
    def set_role_name(self, name: str) -> None:
        self.role = name

    def set_education(self, text: str) -> None:
        self.education = text

    # -------- Skills --------
    def add_skill(self) -> int:
        self.skills.append(SkillEntry(name="", synonyms=[""]))
        return len(self.skills) - 1

    def remove_skill(self, index: int) -> None:
        self._check_index(self.skills, index, "skills")
        del self.skills[index]

    def set_skill_name(self, index: int, name: str) -> None:
        self._check_index(self.skills, index, "skills")
        self.skills[index] = self.skills[index].model_copy(update={"name": name})

    def set_skill_synonyms(self, index: int, raw_comma_separated: str) -> None:
        self._check_index(self.skills, index, "skills")
        self.skills[index] = self.skills[index].model_copy(
            update={"synonyms": parse_synonyms(raw_comma_separated)}
        )

    # -------- Experience keywords --------
    def add_experience_keyword(self) -> int:
        self.experience_keywords.append("")
        return len(self.experience_keywords) - 1

    def remove_experience_keyword(self, index: int) -> None:
        self._check_index(self.experience_keywords, index, "experience_keywords")
        del self.experience_keywords[index]

    def set_experience_keyword(self, index: int, value: str) -> None:
        self._check_index(self.experience_keywords, index, "experience_keywords")
        self.experience_keywords[index] = value

    # -------- Weights --------
    def set_weight(self, dimension: str, numeric_string) -> float:
        """Store the parsed weight; unparseable input is kept as NaN so that
        submission reports it instead of treating it as zero."""
        if dimension not in WEIGHT_DIMENSIONS:
            raise InputError(
                f"Unknown weight dimension '{dimension}', expected one of {', '.join(WEIGHT_DIMENSIONS)}",
                field="weights"
            )
        value = parse_weight(numeric_string)
        self.weights = self.weights.model_copy(update={dimension: value})
        return value

    @property
    def weight_total(self) -> float:
        return self.weights.total

    def to_rubric(self) -> RoleRubric:
        return RoleRubric(
            role=self.role,
            skills=[SkillEntry(name=s.name, synonyms=list(s.synonyms)) for s in self.skills],
            experience_keywords=list(self.experience_keywords),
            education=self.education,
            weights=self.weights.model_copy()
        )

    @staticmethod
    def _check_index(items: list, index: int, field: str) -> None:
        if not 0 <= index < len(items):
            raise InputError(f"No entry at index {index} in {field}", field=field)
