from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.utils.utils import as_float, as_list, as_text

T = TypeVar("T")


class ResultPath(str, Enum):
    """Which branch produced an agent's output"""
    AI = "ai"
    FALLBACK = "fallback"
    DEGRADED = "degraded"


class AgentResult(BaseModel, Generic[T]):
    value: T
    path: ResultPath = ResultPath.AI
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.path == ResultPath.AI


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str = ""
    position: str = ""
    duration: str = ""
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: str = ""

    @field_validator("company", "position", "duration", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return as_text(v)

    @field_validator("start_year", "end_year", mode="before")
    @classmethod
    def _year(cls, v):
        year = as_float(v)
        return int(year) if year else None


class ExtractedCandidate(BaseModel):
    """Structured profile pulled out of one resume"""
    model_config = ConfigDict(frozen=True)

    name: str = "Unknown"
    email: str = ""
    portfolio_link: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    total_experience: str = "0 years total"
    years_experience: float = 0.0
    summary: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["name"] = as_text(data.get("name")) or "Unknown"
        data["email"] = as_text(data.get("email"))
        data["summary"] = as_text(data.get("summary"))
        data["portfolio_link"] = as_list(data.get("portfolio_link"))
        data["skills"] = as_list(data.get("skills"))
        data["years_experience"] = as_float(data.get("years_experience")) or 0.0

        experience = data.get("experience")
        if isinstance(experience, dict):
            # {"years": n, "projects": [{"name", "skills"}]} variant
            if not data["years_experience"]:
                data["years_experience"] = as_float(experience.get("years")) or 0.0
            experience = [
                {"position": p.get("name"), "description": ", ".join(as_list(p.get("skills")))}
                for p in (experience.get("projects") or []) if isinstance(p, dict)
            ]
        entries = []
        for e in experience if isinstance(experience, list) else []:
            if isinstance(e, (dict, ExperienceEntry)):
                entries.append(e)
            elif as_text(e):
                # bare "Engineer at X" strings
                entries.append({"description": as_text(e)})
        data["experience"] = entries

        total = as_text(data.get("total_experience"))
        if not total:
            years = data["years_experience"]
            total = f"{years:g} years total"
        data["total_experience"] = total
        return data


class JobPosting(BaseModel):
    job_title: str
    job_description: str = ""
    required_skills: List[str] = Field(default_factory=list)
    experience_required: str = ""
    additional_notes: str = ""

    @field_validator("job_description", "experience_required", "additional_notes", mode="before")
    @classmethod
    def _text(cls, v):
        return as_text(v)

    @field_validator("required_skills", mode="before")
    @classmethod
    def _skills(cls, v):
        return as_list(v)


class MatchResult(BaseModel):
    candidate_name: str = "Unknown"
    candidate_email: str = ""
    match_percentage: float = 0.0
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)


class InterviewQuestions(BaseModel):
    technical: List[str] = Field(default_factory=list)
    behavioral: List[str] = Field(default_factory=list)
    scenario_based: List[str] = Field(default_factory=list)

    @field_validator("technical", "behavioral", "scenario_based", mode="before")
    @classmethod
    def _questions(cls, v):
        return as_list(v, split=False)

    @property
    def is_empty(self) -> bool:
        return not (self.technical or self.behavioral or self.scenario_based)
