from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.models import ExtractedCandidate, JobPosting


# -------- Candidates --------
class CandidateInput(ExtractedCandidate):
    """Candidate profile as sent back by the client (usually an upload result)"""
    id: Optional[str] = None


# -------- AI requests --------
class ExtractRequest(BaseModel):
    resume_text: str = Field(..., description="Plain resume text")


class MatchCandidatesRequest(BaseModel):
    candidates: List[CandidateInput] = Field(default_factory=list)
    job: JobPosting


class GenerateQuestionsRequest(BaseModel):
    candidate: CandidateInput
    job: JobPosting


class ScreenRequest(BaseModel):
    resume_text: str
    job: JobPosting
