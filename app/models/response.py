# models/response.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.models.models import (
    ExtractedCandidate, InterviewQuestions, MatchResult, ResultPath
)


class ProcessingErrorItem(BaseModel):
    filename: str
    error: str


class UploadedCandidate(ExtractedCandidate):
    id: str
    filename: str
    extraction_method: ResultPath = ResultPath.AI
    extraction_error: Optional[str] = None


class UploadResponse(BaseModel):
    message: str
    candidates: List[UploadedCandidate] = Field(default_factory=list)
    processing_errors: List[ProcessingErrorItem] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    candidate: ExtractedCandidate
    extraction_method: ResultPath
    error: Optional[str] = None


class CandidateMatch(MatchResult):
    candidate_id: Optional[str] = None
    scoring_method: ResultPath = ResultPath.AI
    error: Optional[str] = None


class MatchCandidatesResponse(BaseModel):
    job_title: str
    matches: List[CandidateMatch] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class QuestionsResponse(BaseModel):
    questions: InterviewQuestions
    generation_method: ResultPath
    generated: bool
    error: Optional[str] = None


class StageOutcome(BaseModel):
    stage: str
    path: ResultPath
    error: Optional[str] = None


class ScreeningReport(BaseModel):
    candidate: ExtractedCandidate
    match: MatchResult
    questions: InterviewQuestions
    stages: List[StageOutcome] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
