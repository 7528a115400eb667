from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from app.models.ai_settings import AISettings
from app.models.response import (
    ExtractResponse, MatchCandidatesResponse, QuestionsResponse, ScreeningReport
)
from app.models.schemas import (
    ExtractRequest, GenerateQuestionsRequest, MatchCandidatesRequest, ScreenRequest
)
from app.services.agents import (
    get_ai_settings, get_extractor, get_question_generator, get_scorer, get_screening_pipeline
)
from app.services.batch import match_candidates
from app.services.extractor import ResumeExtractor
from app.services.graph import ScreeningPipeline
from app.services.questions import InterviewQuestionGenerator
from app.services.scorer import JobMatchScorer
from app.utils.logging_config import get_logger, log_api_call

router = APIRouter(prefix="/ai", tags=["ai"])
logger = get_logger(__name__)


def _require_resume_text(text: str, settings: AISettings) -> str:
    text = (text or "").strip()
    minimum = settings.processing_settings.min_resume_chars
    if len(text) < minimum:
        raise HTTPException(
            status_code=400,
            detail=f"Resume text too short ({len(text)} characters, need at least {minimum})",
        )
    return text


@router.post("/extract-data", response_model=ExtractResponse)
@log_api_call("extract_data")
async def extract_data(
    payload: ExtractRequest,
    extractor: ResumeExtractor = Depends(get_extractor),
    settings: AISettings = Depends(get_ai_settings),
):
    """Extract a structured candidate profile from plain resume text"""
    text = _require_resume_text(payload.resume_text, settings)
    result = await run_in_threadpool(extractor.extract, text)
    return ExtractResponse(candidate=result.value, extraction_method=result.path, error=result.error)


@router.post("/match-candidates", response_model=MatchCandidatesResponse)
@log_api_call("match_candidates")
async def match_candidates_route(
    payload: MatchCandidatesRequest,
    scorer: JobMatchScorer = Depends(get_scorer),
):
    """Score every candidate against one job posting"""
    matches = await run_in_threadpool(match_candidates, payload.candidates, payload.job, scorer)
    return MatchCandidatesResponse(job_title=payload.job.job_title, matches=matches)


@router.post("/generate-questions", response_model=QuestionsResponse)
@log_api_call("generate_questions")
async def generate_questions(
    payload: GenerateQuestionsRequest,
    generator: InterviewQuestionGenerator = Depends(get_question_generator),
):
    """Generate technical, behavioral and scenario-based interview questions"""
    result = await run_in_threadpool(generator.generate, payload.candidate, payload.job)
    return QuestionsResponse(
        questions=result.value,
        generation_method=result.path,
        generated=not result.value.is_empty,
        error=result.error,
    )


@router.post("/screen", response_model=ScreeningReport)
@log_api_call("screen")
async def screen(
    payload: ScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_screening_pipeline),
    settings: AISettings = Depends(get_ai_settings),
):
    """Extract, score and prepare interview questions for one resume in a single call"""
    text = _require_resume_text(payload.resume_text, settings)
    return await run_in_threadpool(pipeline.run, text, payload.job)
