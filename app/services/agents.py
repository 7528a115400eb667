"""
FastAPI dependency providers that wire settings -> LLM client -> agents
"""
from functools import lru_cache

from fastapi import Depends

from app.models.ai_settings import AISettings
from app.services.extractor import ResumeExtractor
from app.services.graph import ScreeningPipeline
from app.services.llm import LLMClient
from app.services.questions import InterviewQuestionGenerator
from app.services.scorer import JobMatchScorer
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


@lru_cache()
def get_ai_settings() -> AISettings:
    settings = AISettings.from_env()
    if not settings.llm_settings.api_key:
        logger.warning("No LLM API key configured; AI calls will use fallback/degraded results")
    return settings


def get_llm_client(settings: AISettings = Depends(get_ai_settings)) -> LLMClient:
    return LLMClient(settings.llm_settings)


def get_extractor(
    client: LLMClient = Depends(get_llm_client),
    settings: AISettings = Depends(get_ai_settings),
) -> ResumeExtractor:
    return ResumeExtractor(client, max_tokens=settings.extract_max_tokens)


def get_scorer(
    client: LLMClient = Depends(get_llm_client),
    settings: AISettings = Depends(get_ai_settings),
) -> JobMatchScorer:
    return JobMatchScorer(client, max_tokens=settings.match_max_tokens)


def get_question_generator(
    client: LLMClient = Depends(get_llm_client),
    settings: AISettings = Depends(get_ai_settings),
) -> InterviewQuestionGenerator:
    return InterviewQuestionGenerator(client, max_tokens=settings.questions_max_tokens)


def get_screening_pipeline(
    extractor: ResumeExtractor = Depends(get_extractor),
    scorer: JobMatchScorer = Depends(get_scorer),
    question_generator: InterviewQuestionGenerator = Depends(get_question_generator),
) -> ScreeningPipeline:
    return ScreeningPipeline(extractor, scorer, question_generator)
