"""
AI Settings Router - inspect the active LLM configuration and test connectivity
"""
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from app.models.ai_settings import AISettings, ModelStatus
from app.services.agents import get_ai_settings, get_llm_client
from app.services.llm import LLMClient
from app.utils.exceptions import HiringAIException
from app.utils.logging_config import get_logger

router = APIRouter(prefix="/ai-settings", tags=["ai-settings"])
logger = get_logger(__name__)


@router.get("/llm")
async def get_llm_settings(settings: AISettings = Depends(get_ai_settings)) -> Dict[str, Any]:
    """Get the active LLM settings (API key masked)"""
    return {
        "llm_settings": settings.llm_settings.public_view(),
        "processing_settings": settings.processing_settings.model_dump(),
        "max_tokens": {
            "extract": settings.extract_max_tokens,
            "match": settings.match_max_tokens,
            "questions": settings.questions_max_tokens,
        },
    }


@router.post("/llm/test", response_model=ModelStatus)
async def test_llm(client: LLMClient = Depends(get_llm_client)):
    """Send a tiny prompt to the configured model and report availability"""
    start_time = time.time()
    try:
        reply = await run_in_threadpool(client.ping)
        elapsed = (time.time() - start_time) * 1000
        logger.info(f"LLM {client.model_name} reachable in {elapsed:.0f}ms")
        return ModelStatus(
            model_name=client.model_name,
            base_url=client.settings.base_url,
            is_available=True,
            status=f"ok: {reply.strip()[:50]}",
            response_time_ms=elapsed,
        )
    except HiringAIException as e:
        elapsed = (time.time() - start_time) * 1000
        logger.warning(f"LLM {client.model_name} test failed: {e.message}")
        return ModelStatus(
            model_name=client.model_name,
            base_url=client.settings.base_url,
            is_available=False,
            status="error",
            response_time_ms=elapsed,
            error_message=e.message,
        )
