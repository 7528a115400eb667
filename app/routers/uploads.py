from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.models.ai_settings import AISettings
from app.models.response import UploadResponse
from app.services.agents import get_ai_settings, get_extractor
from app.services.batch import process_resume_batch
from app.services.extractor import ResumeExtractor
from app.utils.logging_config import get_logger, log_api_call

router = APIRouter(prefix="/upload", tags=["upload"])
logger = get_logger(__name__)


@router.post("/resumes", response_model=UploadResponse)
@log_api_call("upload_resumes")
async def upload_resumes(
    resumes: Optional[List[UploadFile]] = File(None, description="Resume files (PDF, DOCX or TXT)"),
    extractor: ResumeExtractor = Depends(get_extractor),
    settings: AISettings = Depends(get_ai_settings),
):
    """Extract candidate profiles from a batch of uploaded resumes"""
    if not resumes:
        raise HTTPException(status_code=400, detail="No files uploaded")

    limits = settings.processing_settings
    if len(resumes) > limits.max_upload_files:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files: {len(resumes)} (maximum {limits.max_upload_files})",
        )

    files = []
    for upload in resumes:
        try:
            files.append((upload.filename or "resume", await upload.read()))
        finally:
            await upload.close()

    candidates, errors = await run_in_threadpool(process_resume_batch, files, extractor, limits)

    message = f"Processed {len(candidates)} of {len(files)} resumes"
    if errors:
        message += f" ({len(errors)} failed)"
    return UploadResponse(message=message, candidates=candidates, processing_errors=errors)
