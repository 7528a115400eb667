"""
Sequential batch processing for resume uploads and candidate matching
"""
import os
import tempfile
import uuid
from pathlib import Path
from typing import List, Tuple

from app.helpers.parsing import extract_text
from app.models.ai_settings import ProcessingSettings
from app.models.models import JobPosting, ResultPath
from app.models.response import CandidateMatch, ProcessingErrorItem, UploadedCandidate
from app.models.schemas import CandidateInput
from app.services.extractor import ResumeExtractor
from app.services.scorer import JobMatchScorer, degraded_match
from app.utils.exceptions import HiringAIException, ProcessingError, ValidationError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def write_temp_file(content: bytes, filename_hint: str, upload_dir: str) -> str:
    """Bytes → temporary file path (caller removes it)."""
    Path(upload_dir).mkdir(parents=True, exist_ok=True)
    ext = os.path.splitext(filename_hint)[1].lower()
    tf = tempfile.NamedTemporaryFile(delete=False, suffix=ext, dir=upload_dir)
    try:
        tf.write(content)
        tf.flush()
    finally:
        tf.close()
    return tf.name


def remove_temp_file(path: str) -> None:
    try:
        if path and os.path.exists(path):
            os.remove(path)
    except OSError as e:
        logger.warning(f"Could not delete temporary upload {path}: {e}")


def _process_one(
    filename: str, content: bytes, extractor: ResumeExtractor, settings: ProcessingSettings
) -> UploadedCandidate:
    if len(content) > settings.max_upload_bytes:
        raise ValidationError(f"File exceeds the {settings.max_upload_bytes} byte limit", field="size", value=len(content))

    tmp_path = None
    try:
        tmp_path = write_temp_file(content, filename, settings.upload_dir)
        text = extract_text(tmp_path, filename, allowed=settings.allowed_extensions)
        if len(text) < settings.min_resume_chars:
            raise ProcessingError(
                f"Could not extract enough text from file (got {len(text)} characters, "
                f"need at least {settings.min_resume_chars})"
            )
        result = extractor.extract(text)
        return UploadedCandidate(
            **result.value.model_dump(),
            id=uuid.uuid4().hex,
            filename=filename,
            extraction_method=result.path,
            extraction_error=result.error,
        )
    finally:
        if tmp_path:
            remove_temp_file(tmp_path)


def process_resume_batch(
    files: List[Tuple[str, bytes]],
    extractor: ResumeExtractor,
    settings: ProcessingSettings,
) -> Tuple[List[UploadedCandidate], List[ProcessingErrorItem]]:
    """Extract every uploaded resume in turn; per-file failures never stop the batch."""
    candidates: List[UploadedCandidate] = []
    errors: List[ProcessingErrorItem] = []

    for filename, content in files:
        try:
            candidate = _process_one(filename, content, extractor, settings)
            candidates.append(candidate)
            logger.info(f"Processed resume {filename} via {candidate.extraction_method.value}")
        except HiringAIException as e:
            logger.warning(f"Resume {filename} rejected: {e.message}")
            errors.append(ProcessingErrorItem(filename=filename, error=e.message))
        except Exception as e:
            logger.error(f"Unexpected error processing resume {filename}: {e}", exc_info=True)
            errors.append(ProcessingErrorItem(filename=filename, error=str(e) or e.__class__.__name__))

    logger.info(f"Resume batch finished: {len(candidates)} extracted, {len(errors)} failed")
    return candidates, errors


def match_candidates(
    candidates: List[CandidateInput], job: JobPosting, scorer: JobMatchScorer
) -> List[CandidateMatch]:
    """Score each candidate against one job, one at a time."""
    matches: List[CandidateMatch] = []
    for candidate in candidates:
        try:
            result = scorer.score(candidate, job)
            matches.append(CandidateMatch(
                **result.value.model_dump(),
                candidate_id=candidate.id,
                scoring_method=result.path,
                error=result.error,
            ))
        except Exception as e:
            logger.error(f"Error matching candidate {candidate.id or candidate.name}: {e}", exc_info=True)
            matches.append(CandidateMatch(
                **degraded_match(candidate, str(e)).model_dump(),
                candidate_id=candidate.id,
                scoring_method=ResultPath.DEGRADED,
                error=str(e),
            ))
    return matches
