"""
Job match scoring (Agent 2)
"""
import math
from typing import Any, List

from app.helpers.prompts import MATCH_PROMPT, MATCH_SCHEMA, format_work_history
from app.models.models import AgentResult, ExtractedCandidate, JobPosting, MatchResult, ResultPath
from app.services.llm import parse_json_object
from app.utils.exceptions import ModelError
from app.utils.logging_config import get_logger
from app.utils.utils import as_float, as_list, as_text

logger = get_logger(__name__)


def reason_list(x: Any) -> List[str]:
    """Flatten the shapes models use for strengths / gaps into a list of strings."""
    if isinstance(x, dict):
        if "description" in x:
            return reason_list(x.get("description"))
        reason = as_text(x.get("reason"))
        points = as_list(x.get("points"), split=False)
        if reason and points:
            return [f"{reason}: {'; '.join(points)}"]
        return [reason] if reason else points
    if isinstance(x, list):
        out = []
        for item in x:
            out.extend(reason_list(item) if isinstance(item, (dict, list)) else as_list(item, split=False))
        return out
    return as_list(x, split=False)


def clamp_percentage(value: float) -> float:
    return max(0.0, min(100.0, value))


def degraded_match(candidate: ExtractedCandidate, reason: str) -> MatchResult:
    return MatchResult(
        candidate_name=candidate.name or "Unknown",
        candidate_email=candidate.email or "",
        match_percentage=0,
        strengths=[],
        areas_for_improvement=[f"Error calculating match: {reason or 'Unknown error'}"],
    )


class JobMatchScorer:
    """Scores one candidate against one job posting."""

    def __init__(self, client, max_tokens: int = 1500):
        self.client = client
        self.max_tokens = max_tokens

    def build_prompt(self, candidate: ExtractedCandidate, job: JobPosting) -> str:
        return MATCH_PROMPT.format(
            name=candidate.name,
            email=candidate.email,
            summary=candidate.summary,
            skills=", ".join(candidate.skills),
            total_experience=candidate.total_experience,
            work_history=format_work_history(candidate),
            job_title=job.job_title,
            required_skills=", ".join(job.required_skills),
            job_description=job.job_description,
            experience_required=job.experience_required,
            additional_notes=job.additional_notes,
        )

    def score(self, candidate: ExtractedCandidate, job: JobPosting) -> AgentResult[MatchResult]:
        try:
            raw = self.client.complete(
                self.build_prompt(candidate, job),
                max_tokens=self.max_tokens,
                schema=MATCH_SCHEMA,
                schema_name="job_match",
            )
            data = parse_json_object(raw, model_name=getattr(self.client, "model_name", None))

            percentage = as_float(data.get("match_percentage"))
            if percentage is None or not math.isfinite(percentage):
                raise ModelError(f"Invalid match_percentage in model response: {data.get('match_percentage')!r}")
            if not 0 <= percentage <= 100:
                logger.warning(f"match_percentage {percentage} out of range for {candidate.name}, clamping")

            result = MatchResult(
                candidate_name=as_text(data.get("candidate_name")) or candidate.name or "Unknown",
                candidate_email=as_text(data.get("candidate_email")) or candidate.email or "",
                match_percentage=clamp_percentage(percentage),
                strengths=reason_list(data.get("strengths")),
                areas_for_improvement=reason_list(data.get("areas_for_improvement")),
            )
        except Exception as e:
            logger.error(f"Error calculating match for {candidate.name} / {job.job_title}: {e}")
            return AgentResult[MatchResult](
                value=degraded_match(candidate, str(e)), path=ResultPath.DEGRADED, error=str(e)
            )

        logger.info(f"Match for {result.candidate_name} on '{job.job_title}': {result.match_percentage:g}%")
        return AgentResult[MatchResult](value=result, path=ResultPath.AI)
