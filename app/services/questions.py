"""
Interview question generation (Agent 3)
"""
from app.helpers.prompts import QUESTIONS_PROMPT, QUESTIONS_SCHEMA, format_work_history
from app.models.models import AgentResult, ExtractedCandidate, InterviewQuestions, JobPosting, ResultPath
from app.services.llm import parse_json_object
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


class InterviewQuestionGenerator:
    def __init__(self, client, max_tokens: int = 1500):
        self.client = client
        self.max_tokens = max_tokens

    def generate(self, candidate: ExtractedCandidate, job: JobPosting) -> AgentResult[InterviewQuestions]:
        prompt = QUESTIONS_PROMPT.format(
            name=candidate.name,
            summary=candidate.summary,
            skills=", ".join(candidate.skills),
            total_experience=candidate.total_experience,
            work_history=format_work_history(candidate),
            job_title=job.job_title,
            required_skills=", ".join(job.required_skills),
            job_description=job.job_description,
        )
        try:
            raw = self.client.complete(
                prompt, max_tokens=self.max_tokens, schema=QUESTIONS_SCHEMA, schema_name="interview_questions"
            )
            data = parse_json_object(raw, model_name=getattr(self.client, "model_name", None))
            questions = InterviewQuestions(
                technical=data.get("technical"),
                behavioral=data.get("behavioral"),
                scenario_based=data.get("scenario_based"),
            )
        except Exception as e:
            logger.error(f"Error generating interview questions for {candidate.name}: {e}")
            return AgentResult[InterviewQuestions](
                value=InterviewQuestions(), path=ResultPath.DEGRADED, error=str(e)
            )

        if questions.is_empty:
            logger.info(f"No interview questions generated for {candidate.name}")
        return AgentResult[InterviewQuestions](value=questions, path=ResultPath.AI)
