"""
Single-candidate screening pipeline: extract -> match -> questions (LangGraph)
"""
from typing import Any, TypedDict

from langgraph.graph import StateGraph, END

from app.models.models import JobPosting
from app.models.response import ScreeningReport, StageOutcome
from app.services.extractor import ResumeExtractor
from app.services.questions import InterviewQuestionGenerator
from app.services.scorer import JobMatchScorer
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


class ScreeningState(TypedDict, total=False):
    resume_text: str
    job: JobPosting
    extraction: Any
    match: Any
    questions: Any


class ScreeningPipeline:
    """Feeds the extractor's candidate into both the scorer and the question generator."""

    def __init__(
        self,
        extractor: ResumeExtractor,
        scorer: JobMatchScorer,
        question_generator: InterviewQuestionGenerator,
    ):
        self.extractor = extractor
        self.scorer = scorer
        self.question_generator = question_generator
        self.graph = self.build_graph()

    def node_extract(self, state: ScreeningState):
        return {"extraction": self.extractor.extract(state["resume_text"])}

    def node_match(self, state: ScreeningState):
        candidate = state["extraction"].value
        return {"match": self.scorer.score(candidate, state["job"])}

    def node_questions(self, state: ScreeningState):
        candidate = state["extraction"].value
        return {"questions": self.question_generator.generate(candidate, state["job"])}

    def build_graph(self):
        g = StateGraph(ScreeningState)
        g.add_node("extract", self.node_extract)
        g.add_node("match", self.node_match)
        g.add_node("questions", self.node_questions)
        g.set_entry_point("extract")
        g.add_edge("extract", "match")
        g.add_edge("match", "questions")
        g.add_edge("questions", END)
        return g.compile()

    def run(self, resume_text: str, job: JobPosting) -> ScreeningReport:
        final = self.graph.invoke({"resume_text": resume_text, "job": job})
        extraction, match, questions = final["extraction"], final["match"], final["questions"]

        report = ScreeningReport(
            candidate=extraction.value,
            match=match.value,
            questions=questions.value,
            stages=[
                StageOutcome(stage="extract", path=extraction.path, error=extraction.error),
                StageOutcome(stage="match", path=match.path, error=match.error),
                StageOutcome(stage="questions", path=questions.path, error=questions.error),
            ],
        )
        logger.info(
            f"Screened {report.candidate.name} for '{job.job_title}': "
            f"{report.match.match_percentage:g}% ({', '.join(s.path.value for s in report.stages)})"
        )
        return report
