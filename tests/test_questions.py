from app.models.models import ExtractedCandidate, ResultPath
from app.services.questions import InterviewQuestionGenerator
from app.utils.exceptions import ModelError


class TestInterviewQuestionGenerator:
    """Test cases for interview question generation"""

    def test_success(self, fake_client, job):
        client = fake_client([{
            "technical": ["How do you profile a slow FastAPI endpoint?"],
            "behavioral": ["Tell us about a conflict in your team."],
            "scenario_based": ["The database is down during a release. What now?"],
        }])
        result = InterviewQuestionGenerator(client).generate(ExtractedCandidate(name="John Doe"), job)

        assert result.ok
        assert not result.value.is_empty
        assert len(result.value.technical) == 1
        assert client.calls[0]["schema_name"] == "interview_questions"
        assert "Senior Python Developer" in client.calls[0]["prompt"]

    def test_partial_reply_defaults(self, fake_client, job):
        """Missing categories become empty lists, a bare string becomes one question"""
        client = fake_client([{"technical": "Explain Python generators, with an example."}])
        result = InterviewQuestionGenerator(client).generate(ExtractedCandidate(name="John Doe"), job)

        assert result.path == ResultPath.AI
        assert result.value.technical == ["Explain Python generators, with an example."]
        assert result.value.behavioral == []
        assert result.value.scenario_based == []

    def test_failure_returns_empty_lists(self, fake_client, job):
        client = fake_client([ModelError("LLM returned an empty message")])
        result = InterviewQuestionGenerator(client).generate(ExtractedCandidate(name="John Doe"), job)

        assert result.path == ResultPath.DEGRADED
        assert result.value.is_empty
        assert result.value.technical == []
        assert result.value.behavioral == []
        assert result.value.scenario_based == []
        assert "empty message" in result.error
