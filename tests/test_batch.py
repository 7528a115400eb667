import os

import pytest

from app.helpers import parsing
from app.models.ai_settings import ProcessingSettings
from app.models.models import AgentResult, MatchResult, ResultPath
from app.models.schemas import CandidateInput
from app.services.batch import match_candidates, process_resume_batch
from app.services.extractor import ResumeExtractor
from app.services.scorer import JobMatchScorer

AI_CANDIDATE = {
    "name": "John Doe",
    "email": "john.doe@email.com",
    "portfolio_link": [],
    "skills": ["Python", "React"],
    "experience": [],
    "total_experience": "6 years total",
    "summary": "Software engineer.",
}


@pytest.fixture
def settings(tmp_path):
    return ProcessingSettings(upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def unreadable_pdf(monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("not a PDF")
    monkeypatch.setattr(parsing, "pdf_extract", fail)
    monkeypatch.setattr(parsing, "_partition_text", fail)


class TestProcessResumeBatch:
    """Batch upload processing: per-file isolation and temp-file cleanup"""

    def test_mixed_batch(self, fake_client, sample_resume, settings, unreadable_pdf):
        extractor = ResumeExtractor(fake_client([AI_CANDIDATE]))
        files = [
            ("john.txt", sample_resume.encode()),
            ("broken.pdf", b"%PDF-garbage"),
            ("jane.txt", sample_resume.replace("John Doe", "Jane Roe").encode()),
        ]

        candidates, errors = process_resume_batch(files, extractor, settings)

        assert [c.filename for c in candidates] == ["john.txt", "jane.txt"]
        assert all(c.extraction_method == ResultPath.AI for c in candidates)
        assert len({c.id for c in candidates}) == 2
        assert len(errors) == 1
        assert errors[0].filename == "broken.pdf"
        assert "not a PDF" in errors[0].error
        assert os.listdir(settings.upload_dir) == []

    def test_binary_upload_is_processing_error(self, fake_client, sample_resume, settings):
        extractor = ResumeExtractor(fake_client([AI_CANDIDATE]))
        files = [
            ("john.txt", sample_resume.encode()),
            ("bin.txt", bytes(range(256)) * 4),
        ]

        candidates, errors = process_resume_batch(files, extractor, settings)

        assert [c.filename for c in candidates] == ["john.txt"]
        assert [e.filename for e in errors] == ["bin.txt"]
        assert "not readable text" in errors[0].error
        assert len(extractor.client.calls) == 1
        assert os.listdir(settings.upload_dir) == []

    def test_short_text_rejected(self, fake_client, settings):
        extractor = ResumeExtractor(fake_client([AI_CANDIDATE]))

        candidates, errors = process_resume_batch([("tiny.txt", b"Jane Roe\nPython")], extractor, settings)

        assert candidates == []
        assert "Could not extract enough text" in errors[0].error
        assert extractor.client.calls == []

    def test_unsupported_extension(self, fake_client, sample_resume, settings):
        extractor = ResumeExtractor(fake_client([AI_CANDIDATE]))

        candidates, errors = process_resume_batch([("resume.rtf", sample_resume.encode())], extractor, settings)

        assert candidates == []
        assert "Unsupported file type '.rtf'" in errors[0].error
        assert os.listdir(settings.upload_dir) == []

    def test_oversized_file(self, fake_client, sample_resume, tmp_path):
        settings = ProcessingSettings(upload_dir=str(tmp_path), max_upload_bytes=100)
        extractor = ResumeExtractor(fake_client([AI_CANDIDATE]))

        candidates, errors = process_resume_batch([("big.txt", sample_resume.encode())], extractor, settings)

        assert candidates == []
        assert "100 byte limit" in errors[0].error

    def test_model_failure_uses_fallback(self, fake_client, sample_resume, settings):
        extractor = ResumeExtractor(fake_client([RuntimeError("model offline")]))

        candidates, errors = process_resume_batch([("john.txt", sample_resume.encode())], extractor, settings)

        assert errors == []
        assert candidates[0].extraction_method == ResultPath.FALLBACK
        assert candidates[0].extraction_error == "model offline"
        assert candidates[0].name == "John Doe"
        assert candidates[0].email == "john.doe@email.com"


class ExplodingScorer(JobMatchScorer):
    """Raises for one named candidate, scores everyone else at 70"""

    def __init__(self, bad_name):
        self.bad_name = bad_name

    def score(self, candidate, job):
        if candidate.name == self.bad_name:
            raise RuntimeError("scorer crashed")
        return AgentResult[MatchResult](value=MatchResult(
            candidate_name=candidate.name, candidate_email=candidate.email, match_percentage=70,
        ))


class TestMatchCandidates:

    def test_failure_isolated_per_candidate(self, job):
        candidates = [
            CandidateInput(id="c1", name="Alice", email="alice@example.com"),
            CandidateInput(id="c2", name="Bob", email="bob@example.com"),
            CandidateInput(id="c3", name="Carol"),
        ]

        matches = match_candidates(candidates, job, ExplodingScorer("Bob"))

        assert [m.candidate_id for m in matches] == ["c1", "c2", "c3"]
        assert matches[0].match_percentage == 70
        assert matches[1].scoring_method == ResultPath.DEGRADED
        assert matches[1].match_percentage == 0
        assert matches[1].candidate_name == "Bob"
        assert matches[1].error == "scorer crashed"
        assert matches[2].scoring_method == ResultPath.AI

    def test_uses_model_reply(self, fake_client, job):
        reply = {
            "candidate_name": "Alice",
            "candidate_email": "alice@example.com",
            "match_percentage": 88,
            "strengths": {"description": ["Strong Python"]},
            "areas_for_improvement": {"description": ["No FastAPI"]},
        }
        scorer = JobMatchScorer(fake_client([reply]))

        matches = match_candidates([CandidateInput(id="c1", name="Alice")], job, scorer)

        assert matches[0].match_percentage == 88
        assert matches[0].strengths == ["Strong Python"]
        assert matches[0].areas_for_improvement == ["No FastAPI"]
