import os

os.environ.setdefault("ENVIRONMENT", "testing")

import json
import pytest

from app.models.ai_settings import LLMSettings

SAMPLE_RESUME = """
John Doe
john.doe@email.com

PROFESSIONAL SUMMARY
Results-driven Software Engineer with 5 years of experience in developing scalable web applications using JavaScript, Python, and React. Skilled in Agile methodologies and CI/CD pipelines.

TECHNICAL SKILLS
JavaScript, Python, React, Node.js, Express, PostgreSQL, MongoDB, Docker, Kubernetes, AWS, Git, HTML, CSS

PROFESSIONAL EXPERIENCE
Senior Software Engineer | Tech Corp | 2020 - Present
- Led a team of 5 developers in building a customer portal using React and Node.js
- Implemented CI/CD pipelines reducing deployment time by 40%
- Developed RESTful APIs serving 10,000+ daily active users

Software Engineer | Innovate Ltd. | 2018 - 2020
- Developed and maintained e-commerce platform using Python and Django
- Integrated payment processing systems with Stripe and PayPal
- Collaborated with UX designers to implement responsive web designs

EDUCATION
B.S. in Computer Science | University of Technology | 2014 - 2018
"""


class FakeLLMClient:
    """Scripted stand-in for LLMClient.

    `replies` is a single reply, a list consumed in order (the last one
    repeats), or a dict keyed by schema_name holding either of those. A
    reply that is an Exception is raised; dicts are sent back as JSON text.
    """

    model_name = "fake-model"

    def __init__(self, replies=None):
        self.replies = replies if replies is not None else []
        self.calls = []
        self.settings = LLMSettings(api_key="sk-test-0000", model_name=self.model_name)

    def complete(self, prompt, max_tokens, schema=None, schema_name=None):
        self.calls.append({
            "prompt": prompt, "max_tokens": max_tokens,
            "schema": schema, "schema_name": schema_name,
        })
        reply = self.replies[schema_name] if isinstance(self.replies, dict) else self.replies
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if isinstance(reply, Exception):
            raise reply
        return reply if isinstance(reply, str) else json.dumps(reply)

    def ping(self):
        return self.complete("ping", max_tokens=5)


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def fake_client():
    return FakeLLMClient


@pytest.fixture
def job():
    from app.models.models import JobPosting
    return JobPosting(
        job_title="Senior Python Developer",
        job_description="Build and run backend services for our hiring platform.",
        required_skills=["Python", "FastAPI", "PostgreSQL"],
        experience_required="5+ years",
        additional_notes="Remote friendly",
    )
