"""
Resume data extraction: LLM first, regex heuristics when the model lets us down
"""
import re
from datetime import date
from typing import Dict, List, Optional, Tuple

from app.helpers.prompts import EXTRACT_PROMPT, RESUME_SCHEMA
from app.models.models import AgentResult, ExperienceEntry, ExtractedCandidate, ResultPath
from app.services.llm import parse_json_object
from app.utils.exceptions import ModelError
from app.utils.logging_config import get_logger
from app.utils.utils import as_text

logger = get_logger(__name__)

FALLBACK_SUMMARY = "Extracted using fallback method due to AI service unavailability."
NO_SUMMARY = "No summary available"

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
URL_RE = re.compile(
    r"(?:https?://|www\.)[^\s,;|()<>]+"
    r"|(?<![\w/.@])(?:github\.com|gitlab\.com|linkedin\.com)/[^\s,;|()<>]+",
    re.IGNORECASE,
)
YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)
RANGE_RE = re.compile(
    r"((?:19|20)\d{2})\s*(?:-|–|—|to)\s*((?:19|20)\d{2}|present|current|now)\b", re.IGNORECASE
)
BULLET_RE = re.compile(r"^[-*•·]\s*")

SECTION_PATTERNS: Dict[str, str] = {
    "summary": r"(?:professional\s+|career\s+)?(?:summary|profile|overview)|objective",
    "skills": r"(?:technical\s+|key\s+|core\s+)?skills|technologies|tools",
    "experience": r"(?:professional\s+|work\s+|relevant\s+)?experience|(?:work|employment)\s+history",
    "other": (
        r"education|projects|certifications?|awards|achievements|languages|interests|hobbies"
        r"|references|publications|volunteer(?:ing)?(?:\s+experience)?|contact(?:\s+information)?"
    ),
}
_HEADING_RES = {k: re.compile(rf"(?:{v})", re.IGNORECASE) for k, v in SECTION_PATTERNS.items()}
_INLINE_RES = {k: re.compile(rf"^(?:{v})\s*:\s*(\S.*)$", re.IGNORECASE) for k, v in SECTION_PATTERNS.items()}


class ResumeExtractor:
    """Agent 1: turn raw resume text into an ExtractedCandidate."""

    def __init__(self, client, max_tokens: int = 2000):
        self.client = client
        self.max_tokens = max_tokens

    def extract(self, resume_text: str) -> AgentResult[ExtractedCandidate]:
        try:
            raw = self.client.complete(
                EXTRACT_PROMPT.format(resume_text=resume_text),
                max_tokens=self.max_tokens,
                schema=RESUME_SCHEMA,
                schema_name="resume_extraction",
            )
            data = parse_json_object(raw, model_name=getattr(self.client, "model_name", None))
            if not as_text(data.get("name")):
                raise ModelError("Model response has no candidate name")
            candidate = self._from_model(data)
        except Exception as e:
            logger.warning(f"Resume extraction via LLM failed, using fallback parser: {e}")
            return AgentResult[ExtractedCandidate](
                value=fallback_extract(resume_text), path=ResultPath.FALLBACK, error=str(e)
            )

        logger.info(f"Extracted resume data for {candidate.name} ({len(candidate.skills)} skills)")
        return AgentResult[ExtractedCandidate](value=candidate, path=ResultPath.AI)

    @staticmethod
    def _from_model(data: dict) -> ExtractedCandidate:
        data = dict(data)
        if not as_text(data.get("summary")):
            data["summary"] = NO_SUMMARY
        candidate = ExtractedCandidate.model_validate(data)
        if not as_text(data.get("total_experience")) and candidate.experience and not candidate.years_experience:
            years = sum(duration_years(e.duration)[0] for e in candidate.experience)
            candidate = candidate.model_copy(update={
                "years_experience": years,
                "total_experience": f"{years:g} years total",
            })
        return candidate


# ---------------------------------------------------------------------------
# Fallback parser
# ---------------------------------------------------------------------------

def _heading_kind(line: str) -> Optional[str]:
    s = line.strip().rstrip(":").strip()
    if not s or len(s) > 40:
        return None
    for kind, rx in _HEADING_RES.items():
        if rx.fullmatch(s):
            return kind
    return None


def _section(lines: List[str], kind: str) -> List[str]:
    """Lines belonging to the first section of the given kind (inline content included)."""
    for i, line in enumerate(lines):
        inline = _INLINE_RES[kind].match(line.strip())
        if inline:
            body = [inline.group(1)]
        elif _heading_kind(line) == kind:
            body = []
        else:
            continue
        for nxt in lines[i + 1:]:
            if _heading_kind(nxt) or any(rx.match(nxt.strip()) for rx in _INLINE_RES.values()):
                break
            body.append(nxt)
        return body
    return []


def _paragraphs(body: List[str]) -> List[List[str]]:
    out, cur = [], []
    for line in body:
        if line.strip():
            cur.append(line.strip())
        elif cur:
            out.append(cur)
            cur = []
    if cur:
        out.append(cur)
    return out


def guess_name(lines: List[str]) -> str:
    candidates = [l.strip() for l in lines if l.strip()][:3]
    for line in candidates:
        lowered = line.lower()
        if "@" in line or re.search(r"\d", line) or "http" in lowered or "www." in lowered:
            continue
        if _heading_kind(line) or not re.search(r"[A-Za-z]", line):
            continue
        words = line.split()
        if len(words) <= 5 and all(w[0] == w[0].upper() for w in words):
            return line
    return "Unknown"


def split_skills(text: str) -> List[str]:
    parts = re.split(r",\s*|;\s*|\s+\|\s+|\s+and\s+|\n", text)
    out = []
    for p in parts:
        skill = BULLET_RE.sub("", p.strip()).strip().rstrip(".")
        if len(skill) > 1 and skill not in out:
            out.append(skill)
    return out


def duration_years(duration: str) -> Tuple[float, Tuple[Optional[int], Optional[int]]]:
    """Years covered by a duration string, plus the (start, end) years if a range is given."""
    rng = RANGE_RE.search(duration or "")
    start = end = None
    if rng:
        start = int(rng.group(1))
        end = date.today().year if not rng.group(2).isdigit() else int(rng.group(2))
    explicit = YEARS_RE.findall(duration or "")
    if explicit:
        return sum(float(y) for y in explicit), (start, end)
    if start is not None and end >= start:
        return float(end - start), (start, end)
    return 0.0, (start, end)


def parse_experience(body: List[str]) -> List[ExperienceEntry]:
    entries = []
    for para in _paragraphs(body):
        if len(" ".join(para)) <= 20 or len(para) < 2:
            continue
        header = [p.strip() for p in para[0].split("|")]
        position = header[0] or "Not specified"
        company = header[1] if len(header) > 1 and header[1] else "Not specified"
        if len(header) > 2 and header[2]:
            duration, rest = header[2], para[1:]
        else:
            duration, rest = para[1], para[2:]
        description = " ".join(BULLET_RE.sub("", l) for l in rest) or "No description available"
        _, (start, end) = duration_years(duration)
        entries.append(ExperienceEntry(
            company=company, position=position, duration=duration,
            start_year=start, end_year=end, description=description,
        ))
    return entries


def fallback_extract(resume_text: str) -> ExtractedCandidate:
    """Deterministic heuristic extraction used when the LLM path fails."""
    logger.info("Using fallback method for resume data extraction")
    text = resume_text or ""
    lines = text.splitlines()

    email_match = EMAIL_RE.search(text)

    skills_body = _paragraphs(_section(lines, "skills"))
    skills = split_skills("\n".join(skills_body[0])) if skills_body else []

    summary_body = _paragraphs(_section(lines, "summary"))
    summary = " ".join(summary_body[0]) if summary_body else FALLBACK_SUMMARY

    experience = parse_experience(_section(lines, "experience"))
    years = sum(duration_years(e.duration)[0] for e in experience)

    links = []
    for m in URL_RE.finditer(text):
        url = m.group(0).rstrip(".")
        if url not in links:
            links.append(url)

    return ExtractedCandidate(
        name=guess_name(lines),
        email=email_match.group(0) if email_match else "",
        portfolio_link=links,
        skills=skills,
        experience=experience,
        total_experience=f"{years:g} years total",
        years_experience=years,
        summary=summary,
    )
