EXTRACT_PROMPT = """You are an expert HR resume parser. Extract the candidate information from the resume below and respond only with valid JSON.

INSTRUCTIONS:
1. Extract information exactly as written. If a value is not present use an empty string or an empty array.
2. Follow the JSON structure below exactly. Do not add or remove fields.
3. For experience, list each job with company, position, duration and a description of responsibilities and achievements.
4. Calculate total experience as a string like "X years total".
5. Copy the professional summary/profile/overview section as written.
6. List all technical skills as an array of strings.
7. List portfolio links (GitHub, LinkedIn, personal website) as an array of URLs.

RESUME TEXT:
{resume_text}

RESPONSE FORMAT (only JSON, no markdown):
{{
  "name": "string",
  "email": "string",
  "portfolio_link": ["url"],
  "skills": ["skill"],
  "experience": [
    {{
      "company": "string",
      "position": "string",
      "duration": "string (e.g. '2020 - Present' or '2 years')",
      "start_year": "number or null",
      "end_year": "number or null",
      "description": "string"
    }}
  ],
  "total_experience": "string (e.g. '4 years total')",
  "summary": "string"
}}
"""

MATCH_PROMPT = """You are an expert HR recruiter. Calculate how well the candidate matches the job posting and respond only with valid JSON.

CANDIDATE PROFILE:
Name: {name}
Email: {email}
Summary: {summary}
Skills: {skills}
Experience: {total_experience}
Work History:
{work_history}

JOB POSTING:
Title: {job_title}
Required Skills: {required_skills}
Description: {job_description}
Experience Required: {experience_required}
Additional Notes: {additional_notes}

INSTRUCTIONS:
1. Give a match percentage from 0 to 100 based on skills, experience and job requirements.
2. List 3-5 specific strengths, citing evidence from the resume.
3. List 3-5 specific, constructive areas for improvement for this role.
4. Use only the information above.

RESPONSE FORMAT (only JSON, no markdown):
{{
  "candidate_name": "string",
  "candidate_email": "string",
  "match_percentage": number,
  "strengths": {{"description": ["string"]}},
  "areas_for_improvement": {{"description": ["string"]}}
}}
"""

QUESTIONS_PROMPT = """You are an expert HR interviewer. Write interview questions for this candidate and job and respond only with valid JSON.

CANDIDATE PROFILE:
Name: {name}
Summary: {summary}
Skills: {skills}
Experience: {total_experience}
Work History:
{work_history}

JOB POSTING:
Title: {job_title}
Required Skills: {required_skills}
Description: {job_description}

INSTRUCTIONS:
1. 3-5 technical questions testing the required skills.
2. 3-5 behavioral questions on soft skills and team fit.
3. 2-3 scenario-based questions on problem solving in this role.
4. Tie questions to both the candidate's background and the job.

RESPONSE FORMAT (only JSON, no markdown):
{{
  "technical": ["string"],
  "behavioral": ["string"],
  "scenario_based": ["string"]
}}
"""

_STRINGS = {"type": "array", "items": {"type": "string"}}
_REASONS = {
    "type": "object",
    "properties": {"description": _STRINGS},
    "required": ["description"],
    "additionalProperties": False,
}

RESUME_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "email": {"type": "string"},
        "portfolio_link": _STRINGS,
        "skills": _STRINGS,
        "experience": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "company": {"type": "string"},
                    "position": {"type": "string"},
                    "duration": {"type": "string"},
                    "start_year": {"type": ["integer", "null"]},
                    "end_year": {"type": ["integer", "null"]},
                    "description": {"type": "string"},
                },
                "required": ["company", "position", "duration", "start_year", "end_year", "description"],
                "additionalProperties": False,
            },
        },
        "total_experience": {"type": "string"},
        "summary": {"type": "string"},
    },
    "required": ["name", "email", "portfolio_link", "skills", "experience", "total_experience", "summary"],
    "additionalProperties": False,
}

MATCH_SCHEMA = {
    "type": "object",
    "properties": {
        "candidate_name": {"type": "string"},
        "candidate_email": {"type": "string"},
        "match_percentage": {"type": "number"},
        "strengths": _REASONS,
        "areas_for_improvement": _REASONS,
    },
    "required": ["candidate_name", "candidate_email", "match_percentage", "strengths", "areas_for_improvement"],
    "additionalProperties": False,
}

QUESTIONS_SCHEMA = {
    "type": "object",
    "properties": {
        "technical": _STRINGS,
        "behavioral": _STRINGS,
        "scenario_based": _STRINGS,
    },
    "required": ["technical", "behavioral", "scenario_based"],
    "additionalProperties": False,
}


def format_work_history(candidate) -> str:
    lines = []
    for exp in candidate.experience:
        lines.append(f"- {exp.position} at {exp.company} ({exp.duration})\n  {exp.description}")
    return "\n".join(lines) or "Not specified"
