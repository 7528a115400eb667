"""
AI Settings Models for Configuration Management
"""
import os
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class LLMSettings(BaseModel):
    """LLM Configuration Settings"""
    model_name: str = Field(default=DEFAULT_MODEL, description="Chat-completion model name")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="OpenAI-compatible API base URL")
    api_key: Optional[str] = Field(default=None, description="Bearer API key")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="Generation temperature")
    timeout: int = Field(default=60, ge=1, le=300, description="Request timeout in seconds")
    json_schema_mode: bool = Field(default=True, description="Request JSON-schema constrained responses")

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "LLMSettings":
        return cls(
            model_name=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("LLM_BASE_URL", DEFAULT_BASE_URL),
            api_key=os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY") or None,
            temperature=float(os.getenv("LLM_TEMPERATURE", "0")),
            timeout=int(os.getenv("LLM_TIMEOUT", "60")),
            json_schema_mode=_env_bool("LLM_JSON_SCHEMA", True),
        )

    def public_view(self) -> Dict[str, Any]:
        """Settings as returned over HTTP, API key masked"""
        data = self.model_dump()
        key = data.pop("api_key")
        data["api_key_configured"] = bool(key)
        data["api_key_hint"] = f"...{key[-4:]}" if key and len(key) > 8 else None
        return data


class ProcessingSettings(BaseModel):
    """Resume upload and processing limits"""
    min_resume_chars: int = Field(default=50, ge=1, description="Shortest extracted text accepted as a resume")
    max_upload_files: int = Field(default=20, ge=1, le=100, description="Maximum files per upload request")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Maximum size of one uploaded file")
    upload_dir: str = Field(default="uploads", description="Directory for temporary uploads")
    allowed_extensions: List[str] = Field(default_factory=lambda: [".pdf", ".docx", ".txt"])

    @field_validator('allowed_extensions')
    @classmethod
    def normalize_extensions(cls, v):
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]

    @classmethod
    def from_env(cls) -> "ProcessingSettings":
        return cls(
            min_resume_chars=int(os.getenv("MIN_RESUME_CHARS", "50")),
            max_upload_files=int(os.getenv("MAX_UPLOAD_FILES", "20")),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
            upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        )


class AISettings(BaseModel):
    """Complete settings bundle handed to the agents"""
    llm_settings: LLMSettings = Field(default_factory=LLMSettings)
    processing_settings: ProcessingSettings = Field(default_factory=ProcessingSettings)
    extract_max_tokens: int = Field(default=2000, ge=1)
    match_max_tokens: int = Field(default=1500, ge=1)
    questions_max_tokens: int = Field(default=1500, ge=1)

    @classmethod
    def from_env(cls) -> "AISettings":
        return cls(
            llm_settings=LLMSettings.from_env(),
            processing_settings=ProcessingSettings.from_env(),
        )


class ModelStatus(BaseModel):
    """Model availability status"""
    model_name: str
    base_url: str
    is_available: bool
    status: str
    last_checked: datetime = Field(default_factory=datetime.utcnow)
    response_time_ms: Optional[float] = None
    error_message: Optional[str] = None
