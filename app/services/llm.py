"""
Chat-completion client for an OpenAI-compatible endpoint (OpenRouter by default)
"""
import json
from typing import Any, Dict, Optional

import requests

from app.models.ai_settings import LLMSettings
from app.utils.exceptions import ConfigurationError, ExternalServiceError, ModelError
from app.utils.logging_config import get_logger, PerformanceMonitor
from app.utils.utils import strip_json_fences

logger = get_logger(__name__)


class LLMClient:
    """Single-attempt chat-completion calls; failures surface as exceptions."""

    def __init__(self, settings: LLMSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def model_name(self) -> str:
        return self.settings.model_name

    def _headers(self) -> Dict[str, str]:
        if not self.settings.api_key:
            raise ConfigurationError(
                "No API key configured for the language model",
                config_key="OPENROUTER_API_KEY",
            )
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(
        self,
        prompt: str,
        max_tokens: int,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.settings.model_name,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.temperature,
            "max_tokens": max_tokens,
        }
        if schema is not None and self.settings.json_schema_mode:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name or "response",
                    "strict": True,
                    "schema": schema,
                },
            }
        return payload

    def complete(
        self,
        prompt: str,
        max_tokens: int,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: Optional[str] = None,
    ) -> str:
        """Send one prompt and return the text of the first choice."""
        url = f"{self.settings.base_url}/chat/completions"
        payload = self.build_payload(prompt, max_tokens, schema, schema_name)
        headers = self._headers()

        with PerformanceMonitor(f"LLM call {schema_name or 'completion'}", logger, threshold_ms=15000):
            try:
                resp = self.session.post(url, json=payload, headers=headers, timeout=self.settings.timeout)
            except requests.RequestException as e:
                raise ExternalServiceError(
                    f"LLM request failed: {e}", service_name=self.settings.base_url, cause=e
                ) from e

        if resp.status_code >= 400:
            raise ExternalServiceError(
                f"LLM endpoint returned HTTP {resp.status_code}: {resp.text[:200]}",
                service_name=self.settings.base_url,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ModelError(
                "LLM response did not contain a message", model_name=self.model_name, cause=e
            ) from e

        if not content or not str(content).strip():
            raise ModelError("LLM returned an empty message", model_name=self.model_name)
        return str(content)

    def ping(self) -> str:
        return self.complete("Reply with the single word: pong", max_tokens=5)


def parse_json_object(text: str, model_name: str = None) -> Dict[str, Any]:
    """Decode the JSON object in a model reply or raise ModelError."""
    body = strip_json_fences(text or "")
    if not body:
        raise ModelError("Model reply contained no JSON object", model_name=model_name)
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ModelError(f"Model reply was not valid JSON: {e}", model_name=model_name, cause=e) from e
    if not isinstance(data, dict):
        raise ModelError("Model reply JSON was not an object", model_name=model_name)
    return data
