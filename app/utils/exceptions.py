"""
Custom Exception Classes for the Hiring AI API
"""
from typing import Dict, Any
from fastapi import HTTPException


class HiringAIException(Exception):
    """Base exception for the Hiring AI API"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(HiringAIException):
    """Raised when request data or an uploaded file is not acceptable"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        if value is not None:
            details['invalid_value'] = str(value)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)


class ModelError(HiringAIException):
    """Raised when the language model answers with something unusable"""

    def __init__(self, message: str, model_name: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if model_name:
            details['model_name'] = model_name
        super().__init__(message, error_code="MODEL_ERROR", details=details, **kwargs)


class ProcessingError(HiringAIException):
    """Raised when a resume file cannot be turned into text"""

    def __init__(self, message: str, filename: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if filename:
            details['filename'] = filename
        super().__init__(message, error_code="PROCESSING_ERROR", details=details, **kwargs)


class ConfigurationError(HiringAIException):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, config_key: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


class ExternalServiceError(HiringAIException):
    """Raised when the LLM endpoint cannot be reached or rejects the call"""

    def __init__(self, message: str, service_name: str = None, status_code: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if service_name:
            details['service_name'] = service_name
        if status_code:
            details['status_code'] = status_code
        super().__init__(message, error_code="EXTERNAL_SERVICE_ERROR", details=details, **kwargs)


# HTTP Exception Mapping
def map_to_http_exception(exc: HiringAIException) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        ValidationError: 400,
        ConfigurationError: 500,
        ModelError: 502,
        ProcessingError: 422,
        ExternalServiceError: 502,
    }

    status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.to_dict(),
        "message": exc.message
    }

    return HTTPException(status_code=status_code, detail=detail)
