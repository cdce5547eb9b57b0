"""
Custom Exception Classes for the Resume Screener
"""
from typing import Dict, Any, List
from fastapi import HTTPException


class ScreenerBaseException(Exception):
    """Base exception for the Resume Screener"""

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


class InputError(ScreenerBaseException):
    """Raised when a required local input (file, role name, draft field) is missing"""

    def __init__(self, message: str, field: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        kwargs.setdefault('error_code', "INPUT_ERROR")
        super().__init__(message, details=details, **kwargs)


class SubmissionInProgressError(InputError):
    """Raised when a submission is attempted while another one is still running"""

    def __init__(self, message: str = "A submission is already in progress", **kwargs):
        super().__init__(message, error_code="SUBMISSION_IN_PROGRESS", **kwargs)


class ValidationError(ScreenerBaseException):
    """Raised when a rubric violates its submission invariants"""

    def __init__(self, message: str, problems: List[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if problems:
            details['problems'] = list(problems)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)
        self.problems = list(problems or [])


class NetworkError(ScreenerBaseException):
    """Raised when the scoring service cannot be reached"""

    def __init__(self, message: str, url: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if url:
            details['url'] = url
        super().__init__(message, error_code="NETWORK_ERROR", details=details, **kwargs)


class ServerError(ScreenerBaseException):
    """Raised when the scoring service answers with a failure status"""

    def __init__(self, message: str, status_code: int = None, body: str = None, url: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if status_code:
            details['status_code'] = status_code
        if body is not None:
            details['body'] = body
        if url:
            details['url'] = url
        super().__init__(message, error_code="SERVER_ERROR", details=details, **kwargs)
        self.status_code = status_code
        self.body = body


class DecodeError(ScreenerBaseException):
    """Raised when a successful response body cannot be parsed"""

    def __init__(self, message: str, url: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if url:
            details['url'] = url
        super().__init__(message, error_code="DECODE_ERROR", details=details, **kwargs)


class ConfigurationError(ScreenerBaseException):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, config_key: str = None, config_value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        if config_value is not None:
            details['config_value'] = str(config_value)
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


class SessionNotFoundError(ScreenerBaseException):
    """Raised when a workflow session id is unknown"""

    def __init__(self, session_id: str, **kwargs):
        super().__init__(
            f"Session {session_id} not found",
            error_code="SESSION_NOT_FOUND",
            details={"session_id": session_id},
            **kwargs
        )


# HTTP Exception Mapping
def map_to_http_exception(exc: ScreenerBaseException) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        SubmissionInProgressError: 409,
        InputError: 400,
        ValidationError: 422,
        ConfigurationError: 500,
        SessionNotFoundError: 404,
        NetworkError: 502,
        ServerError: 502,
        DecodeError: 502,
    }

    status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.to_dict(),
        "message": exc.message
    }

    return HTTPException(status_code=status_code, detail=detail)
