"""
Error Taxonomy for webtts.

Every failure of a synthesis request surfaces as one typed exception derived
from TTSError. Each carries a machine-readable code (see ErrorCode), a human
readable message and an optional details dictionary, and serializes to the
JSON error body used by the HTTP API.

Taxonomy:
    - ConfigurationError: No base URL configured (fatal, not retried)
    - ValidationError: Empty text, unsupported voice or audio format
      (raised before any network call)
    - TransportError: Non-200 HTTP status or connection failure
      (carries status_code when one was received)
    - RemoteServiceError: HTTP 200 with a text/plain body, i.e. the service
      reported an error in-band (message is the decoded body)

None of these are retried automatically.

Example:
    >>> try:
    ...     stream = service.synthesize("Hello", voice, AudioFormat.MP3)
    ... except TransportError as e:
    ...     print(e.status_code)
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """
    Standardized error codes for API responses and CLI output.
    """
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"   # No base URL
    TEXT_REQUIRED = "TEXT_REQUIRED"                   # Empty after trim
    VOICE_UNSUPPORTED = "VOICE_UNSUPPORTED"           # Not in voice table
    FORMAT_UNSUPPORTED = "FORMAT_UNSUPPORTED"         # No compatible codec
    VALIDATION_ERROR = "VALIDATION_ERROR"             # Generic validation failure
    TRANSPORT_ERROR = "TRANSPORT_ERROR"               # Non-200 / connection failure
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"     # In-band text/plain error
    INTERNAL_ERROR = "INTERNAL_ERROR"                 # Unexpected error


class TTSError(Exception):
    """
    Base exception for webtts errors.

    Attributes:
        message: Human-readable error message.
        code: Error code from ErrorCode class.
        details: Optional dictionary with additional context.
    """
    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to standardized error response dict for API."""
        result = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(TTSError):
    """Raised when the service has no base URL configured."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_MISSING, details)


class ValidationError(TTSError):
    """
    Raised when a synthesis request fails validation.

    The code narrows down which check failed (TEXT_REQUIRED,
    VOICE_UNSUPPORTED, FORMAT_UNSUPPORTED).

    Example:
        >>> raise ValidationError("The passed text is null or empty", ErrorCode.TEXT_REQUIRED)
    """
    def __init__(self, message: str, code: str = ErrorCode.VALIDATION_ERROR, details: Optional[Dict] = None):
        super().__init__(message, code, details)


class TransportError(TTSError):
    """
    Raised when the remote service cannot be read.

    Attributes:
        status_code: HTTP status received, or None when the request never
            produced a response (connection refused, timeout).
    """
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict] = None):
        details = dict(details or {})
        if status_code is not None:
            details.setdefault("status_code", status_code)
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, details)
        self.status_code = status_code


class RemoteServiceError(TTSError):
    """Raised when the service answers 200 with a text/plain error body."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.REMOTE_SERVICE_ERROR, details)
