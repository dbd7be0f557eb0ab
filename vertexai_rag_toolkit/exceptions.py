"""
Custom exceptions for the Vertex AI RAG toolkit

Every error raised by a lifecycle call (create, read, update, delete) is
terminal for that call. A 404 on read or delete is not an error and never
surfaces as one of these.
"""

from typing import Any, Dict, Optional


class RagToolkitError(Exception):
    """Base exception for all toolkit errors"""
    pass


class ConfigurationError(RagToolkitError):
    """Raised when the provider configuration is missing or invalid"""
    pass


class ValidationError(RagToolkitError):
    """Raised when input validation fails"""
    pass


class RequestConstructionError(RagToolkitError):
    """Raised when a request URL or payload cannot be built"""
    pass


class TransportError(RagToolkitError):
    """Raised on DNS, connection or timeout failures"""
    pass


class ApiError(RagToolkitError):
    """Raised when the API answers with an unexpected status code."""
    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Status: {status_code} {reason}, Body: {body}")


class DecodingError(RagToolkitError):
    """Raised when a response body is not the JSON we expected"""
    pass


class MissingFieldError(DecodingError):
    """Raised when a required field is absent from a response"""
    def __init__(self, field: str, payload: Optional[Dict[str, Any]] = None):
        self.field = field
        self.payload = payload
        super().__init__(f"Missing '{field}' field")


class OperationFailedError(RagToolkitError):
    """Raised when a long-running operation finishes with an error."""
    def __init__(self, operation_name: str, error: Dict[str, Any]):
        self.operation_name = operation_name
        self.error = error
        message = error.get("message") if isinstance(error, dict) else None
        super().__init__(f"Operation {operation_name} failed: {message or error}")


class OperationTimeoutError(RagToolkitError):
    """Raised when a long-running operation is still pending after the poll budget."""
    def __init__(self, operation_name: str, attempts: int):
        self.operation_name = operation_name
        self.attempts = attempts
        super().__init__(f"Operation {operation_name} did not complete after {attempts} polls")


class OperationCancelledError(RagToolkitError):
    """Raised when polling is cancelled or its deadline passes"""
    pass
