# app/utils/errors.py
"""
Error taxonomy for the letter service.

Every failure a request can hit is raised as a ``LetterServiceError``
subclass and rendered by the handlers in ``app.main`` as
``{"error": ..., "code": ..., "details": ...}``.
"""

from typing import Any, Optional


class LetterServiceError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class UnauthorizedError(LetterServiceError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Unauthorized"


class FieldValidationError(LetterServiceError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid request"


class UserIdNotAllowedError(LetterServiceError):
    code = "USER_ID_NOT_ALLOWED"
    status_code = 400
    default_message = "User ID cannot be provided in request body"


class InvalidIdError(LetterServiceError):
    code = "INVALID_ID"
    status_code = 400
    default_message = "Valid ID is required"


class NotFoundError(LetterServiceError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Letter not found"


class ApiKeyMissingError(LetterServiceError):
    code = "API_KEY_MISSING"
    status_code = 500
    default_message = "Gemini API key not configured"


class GenerationError(LetterServiceError):
    code = "GENERATION_ERROR"
    status_code = 500
    default_message = "Failed to generate letter"


class InternalError(LetterServiceError):
    pass
