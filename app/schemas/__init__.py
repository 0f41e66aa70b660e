"""
Schemas package
Only the shared schemas are exposed; import the letter schemas directly
"""

from .commons_schemas import ErrorResponse, HealthResponse

# from .letter_schemas import LetterCreate, LetterUpdate, LetterResponse
