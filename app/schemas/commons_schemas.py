# app/schemas/commons_schemas.py
"""
Shared schemas
"""

from pydantic import BaseModel
from typing import Any, Optional

# Error body returned by every failing endpoint
class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None

class HealthResponse(BaseModel):
    status: str
    database: str
    generation_configured: bool
