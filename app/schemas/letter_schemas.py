# app/schemas/letter_schemas.py

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Wire names of the 16 letter-context fields, in form order
REQUIRED_FIELDS = (
    "applicantName",
    "relationship",
    "durationKnown",
    "institution",
    "targetProgram",
    "targetInstitution",
    "fieldDomain",
    "observedQualities",
    "achievements",
    "softTraits",
    "referrerName",
    "referrerTitle",
    "referrerEmail",
    "tone",
    "lorType",
    "recommendationStrength",
)

OPTIONAL_FIELDS = ("anecdote", "content")

# Ownership can never come from the payload
FORBIDDEN_FIELDS = ("userId", "user_id")

# Columns matched by the list search
SEARCH_FIELDS = ("applicant_name", "target_program", "target_institution", "field_domain")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Sanitized create payload
class LetterCreate(CamelModel):
    applicant_name: str
    relationship: str
    duration_known: str
    institution: str
    target_program: str
    target_institution: str
    field_domain: str
    observed_qualities: str
    achievements: str
    soft_traits: str
    referrer_name: str
    referrer_title: str
    referrer_email: str
    tone: str
    lor_type: str
    recommendation_strength: str
    anecdote: Optional[str] = None
    content: Optional[str] = None


# Sanitized partial update: only fields the caller set are applied
class LetterUpdate(CamelModel):
    applicant_name: Optional[str] = None
    relationship: Optional[str] = None
    duration_known: Optional[str] = None
    institution: Optional[str] = None
    target_program: Optional[str] = None
    target_institution: Optional[str] = None
    field_domain: Optional[str] = None
    observed_qualities: Optional[str] = None
    achievements: Optional[str] = None
    soft_traits: Optional[str] = None
    referrer_name: Optional[str] = None
    referrer_title: Optional[str] = None
    referrer_email: Optional[str] = None
    tone: Optional[str] = None
    lor_type: Optional[str] = None
    recommendation_strength: Optional[str] = None
    anecdote: Optional[str] = None
    content: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Persisted letter as returned to the client
class LetterResponse(LetterCreate):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime


class DeleteLetterResponse(CamelModel):
    message: str
    id: int


class LetterSummaryResponse(CamelModel):
    total: int


class GenerateResponse(CamelModel):
    content: str


class ExportRequest(CamelModel):
    content: str
    format: Literal["pdf", "docx"] = "pdf"
    applicant_name: Optional[str] = None
