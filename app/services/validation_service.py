# app/services/validation_service.py
"""
Letter payload validation and sanitization

Raw request bodies are turned into LetterCreate / LetterUpdate models:
strings are trimmed, the referrer email is checked and lower-cased,
optional text collapses to None when blank.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic.alias_generators import to_snake

from app.schemas.letter_schemas import (
    FORBIDDEN_FIELDS,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    LetterCreate,
    LetterUpdate,
)
from app.utils.errors import FieldValidationError, UserIdNotAllowedError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_FIELD = "referrerEmail"

_MISSING = object()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _ensure_mapping(payload: Any) -> Mapping:
    if not isinstance(payload, Mapping):
        raise FieldValidationError("Request body must be a JSON object")
    return payload


def reject_user_id(payload: Mapping) -> None:
    """Ownership comes from the session only"""
    if any(field in payload for field in FORBIDDEN_FIELDS):
        raise UserIdNotAllowedError()


def _clean(value: Any) -> Optional[str]:
    # None/blank -> None, str -> stripped, anything else is a type error
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError
    value = value.strip()
    return value or None


def _collect(payload: Mapping, fields) -> Dict[str, Any]:
    """Trim the present fields, reporting non-string values together"""
    cleaned: Dict[str, Any] = {}
    bad_types: List[str] = []
    for field in fields:
        raw = payload.get(field, _MISSING)
        if raw is _MISSING:
            continue
        try:
            cleaned[field] = _clean(raw)
        except TypeError:
            bad_types.append(field)
    if bad_types:
        raise FieldValidationError(
            f"Fields must be strings: {', '.join(bad_types)}",
            details={"invalidFields": bad_types}
        )
    return cleaned


def _normalize_email(email: str) -> str:
    if not is_valid_email(email):
        raise FieldValidationError(
            f"Invalid email format for {EMAIL_FIELD}",
            details={"invalidFields": [EMAIL_FIELD]}
        )
    return email.lower()


def _to_model_fields(cleaned: Dict[str, Any]) -> Dict[str, Any]:
    return {to_snake(field): value for field, value in cleaned.items()}


def sanitize_create(payload: Any) -> LetterCreate:
    """Validate a full letter payload (create / generate)"""
    payload = _ensure_mapping(payload)
    reject_user_id(payload)

    missing = [field for field in REQUIRED_FIELDS if _is_blank(payload.get(field))]
    if missing:
        raise FieldValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details={"missingFields": missing}
        )

    cleaned = _collect(payload, REQUIRED_FIELDS + OPTIONAL_FIELDS)
    cleaned[EMAIL_FIELD] = _normalize_email(cleaned[EMAIL_FIELD])
    return LetterCreate(**_to_model_fields(cleaned))


def sanitize_update(payload: Any) -> LetterUpdate:
    """Validate a partial payload; absent fields stay unset"""
    payload = _ensure_mapping(payload)
    reject_user_id(payload)

    cleaned = _collect(payload, REQUIRED_FIELDS + OPTIONAL_FIELDS)

    emptied = [field for field in REQUIRED_FIELDS if field in cleaned and cleaned[field] is None]
    if emptied:
        raise FieldValidationError(
            f"Required fields cannot be empty: {', '.join(emptied)}",
            details={"emptyFields": emptied}
        )

    if EMAIL_FIELD in cleaned:
        cleaned[EMAIL_FIELD] = _normalize_email(cleaned[EMAIL_FIELD])

    return LetterUpdate(**_to_model_fields(cleaned))


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value
