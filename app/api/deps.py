# app/api/deps.py
"""
Request dependencies: caller identity, store, chain, query parsing
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.chains.letter_chain import LetterChain
from app.services.auth_service import SessionGate, token_from_cookie
from app.services.letter_store import LetterStore
from app.utils.errors import FieldValidationError, InvalidIdError

bearer_scheme = HTTPBearer(auto_error=False)


def get_letter_store(request: Request) -> LetterStore:
    return request.app.state.letter_store


def get_letter_chain(request: Request) -> LetterChain:
    return request.app.state.letter_chain


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    """Bearer token first, then the auth provider's session cookie"""
    gate: SessionGate = request.app.state.session_gate
    if credentials:
        token = credentials.credentials
    else:
        cookie_name = request.app.state.settings.session_cookie_name
        token = token_from_cookie(request.cookies.get(cookie_name))
    return await gate.resolve(token)


def parse_letter_id(raw: Optional[str]) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidIdError()


def parse_page_param(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise FieldValidationError(f"Invalid {name} parameter")
