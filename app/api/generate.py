# app/api/generate.py
"""
Letter generation API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_current_user_id, get_letter_chain
from app.chains.letter_chain import LetterChain
from app.schemas.letter_schemas import GenerateResponse
from app.services.validation_service import sanitize_create
from app.utils.logger import logger

router = APIRouter(tags=["generate"])


@router.post("/generate", response_model=GenerateResponse)
async def generate_letter(
    payload: Any = Body(...),
    user_id: str = Depends(get_current_user_id),
    chain: LetterChain = Depends(get_letter_chain)
):
    """Draft a letter; saving it is a separate call"""
    fields = sanitize_create(payload)
    logger.info(f"Generate request: user={user_id} applicant={fields.applicant_name}")
    content = await chain.generate_letter(fields)
    return GenerateResponse(content=content)
