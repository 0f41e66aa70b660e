# app/api/letter.py

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response

from app.api.deps import (
    get_current_user_id,
    get_letter_store,
    parse_letter_id,
    parse_page_param,
)
from app.schemas.letter_schemas import (
    DeleteLetterResponse,
    ExportRequest,
    LetterResponse,
    LetterSummaryResponse,
)
from app.services.export_service import EXPORTERS, MEDIA_TYPES, export_filename
from app.services.letter_store import DEFAULT_LIMIT, LetterStore
from app.services.validation_service import sanitize_create, sanitize_update
from app.utils.errors import FieldValidationError
from app.utils.logger import logger

router = APIRouter(tags=["letter"])


@router.get("/letters", response_model=None)
async def read_letters(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    """Single letter by ?id=, otherwise a paginated list"""
    if id:
        letter = await store.get_letter(parse_letter_id(id), user_id)
        return LetterResponse(**letter)

    letters = await store.list_letters(
        user_id,
        limit=parse_page_param("limit", limit, DEFAULT_LIMIT),
        offset=parse_page_param("offset", offset, 0),
        search=search
    )
    return [LetterResponse(**letter) for letter in letters]


@router.get("/letters/summary", response_model=LetterSummaryResponse)
async def letters_summary(
    search: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    total = await store.count_letters(user_id, search=search)
    return LetterSummaryResponse(total=total)


@router.post("/letters", response_model=LetterResponse, status_code=201)
async def create_letter(
    payload: Any = Body(...),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    """Save a letter (draft or generated)"""
    fields = sanitize_create(payload)
    letter = await store.create_letter(fields, user_id)
    return LetterResponse(**letter)


@router.put("/letters", response_model=LetterResponse)
async def update_letter(
    id: Optional[str] = Query(None),
    payload: Any = Body(...),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    letter_id = parse_letter_id(id)
    changes = sanitize_update(payload)
    letter = await store.update_letter(letter_id, user_id, changes)
    return LetterResponse(**letter)


@router.delete("/letters", response_model=DeleteLetterResponse)
async def delete_letter(
    id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    result = await store.delete_letter(parse_letter_id(id), user_id)
    return DeleteLetterResponse(**result)


def _attachment(content: str, fmt: str, applicant_name: Optional[str]) -> Response:
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise FieldValidationError(f"Unsupported export format: {fmt}")
    if not content or not content.strip():
        raise FieldValidationError("Letter has no content to export")

    filename = export_filename(applicant_name, fmt)
    return Response(
        content=exporter(content),
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/letters/export")
async def export_letter(
    id: Optional[str] = Query(None),
    format: str = Query("pdf"),
    user_id: str = Depends(get_current_user_id),
    store: LetterStore = Depends(get_letter_store)
):
    """Download a saved letter as PDF or DOCX"""
    letter = await store.get_letter(parse_letter_id(id), user_id)
    logger.info(f"Export requested: id={letter['id']} format={format}")
    return _attachment(letter["content"], format.lower(), letter["applicant_name"])


@router.post("/export")
async def export_draft(
    request: ExportRequest,
    user_id: str = Depends(get_current_user_id)
):
    """Download an unsaved draft"""
    logger.info(f"Draft export requested: user={user_id} format={request.format}")
    return _attachment(request.content, request.format, request.applicant_name)
