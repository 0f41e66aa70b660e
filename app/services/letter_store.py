# app/services/letter_store.py
"""
Per-user letter persistence
SQLAlchemy async CRUD, every query scoped by (LETTER_ID, USER_ID)
"""

from typing import Dict, List, Optional
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from app.models import Base, Letter, build_engine, build_session_factory, utcnow
from app.schemas.letter_schemas import SEARCH_FIELDS, LetterCreate, LetterUpdate
from app.utils.errors import FieldValidationError, NotFoundError
from app.utils.logger import logger

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# signed 64-bit, the widest integer the drivers bind
MAX_DB_INT = 2 ** 63 - 1


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _column(field: str):
    return getattr(Letter, field.upper())


def _check_page(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_DB_INT:
        raise FieldValidationError(f"Invalid {name} parameter")
    return value


class LetterStore:
    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.async_session = build_session_factory(self.engine)
        logger.info("LetterStore initialized")

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def close(self):
        await self.engine.dispose()
        logger.info("Database connection closed")

    @staticmethod
    def _to_dict(letter: Letter) -> Dict:
        return {
            "id": letter.LETTER_ID,
            "user_id": letter.USER_ID,
            "applicant_name": letter.APPLICANT_NAME,
            "relationship": letter.RELATIONSHIP,
            "duration_known": letter.DURATION_KNOWN,
            "institution": letter.INSTITUTION,
            "target_program": letter.TARGET_PROGRAM,
            "target_institution": letter.TARGET_INSTITUTION,
            "field_domain": letter.FIELD_DOMAIN,
            "observed_qualities": letter.OBSERVED_QUALITIES,
            "achievements": letter.ACHIEVEMENTS,
            "soft_traits": letter.SOFT_TRAITS,
            "anecdote": letter.ANECDOTE,
            "referrer_name": letter.REFERRER_NAME,
            "referrer_title": letter.REFERRER_TITLE,
            "referrer_email": letter.REFERRER_EMAIL,
            "tone": letter.TONE,
            "lor_type": letter.LOR_TYPE,
            "recommendation_strength": letter.RECOMMENDATION_STRENGTH,
            "content": letter.CONTENT,
            "created_at": _as_utc(letter.CREATED_AT),
            "updated_at": _as_utc(letter.UPDATED_AT),
        }

    @staticmethod
    def _owned(letter_id: int, user_id: str):
        if not -MAX_DB_INT <= letter_id <= MAX_DB_INT:
            raise NotFoundError()
        return (Letter.LETTER_ID == letter_id, Letter.USER_ID == user_id)

    @staticmethod
    def _search_filter(search: Optional[str]):
        if not search:
            return None
        term = search.lower()
        return or_(*(
            func.lower(_column(field)).contains(term, autoescape=True)
            for field in SEARCH_FIELDS
        ))

    async def create_letter(self, fields: LetterCreate, user_id: str) -> Dict:
        now = utcnow()
        values = {field.upper(): value for field, value in fields.model_dump().items()}
        try:
            async with self.async_session() as session:
                async with session.begin():
                    letter = Letter(USER_ID=user_id, CREATED_AT=now, UPDATED_AT=now, **values)
                    session.add(letter)
                    await session.flush()
                    result = self._to_dict(letter)
        except SQLAlchemyError as e:
            logger.error(f"Letter create failed: user={user_id} {e}")
            raise
        logger.info(f"Letter created: id={result['id']} user={user_id}")
        return result

    async def get_letter(self, letter_id: int, user_id: str) -> Dict:
        async with self.async_session() as session:
            query = select(Letter).where(*self._owned(letter_id, user_id))
            result = await session.execute(query)
            letter = result.scalar_one_or_none()
            if not letter:
                raise NotFoundError()
            return self._to_dict(letter)

    async def list_letters(
        self,
        user_id: str,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        search: Optional[str] = None
    ) -> List[Dict]:
        limit = min(_check_page("limit", limit), MAX_LIMIT)
        offset = _check_page("offset", offset)

        query = select(Letter).where(Letter.USER_ID == user_id)
        search_filter = self._search_filter(search)
        if search_filter is not None:
            query = query.where(search_filter)
        query = query.order_by(Letter.LETTER_ID).limit(limit).offset(offset)

        async with self.async_session() as session:
            result = await session.execute(query)
            return [self._to_dict(letter) for letter in result.scalars().all()]

    async def count_letters(self, user_id: str, search: Optional[str] = None) -> int:
        query = select(func.count(Letter.LETTER_ID)).where(Letter.USER_ID == user_id)
        search_filter = self._search_filter(search)
        if search_filter is not None:
            query = query.where(search_filter)

        async with self.async_session() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def update_letter(self, letter_id: int, user_id: str, changes: LetterUpdate) -> Dict:
        values = {field.upper(): value for field, value in changes.changes().items()}
        values["UPDATED_AT"] = utcnow()

        async with self.async_session() as session:
            async with session.begin():
                # a single conditional UPDATE: a row deleted meanwhile matches nothing
                result = await session.execute(
                    update(Letter)
                    .where(*self._owned(letter_id, user_id))
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise NotFoundError()

                fetched = await session.execute(
                    select(Letter)
                    .where(*self._owned(letter_id, user_id))
                    .execution_options(populate_existing=True)
                )
                letter = fetched.scalar_one()
                updated = self._to_dict(letter)

        logger.info(f"Letter updated: id={letter_id} fields={sorted(values)}")
        return updated

    async def delete_letter(self, letter_id: int, user_id: str) -> Dict:
        async with self.async_session() as session:
            async with session.begin():
                result = await session.execute(
                    delete(Letter).where(*self._owned(letter_id, user_id))
                )
                if result.rowcount == 0:
                    raise NotFoundError()

        logger.info(f"Letter deleted: id={letter_id} user={user_id}")
        return {"message": "Letter deleted successfully", "id": letter_id}
