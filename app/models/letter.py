# app/models/letter.py
"""
Recommendation letter model
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from .base import Base, utcnow

class Letter(Base):
    __tablename__ = "letter_TB"

    LETTER_ID = Column(Integer, primary_key=True, autoincrement=True)
    USER_ID = Column(String(36), ForeignKey('user_TB.USER_ID', ondelete="CASCADE"), nullable=False, index=True)

    # letter context
    APPLICANT_NAME = Column(String(200), nullable=False)
    RELATIONSHIP = Column(Text, nullable=False)
    DURATION_KNOWN = Column(String(100), nullable=False)
    INSTITUTION = Column(String(200), nullable=False)
    TARGET_PROGRAM = Column(String(200), nullable=False)
    TARGET_INSTITUTION = Column(String(200), nullable=False)
    FIELD_DOMAIN = Column(String(200), nullable=False)
    OBSERVED_QUALITIES = Column(Text, nullable=False)
    ACHIEVEMENTS = Column(Text, nullable=False)
    SOFT_TRAITS = Column(Text, nullable=False)
    ANECDOTE = Column(Text)

    # referrer
    REFERRER_NAME = Column(String(200), nullable=False)
    REFERRER_TITLE = Column(String(200), nullable=False)
    REFERRER_EMAIL = Column(String(200), nullable=False)

    # style
    TONE = Column(String(50), nullable=False)
    LOR_TYPE = Column(String(50), nullable=False)
    RECOMMENDATION_STRENGTH = Column(String(50), nullable=False)

    CONTENT = Column(Text)
    CREATED_AT = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    UPDATED_AT = Column(DateTime(timezone=True), default=utcnow, nullable=False)
