"""
Login session model
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from .base import Base, utcnow

class AuthSession(Base):
    __tablename__ = "session_TB"

    SESSION_ID = Column(String(36), primary_key=True)
    TOKEN = Column(String(128), unique=True, nullable=False)
    USER_ID = Column(String(36), ForeignKey('user_TB.USER_ID', ondelete="CASCADE"), nullable=False)
    EXPIRES_AT = Column(DateTime(timezone=True), nullable=False)
    CREATED_AT = Column(DateTime(timezone=True), default=utcnow, nullable=False)
