"""
User model (owned by the auth provider, read-only here)
"""

from sqlalchemy import Column, String, DateTime
from .base import Base, utcnow

class User(Base):
    __tablename__ = "user_TB"

    USER_ID = Column(String(36), primary_key=True)
    NAME = Column(String(100), nullable=False)
    EMAIL = Column(String(100), unique=True, nullable=False)
    CREATED_AT = Column(DateTime(timezone=True), default=utcnow, nullable=False)
