"""
Models package
SQLAlchemy models and engine construction
"""

from .base import Base, build_engine, build_session_factory, utcnow
from .user import User
from .auth import AuthSession
from .letter import Letter

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "utcnow",
    "User",
    "AuthSession",
    "Letter",
]
