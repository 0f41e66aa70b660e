# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Database (sqlite+aiosqlite for local, mysql+aiomysql for deployment)
    database_url: str = "sqlite+aiosqlite:///./lor_letters.db"

    # Auth provider session cookie
    session_cookie_name: str = "better-auth.session_token"

    # App Settings
    cors_origins: List[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"

settings = Settings()
