# app/services/generation_service.py
import asyncio
from typing import Any, Dict, Optional, Tuple

import aiohttp

from app.utils.errors import ApiKeyMissingError, GenerationError
from app.utils.logger import logger

FALLBACK_TEXT = "Failed to generate content"

GENERATION_CONFIG = {
    "temperature": 0.8,
    "maxOutputTokens": 4096,
    "topP": 0.95,
    "topK": 40,
}


class GenerationClient:
    """Single-shot Gemini generateContent client"""

    def __init__(self, api_key: Optional[str], model: str, base_url: str):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": dict(GENERATION_CONFIG),
        }

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ApiKeyMissingError()

        logger.info(f"Generation request: model={self.model} prompt_chars={len(prompt)}")
        try:
            status, payload = await self._post(self.build_body(prompt))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Generation transport failure: {e!r}")
            raise GenerationError(details=str(e) or type(e).__name__)

        if status != 200:
            logger.error(f"Gemini API error: {status} - {payload}")
            raise GenerationError(details=payload)

        return self.extract_text(payload)

    async def _post(self, body: Dict[str, Any]) -> Tuple[int, Any]:
        headers = {"Content-Type": "application/json"}
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.endpoint,
                params={"key": self.api_key},
                headers=headers,
                json=body
            ) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = await response.text()
                return response.status, payload

    @staticmethod
    def extract_text(payload: Any) -> str:
        """First candidate's first text part, or the fallback"""
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return FALLBACK_TEXT
        return text or FALLBACK_TEXT
