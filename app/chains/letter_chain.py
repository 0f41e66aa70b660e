from typing import Dict
import time

from langchain_core.prompts import PromptTemplate

from app.utils.logger import logger
from app.schemas.letter_schemas import LetterCreate
from app.services.generation_service import GenerationClient
from app.prompts.letter_prompt import LetterPrompts


_LETTER_PROMPT = PromptTemplate.from_template(LetterPrompts.RECOMMENDATION_LETTER)


def build_prompt_input(fields: LetterCreate) -> Dict[str, str]:
    values = fields.model_dump(exclude={"content", "anecdote"})
    values["anecdote_line"] = (
        LetterPrompts.ANECDOTE_LINE.format(anecdote=fields.anecdote) if fields.anecdote else ""
    )
    return values


def build_prompt(fields: LetterCreate) -> str:
    """Render the generation prompt; same fields always give the same text"""
    return _LETTER_PROMPT.format(**build_prompt_input(fields))


class LetterChain:
    def __init__(self, client: GenerationClient):
        self.client = client

    async def generate_letter(self, fields: LetterCreate) -> str:
        start_time = time.time()
        prompt = build_prompt(fields)
        content = await self.client.generate(prompt)
        logger.info(
            f"Letter drafted for {fields.applicant_name} "
            f"({len(content)} chars, {round(time.time() - start_time, 2)}s)"
        )
        return content
