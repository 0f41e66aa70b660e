# app/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from app import __version__
from app.api import generate, letter
from app.chains.letter_chain import LetterChain
from app.config import Settings, settings
from app.schemas.commons_schemas import ErrorResponse, HealthResponse
from app.services.auth_service import SessionGate
from app.services.generation_service import GenerationClient
from app.services.letter_store import LetterStore
from app.utils.errors import FieldValidationError, InternalError, LetterServiceError
from app.utils.logger import setup_logger

# logger setup
logger = setup_logger()


def _error_response(exc: LetterServiceError) -> JSONResponse:
    body = ErrorResponse(**exc.to_dict()).model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=body)


# framework-raised statuses (unknown route, wrong method, ...)
HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store and wire services for the process lifetime"""
        logger.info("Recommendation Letter Service starting")
        logger.info(f"Debug mode: {app_settings.debug}")

        store = LetterStore(app_settings.database_url, echo=app_settings.debug)
        await store.create_tables()

        client = GenerationClient(
            api_key=app_settings.gemini_api_key,
            model=app_settings.gemini_model,
            base_url=app_settings.gemini_base_url
        )
        if not client.api_key:
            logger.warning("GEMINI_API_KEY not set - generation requests will fail")

        app.state.settings = app_settings
        app.state.letter_store = store
        app.state.session_gate = SessionGate(store)
        app.state.letter_chain = LetterChain(client)
        try:
            yield
        finally:
            logger.info("Recommendation Letter Service stopping")
            await store.close()

    app = FastAPI(
        lifespan=lifespan,
        title="Recommendation Letter Service",
        description="LLM-drafted letters of recommendation with per-user storage and PDF/DOCX export",
        version=__version__,
        debug=app_settings.debug
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LetterServiceError)
    async def letter_service_error_handler(request: Request, exc: LetterServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message} {exc.details or ''}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        body = ErrorResponse(
            error=str(exc.detail),
            code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        ).model_dump(exclude_none=True)
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
            for error in exc.errors()
        ]
        return _error_response(FieldValidationError("Invalid request", details=errors))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return _error_response(InternalError(f"Internal server error: {exc}"))

    # routers
    app.include_router(letter.router, prefix="/api")
    app.include_router(generate.router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "service": "Recommendation Letter Service",
            "version": __version__,
            "status": "running",
            "features": [
                "Letter drafting via Gemini",
                "Per-user letter storage",
                "PDF / DOCX export"
            ]
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        database = "ok"
        try:
            async with request.app.state.letter_store.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Health check database failure: {e}")
            database = "unavailable"
        return HealthResponse(
            status="healthy" if database == "ok" else "degraded",
            database=database,
            generation_configured=bool(app_settings.gemini_api_key)
        )

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
