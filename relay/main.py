"""
FastAPI application for the DSA Coach relay.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from coach.complexity import extract_complexity
from coach.models import InteractionRequest
from coach.prompts import build_prompt
from providers.gemini_provider import GeminiProvider
from relay import __version__
from relay.config import settings, logger
from relay.errors import classify_upstream_error
from relay.models import AnalyzeResponse, ErrorResponse

TEST_PROMPT = "Say hello in one sentence."

interaction_adapter = TypeAdapter(InteractionRequest)


@lru_cache()
def get_provider() -> GeminiProvider:
    return GeminiProvider(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("DSA Coach Relay Starting...")
    logger.info(f"Model: {settings.GEMINI_MODEL}")
    logger.info(f"Server: {settings.HOST}:{settings.PORT}")
    logger.info(
        f"Documented rate limits: {settings.REQUESTS_PER_MINUTE} req/min, "
        f"{settings.REQUESTS_PER_DAY} req/day"
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="DSA Coach Relay",
    description="Forwards DSA coaching prompts to Gemini",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

router = APIRouter()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "DSA Coach Relay",
        "version": __version__,
        "status": "running",
        "model": settings.GEMINI_MODEL,
        "endpoints": {
            "health": "/api/health",
            "analyze": "/api/analyze (POST)",
            "test": "/api/test",
            "limits": "/api/limits",
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "model": settings.GEMINI_MODEL,
        "free": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/limits")
async def limits():
    """Documented free-tier limits. Informational only."""
    return {
        "model": settings.GEMINI_MODEL,
        "freeTier": {
            "requestsPerMinute": settings.REQUESTS_PER_MINUTE,
            "requestsPerDay": settings.REQUESTS_PER_DAY,
            "cost": "FREE",
        },
        "enforced": False,
        "tips": [
            "Be specific in your questions to get better responses",
            "Combine multiple questions in one request to save API calls",
            "The coach is designed to guide, not give direct solutions",
        ],
    }


@router.get("/test")
async def test_model(provider: GeminiProvider = Depends(get_provider)):
    """Round-trip one trivial prompt to confirm credentials."""
    try:
        text = await provider.generate_text(TEST_PROMPT)
    except Exception as e:
        logger.error(f"Gemini API test failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Gemini API test failed",
                "error": str(e) or type(e).__name__,
            },
        )

    return {
        "status": "success",
        "message": "Gemini API is working!",
        "testResponse": text,
        "model": provider.get_model_name(),
    }


@router.post("/analyze", response_model=AnalyzeResponse, responses={
    401: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})
async def analyze(request: Request, provider: GeminiProvider = Depends(get_provider)):
    """
    Coach the user on an approach, a piece of code or a chat follow-up.

    Body: {type, problem, approach|code|message, history}
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": f"Invalid JSON: {e}", "input": None}]
        )
    try:
        interaction = interaction_adapter.validate_python(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    start_time = time.time()
    logger.info(f"Processing {interaction.type} request for problem: {interaction.problem.title}")

    prompt = build_prompt(interaction)
    try:
        text = await provider.generate_text(prompt)
    except Exception as e:
        status, error = classify_upstream_error(e)
        logger.error(f"Gemini API error ({status}) after {time.time() - start_time:.3f}s: {e}")
        return JSONResponse(status_code=status, content=error.model_dump(exclude_none=True))

    complexity = extract_complexity(text)
    logger.info(
        f"Generated response ({len(text)} chars) in {time.time() - start_time:.3f}s - "
        f"{complexity.time}, {complexity.space}"
    )

    return AnalyzeResponse(
        response=text,
        complexity=complexity,
        model=provider.get_model_name(),
        timestamp=datetime.now(timezone.utc),
    )


app.include_router(router)
app.include_router(router, prefix="/api")
