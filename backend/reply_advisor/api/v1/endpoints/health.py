from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from reply_advisor.config import settings

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "reply-advisor-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    corpus_dir = settings.corpus_dir
    corpus_files = len(list(corpus_dir.glob("*.txt"))) if corpus_dir.is_dir() else 0

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "ai_service": "configured" if settings.openai_api_key else "missing_api_key",
            "model": settings.reply_model,
            "corpus_files": corpus_files,
            "manual_present": (corpus_dir / settings.corpus_manual_filename).is_file(),
            "api_prefix": settings.api_prefix
        }
    )
