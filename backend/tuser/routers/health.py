from __future__ import annotations

from fastapi import APIRouter

from ..settings import settings

router = APIRouter()


@router.get("/", tags=["health"])
def health():
    return {
        "message": "tuser Slack command",
        "version": "0.1.0",
        "status": "running",
        "environment": settings.normalized_environment,
        "endpoints": ["POST /slack/commands"],
    }
