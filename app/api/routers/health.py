"""
app/api/routers/health.py

Liveness endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.spend_import import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
    return HealthResponse(ok=True)
