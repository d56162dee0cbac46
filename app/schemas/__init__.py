"""
app/schemas package marker.
"""

from app.schemas.spend_import import DailyTotalResponse, HealthResponse, ImportResultResponse

__all__ = [
    "DailyTotalResponse",
    "HealthResponse",
    "ImportResultResponse",
]
