"""
app/api/routers package marker.
"""

from app.api.routers.health import router as health_router
from app.api.routers.imports import router as imports_router

__all__ = [
    "health_router",
    "imports_router",
]
