"""
API Routers package.

Each module contains a FastAPI router for a specific domain.
"""

from .catalogs import router as catalogs_router
from .client_requests import router as client_requests_router
from .match import router as match_router
from .ai import router as ai_router

__all__ = [
    "catalogs_router",
    "client_requests_router",
    "match_router",
    "ai_router",
]
