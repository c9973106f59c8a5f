"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from careers.api import api_router
    app.include_router(api_router, prefix="/api")
"""

from careers.api.routes import api_router

__all__ = ["api_router"]
