"""
Hardware router package.

Exports the routers for the asset inventory and client assignments.
"""

from .assets_router import router
from .assignments_router import router as assignments_router

__all__ = ["router", "assignments_router"]
