"""
Clients router package.

Exports the routers for client management and the client overview.
"""

from .clients_router import router
from .overview_router import router as overview_router

__all__ = ["router", "overview_router"]
