"""
Contracts router package.

Exports the routers for contracts and their service scopes.
"""

from .contracts_router import router
from .service_scopes_router import router as service_scopes_router

__all__ = ["router", "service_scopes_router"]
