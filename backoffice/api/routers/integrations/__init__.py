"""
Integrations router package.

Exports the admin router for data sources and queries, and the data
router that runs named queries.
"""

from .admin_router import router
from .data_router import router as data_router

__all__ = ["router", "data_router"]
