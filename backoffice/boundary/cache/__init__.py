"""In-process caching adapters."""

from backoffice.boundary.cache.memory_cache import MemoryTTLCache, get_data_cache

__all__ = ["MemoryTTLCache", "get_data_cache"]
