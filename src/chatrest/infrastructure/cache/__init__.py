"""Entity caches."""

from chatrest.infrastructure.cache.memory_cache import InMemoryOverwriteCache

__all__ = ["InMemoryOverwriteCache"]
