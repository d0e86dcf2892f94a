"""HTTP dispatchers."""

from chatrest.infrastructure.http.httpx_dispatcher import HttpxDispatcher

__all__ = ["HttpxDispatcher"]
